import os
import tempfile
import threading
from scidat.testing import TestCase
from scidat import aliases
from scidat.exceptions import ConfigFormatError


class parse_config(TestCase):

    def test_single(self):
        directives = aliases.parse_config(['deg: degree, degrees'])
        self.assertEqual(directives, [aliases.Directive('deg', ('degree', 'degrees'), 'append', 1, '<string>')])

    def test_mode(self):
        directive, = aliases.parse_config(['deg: degree :Replace '])
        self.assertEqual(directive.mode, 'replace')

    def test_whitespace(self):
        directive, = aliases.parse_config(['  s :sec ,  secs  '])
        self.assertEqual(directive.canonical, 's')
        self.assertEqual(directive.aliases, ('sec', 'secs'))

    def test_trailing_comma(self):
        directive, = aliases.parse_config(['s: sec, secs,'])
        self.assertEqual(directive.aliases, ('sec', 'secs'))

    def test_skip_blank_and_comments(self):
        directives = aliases.parse_config(['# comment', '', '   ', 's: sec'], source='test.txt')
        self.assertEqual(len(directives), 1)
        self.assertEqual(directives[0].lineno, 4)
        self.assertEqual(directives[0].source, 'test.txt')

    def test_missing_colon(self):
        with self.assertRaises(ConfigFormatError) as cm:
            aliases.parse_config(['s: sec', 'no colon here'], source='test.txt')
        self.assertEqual(cm.exception.lineno, 2)
        self.assertEqual(cm.exception.source, 'test.txt')
        self.assertTrue(str(cm.exception).startswith('test.txt, line 2:'))

    def test_empty_canonical(self):
        with self.assertRaises(ConfigFormatError):
            aliases.parse_config([': sec'])

    def test_invalid_mode(self):
        with self.assertRaisesRegex(ConfigFormatError, 'invalid mode'):
            aliases.parse_config(['s: sec: overwrite'])

    def test_too_many_fields(self):
        with self.assertRaises(ConfigFormatError):
            aliases.parse_config(['s: sec: append: extra'])

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            aliases.parse_config(['nonsense'])


class AliasTable(TestCase):

    def test_load_lines(self):
        table = aliases.AliasTable.load(['deg: degree, degrees', 's: sec'])
        self.assertEqual(table.aliases_for('deg'), ('degree', 'degrees'))
        self.assertEqual(table.aliases_for('s'), ('sec',))
        self.assertEqual(table.aliases_for('K'), ())
        self.assertEqual(len(table), 2)
        self.assertEqual(list(table), ['deg', 's'])
        self.assertIn('deg', table)
        self.assertNotIn('K', table)

    def test_load_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'aliases.txt')
            with open(path, 'w', encoding='utf-8') as f:
                f.write('deg: degree, °\n')
            table = aliases.AliasTable.load(path)
        self.assertEqual(table.aliases_for('deg'), ('degree', '°'))

    def test_append(self):
        table = aliases.AliasTable.load(['deg: degree', 'deg: degrees'])
        self.assertEqual(table.aliases_for('deg'), ('degree', 'degrees'))

    def test_duplicates_retained(self):
        table = aliases.AliasTable.load(['deg: degree', 'deg: degree'])
        self.assertEqual(table.aliases_for('deg'), ('degree', 'degree'))

    def test_replace_new(self):
        with self.assertRaises(AssertionError):
            with self.assertLogs('scidat', 'WARNING'):
                table = aliases.AliasTable.load(['deg: degree: replace'])
        self.assertEqual(table.aliases_for('deg'), ('degree',))

    def test_replace_existing(self):
        table = aliases.AliasTable.load(['deg: degree, degs'])
        with self.assertLogs('scidat', 'WARNING') as cm:
            table.read(['', 'deg: deg.: replace'])
        self.assertEqual(table.aliases_for('deg'), ('deg.',))
        self.assertEqual(len(cm.output), 1)
        self.assertIn('Replacing existing aliases for unit "deg" (degree, degs)', cm.output[0])
        self.assertIn('line 2 of <string> (deg.)', cm.output[0])

    def test_replace_quiet(self):
        table = aliases.AliasTable.load(['deg: degree'])
        with self.assertRaises(AssertionError):
            with self.assertLogs('scidat', 'WARNING'):
                table.read(['deg: degs: replace'], verbose=-1)
        self.assertEqual(table.aliases_for('deg'), ('degs',))

    def test_init(self):
        table = aliases.AliasTable({'deg': ['degree'], 's': 'sec'})
        self.assertEqual(table.all_entries(), (('deg', ('degree',)), ('s', ('sec',))))

    def test_snapshot(self):
        table = aliases.AliasTable({'deg': ['degree']})
        entries = table.all_entries()
        table.read(['deg: degrees'])
        self.assertEqual(entries, (('deg', ('degree',)),))

    def test_copy(self):
        table = aliases.AliasTable({'deg': ['degree']})
        copy = table.copy()
        self.assertEqual(copy, table)
        copy.read(['deg: degrees'])
        self.assertNotEqual(copy, table)
        self.assertEqual(table.aliases_for('deg'), ('degree',))

    def test_describe(self):
        table = aliases.AliasTable({'deg': ['degree', 'degrees']})
        self.assertEqual(table.describe(), ['"deg" will be substituted for: "degree", "degrees"'])

    def test_concurrent_append(self):
        table = aliases.AliasTable()
        def append(i):
            for j in range(50):
                aliases.merge_into(table, [('x', ['a{}_{}'.format(i, j)])])
        threads = [threading.Thread(target=append, args=(i,)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(table.aliases_for('x')), 200)


class merge_into(TestCase):

    def test_table(self):
        table = aliases.AliasTable({'deg': ['degree']})
        retval = aliases.merge_into(table, aliases.AliasTable({'deg': ['degs'], 's': ['sec']}))
        self.assertIs(retval, table)
        self.assertEqual(table.all_entries(), (('deg', ('degree', 'degs')), ('s', ('sec',))))

    def test_mapping(self):
        table = aliases.merge_into(aliases.AliasTable(), {'s': 'sec'})
        self.assertEqual(table.aliases_for('s'), ('sec',))

    def test_directives(self):
        table = aliases.AliasTable({'deg': ['degree']})
        aliases.merge_into(table, aliases.parse_config(['deg: degs: replace']), verbose=-1)
        self.assertEqual(table.aliases_for('deg'), ('degs',))


class defaults(TestCase):

    def test_entries(self):
        self.assertIn('degree', aliases.DEFAULT_ALIASES.aliases_for('deg'))
        self.assertIn('°', aliases.DEFAULT_ALIASES.aliases_for('deg'))
        self.assertIn('mbar', aliases.DEFAULT_ALIASES.aliases_for('hPa'))
        self.assertIn('ppbV', aliases.DEFAULT_ALIASES.aliases_for('ppbv'))

    def test_list(self):
        with self.assertLogs('scidat', 'INFO') as cm:
            aliases.list_default_unit_aliases()
        self.assertEqual(len(cm.output), len(aliases.DEFAULT_ALIASES))
        self.assertTrue(any('"deg" will be substituted for: ' in line for line in cm.output))

# vim:sw=4:sts=4:et
