import numpy
from scidat.testing import TestCase
from scidat import quantities
from scidat.quantities import registry
from scidat.exceptions import UnrecognizedSymbolError


class lookup(TestCase):

    def test_unprefixed(self):
        self.assertEqual(quantities.lookup('m'), registry.meter)
        self.assertEqual(quantities.lookup('meter'), registry.meter)
        self.assertEqual(quantities.lookup('Pa'), registry.pascal)

    def test_prefixed(self):
        self.assertEqual(quantities.lookup('km'), registry.kilometer)
        self.assertEqual(quantities.lookup('hPa'), registry.hectopascal)
        self.assertEqual(quantities.lookup('mm'), registry.millimeter)

    def test_micro_glyphs(self):
        self.assertEqual(quantities.lookup('μm'), registry.micrometer)
        self.assertEqual(quantities.lookup('µm'), registry.micrometer)

    def test_ascii_micro_not_a_prefix(self):
        with self.assertRaises(UnrecognizedSymbolError) as cm:
            quantities.lookup('um', 3, 'm * um')
        self.assertEqual(cm.exception.token, 'um')
        self.assertEqual(cm.exception.position, 3)
        self.assertEqual(cm.exception.expression, 'm * um')

    def test_unknown(self):
        with self.assertRaises(UnrecognizedSymbolError):
            quantities.lookup('bogus')

    def test_unprefixed_before_prefixed(self):
        # `min` is a minute, not a milli-inch
        self.assertEqual(quantities.lookup('min'), registry.minute)


class registry_definitions(TestCase):

    def test_mixing_ratios(self):
        self.assertAlmostEqual((1 * registry.ppm).to('ppb').magnitude, 1000.)
        self.assertAlmostEqual((1 * registry.ppbv).to('pptv').magnitude, 1000.)
        self.assertAlmostEqual((1 * registry.ppb).to('dimensionless').magnitude, 1e-9)

    def test_dobson(self):
        self.assertAlmostEqual((1 * registry.DU).to('millimole').magnitude, .4462)

    def test_molec(self):
        self.assertAlmostEqual((6.02214076e23 * registry.molec).to('mole').magnitude, 1.)

    def test_dimensionless(self):
        for name in 'unitless', 'mach', 'no_units':
            with self.subTest(name):
                self.assertTrue(registry.Unit(name).dimensionless)

    def test_std_m(self):
        self.assertEqual((1 * registry.std_m).to('m').magnitude, 1)


class helpers(TestCase):

    def test_is_quantity(self):
        self.assertTrue(quantities.is_quantity(1 * registry.m))
        self.assertFalse(quantities.is_quantity(1.))
        self.assertFalse(quantities.is_quantity(registry.m))

    def test_to_magnitude(self):
        self.assertEqual(quantities.to_magnitude(2 * registry.km), 2)
        self.assertAlmostEqual(quantities.to_magnitude(2 * registry.km, registry.m), 2000.)
        with self.assertRaises(TypeError):
            quantities.to_magnitude(2.)

    def test_unit_of(self):
        self.assertEqual(quantities.unit_of(2 * registry.km), registry.km)
        self.assertEqual(quantities.unit_of([2 * registry.s, 3 * registry.h]), registry.s)
        self.assertEqual(quantities.unit_of(registry.Quantity(numpy.arange(3), 'K')), registry.K)
        with self.assertRaises(ValueError):
            quantities.unit_of([])

# vim:sw=4:sts=4:et
