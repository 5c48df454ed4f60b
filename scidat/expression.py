'''Parser and evaluator for unit expressions.

The syntax of a unit expression is as follows:

*   A **symbol** is a string of characters starting with a letter, an
    underscore, ``°`` or ``%``, and continuing with letters, digits or
    underscores. Examples: ``m``, ``μg``, ``std_m``.

*   **Numbers** are denoted in the usual way. As an atom only the number
    ``1`` is meaningful, as in ``1/s``; numbers otherwise appear as exponents.

*   The operators ``*`` and ``/`` denote **multiplication** and **division**.
    Both are left associative: ``a/b*c`` is ``(a/b)*c``. An expression may
    start with ``/`` as a shorthand for ``1/``.

*   **Exponentiation** is denoted by ``^`` (or ``**``), and binds tighter than
    multiplication and division. The exponent is an optionally signed number,
    or a parenthesized signed number or fraction. Examples: ``m^2``, ``s^-1``,
    ``m^(1/2)``.

*   An expression surrounded by parentheses is a **compound expression** and
    can be used wherever a symbol can.

Evaluation is delegated to an object following the :class:`UnitOps`
protocol, so that the parser is independent of any particular unit library.
'''

from typing import NamedTuple, Optional, Protocol, TypeVar, Union
import fractions
import re

T = TypeVar('T')


class ExpressionSyntaxError(ValueError):

    def __init__(self, message: str, expression: str, position: Optional[int] = None, length: int = 1) -> None:
        lines = [message, expression]
        if position is not None:
            lines.append((' ' * position + '^' * max(1, length)).rstrip())
        super().__init__('\n'.join(lines))
        self.expression = expression
        self.position = position


class Symbol(NamedTuple):
    name: str
    position: int


class Number(NamedTuple):
    value: Union[int, float]
    position: int


class Multiply(NamedTuple):
    left: 'Node'
    right: 'Node'


class Divide(NamedTuple):
    left: 'Node'
    right: 'Node'


class Power(NamedTuple):
    base: 'Node'
    exponent: Union[int, float]


Node = Union[Symbol, Number, Multiply, Divide, Power]


class UnitOps(Protocol[T]):

    def get_unit(self, __name: str, __position: int) -> T: ...
    def from_number(self, __value: Union[int, float]) -> Optional[T]: ...
    def multiply(self, __left: T, __right: T) -> T: ...
    def divide(self, __numerator: T, __denominator: T) -> T: ...
    def power(self, __base: T, __exponent: Union[int, float]) -> T: ...


_token = re.compile(r'''
    (?P<space>\s+)
  | (?P<number>(?:[0-9]+(?:[.][0-9]*)?|[.][0-9]+)(?:[eE][+-]?[0-9]+)?)
  | (?P<symbol>(?:[^\W\d]|[°%])(?:\w|[°%])*)
  | (?P<operator>[*][*]|[-+*/^()])
''', re.VERBOSE)


class _Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(s: str):
    '''Split a unit expression into tokens, skipping whitespace.'''

    tokens = []
    position = 0
    while position < len(s):
        match = _token.match(s, position)
        if not match:
            raise ExpressionSyntaxError('Unexpected character {!r}.'.format(s[position]), s, position)
        if match.lastgroup != 'space':
            tokens.append(_Token(match.lastgroup, match.group(), position))
        position = match.end()
    tokens.append(_Token('end', '', len(s)))
    return tokens


def _to_number(text: str) -> Union[int, float]:
    try:
        return int(text)
    except ValueError:
        return float(text)


class _Parser:

    def __init__(self, s: str) -> None:
        self.s = s
        self.tokens = tokenize(s)
        self.index = 0

    @property
    def current(self) -> _Token:
        return self.tokens[self.index]

    def error(self, message: str, token: Optional[_Token] = None) -> ExpressionSyntaxError:
        token = token or self.current
        return ExpressionSyntaxError(message, self.s, token.position, len(token.text))

    def accept(self, *texts: str) -> Optional[_Token]:
        token = self.current
        if token.kind == 'operator' and token.text in texts:
            self.index += 1
            return token
        return None

    def expect(self, text: str) -> _Token:
        token = self.accept(text)
        if token is None:
            raise self.error('Expected `{}`.'.format(text))
        return token

    def parse(self) -> Node:
        if self.current.kind == 'end':
            raise self.error('Empty expression.')
        node = self.parse_product()
        if self.current.kind != 'end':
            raise self.error('Unexpected {}.'.format('`{}`'.format(self.current.text) if self.current.kind == 'operator' else self.current.kind))
        return node

    def parse_product(self) -> Node:
        # A leading slash is short for `1/`, e.g. `/s`.
        leading = self.accept('/')
        node = Divide(Number(1, leading.position), self.parse_power()) if leading else self.parse_power()
        while True:
            op = self.accept('*', '/')
            if op is None:
                return node
            right = self.parse_power()
            node = Multiply(node, right) if op.text == '*' else Divide(node, right)

    def parse_power(self) -> Node:
        base = self.parse_atom()
        if self.accept('^', '**') is None:
            return base
        return Power(base, self.parse_exponent())

    def parse_exponent(self) -> Union[int, float]:
        if self.accept('(') is None:
            return self.parse_signed_number()
        numerator = self.parse_signed_number()
        if self.accept('/'):
            denominator = self.parse_signed_number()
            if denominator == 0:
                raise self.error('Division by zero in exponent.', self.tokens[self.index-1])
            ratio = fractions.Fraction(numerator) / fractions.Fraction(denominator)
            numerator = int(ratio) if ratio.denominator == 1 else float(ratio)
        self.expect(')')
        return numerator

    def parse_signed_number(self) -> Union[int, float]:
        sign = self.accept('+', '-')
        token = self.current
        if token.kind != 'number':
            raise self.error('Expected a number.')
        self.index += 1
        value = _to_number(token.text)
        return -value if sign and sign.text == '-' else value

    def parse_atom(self) -> Node:
        token = self.current
        if token.kind == 'symbol':
            self.index += 1
            return Symbol(token.text, token.position)
        if token.kind == 'number':
            self.index += 1
            return Number(_to_number(token.text), token.position)
        if self.accept('('):
            node = self.parse_product()
            self.expect(')')
            return node
        if token.kind == 'end':
            raise self.error('Unexpected end of expression.')
        raise self.error('Expected a symbol, number or compound expression.')


def parse(s: str) -> Node:
    '''Parse a unit expression into a tree of :class:`Symbol`,
    :class:`Number`, :class:`Multiply`, :class:`Divide` and :class:`Power`
    nodes.'''

    return _Parser(s).parse()


def evaluate(s: str, ops: UnitOps[T]) -> T:
    '''Parse and evaluate a unit expression.

    Symbols are evaluated in order of appearance, so that the first failing
    symbol is the leftmost one.'''

    def _eval(node: Node) -> T:
        if isinstance(node, Symbol):
            return ops.get_unit(node.name, node.position)
        if isinstance(node, Number):
            value = ops.from_number(node.value)
            if value is None:
                raise ExpressionSyntaxError('Scale factors are not supported.', s, node.position, len(str(node.value)))
            return value
        if isinstance(node, Multiply):
            return ops.multiply(_eval(node.left), _eval(node.right))
        if isinstance(node, Divide):
            return ops.divide(_eval(node.left), _eval(node.right))
        if isinstance(node, Power):
            return ops.power(_eval(node.base), node.exponent)
        raise ValueError('unknown node {!r}'.format(node))

    return _eval(parse(s))


# vim:sw=4:sts=4:et
