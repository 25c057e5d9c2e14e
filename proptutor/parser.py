"""Contains the class that parses formula text into propositions."""
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple
from .leaves import Proposition, Constant, Variable, Negation, Operator, \
     Logic, TRUE, FALSE, wrap

__all__ = ['ParseError', 'Token', 'PropParser', 'parse', 'try_parse',
           'stringify', 'Statement', 'check_statement']

class ParseError(ValueError):
    """Parsing formula text failed."""
    def __init__(self, message, column, text):
        super().__init__(f'(text) column {column}: {text.strip()}\n{message}')
        self.column = column
        self.text = text

TOKENS = re.compile(r'''(?x)
    (?P<ws>\s+)
    | (?P<lparen>\()
    | (?P<rparen>\))
    | (?P<name>[A-Z][a-zA-Z0-9]*)
    | (?P<keyword>not|and|or|implies)
''')
KEYWORDS = {logic.keyword: logic for logic in Logic}

@dataclass(frozen=True)
class Token:
    """A lexed piece of formula text."""
    kind: str # lparen, rparen, name, not, and, or, implies, end
    text: str
    column: int

class PropParser:
    """Parse formula text into a Proposition.

    Precedence, loosest first: ``implies`` (right-associative),
    ``or`` then ``and`` (both left-associative), and prefix ``not``.
    """

    text: Optional[str] = None

    def __init__(self, text: Optional[str] = None):
        """Initialize the parser, optionally with text."""
        self.text = text
        self.tokens: List[Token] = []

    def parse(self, text: Optional[str] = None) -> Proposition:
        """Returns the proposition parsed from the text.
        Raises ParseError if the text is not exactly one proposition,
        or TypeError if no text is given or set.
        """
        if text is None:
            if self.text is None:
                raise TypeError('No text set at initialization or given in method call.')
            text = self.text
        self.tokens = list(self.tokenize(text))
        end, prop = self.prop(0, text)
        if self.tokens[end].kind != 'end':
            raise ParseError(f'unexpected {self.tokens[end].text!r}',
                             self.tokens[end].column, text)
        return prop

    def tokenize(self, text: str):
        """Split text into tokens, ending with an ``end`` token."""
        start = 0
        while start < len(text):
            match = TOKENS.match(text, start)
            if match is None:
                raise ParseError(f'invalid character {text[start]!r}',
                                 start, text)
            if match.lastgroup == 'name':
                yield Token('name', match.group(), start)
            elif match.lastgroup == 'keyword':
                yield Token(match.group(), match.group(), start)
            elif match.lastgroup != 'ws':
                yield Token(match.lastgroup, match.group(), start)
            start = match.end()
        yield Token('end', '', len(text))

    def expect(self, start: int, kind: str, text: str) -> int:
        """Consume a token of the given kind."""
        token = self.tokens[start]
        if token.kind != kind:
            what = repr(token.text) if token.text else 'end of text'
            raise ParseError(f'expected {kind}, got {what}',
                             token.column, text)
        return start + 1

    def prop(self, start: int, text: str) -> Tuple[int, Proposition]:
        """Parse an implication chain (or anything tighter)."""
        start, left = self.disjunction(start, text)
        if self.tokens[start].kind == 'implies':
            start, right = self.prop(start + 1, text)
            return start, Operator(Logic.IMPLIES, left, right)
        return start, left

    def disjunction(self, start: int, text: str) -> Tuple[int, Proposition]:
        """Parse ``x or y or ...``"""
        start, left = self.conjunction(start, text)
        while self.tokens[start].kind == 'or':
            start, right = self.conjunction(start + 1, text)
            left = Operator(Logic.OR, left, right)
        return start, left

    def conjunction(self, start: int, text: str) -> Tuple[int, Proposition]:
        """Parse ``x and y and ...``"""
        start, left = self.atom(start, text)
        while self.tokens[start].kind == 'and':
            start, right = self.atom(start + 1, text)
            left = Operator(Logic.AND, left, right)
        return start, left

    def atom(self, start: int, text: str) -> Tuple[int, Proposition]:
        """Parse negations and primitives."""
        token = self.tokens[start]
        if token.kind == 'not':
            start, arg = self.atom(start + 1, text)
            return start, Negation(arg)
        if token.kind == 'lparen':
            start, prop = self.prop(start + 1, text)
            return self.expect(start, 'rparen', text), prop
        if token.kind == 'name':
            if token.text == 'T':
                return start + 1, TRUE
            if token.text == 'F':
                return start + 1, FALSE
            return start + 1, Variable(token.text)
        what = repr(token.text) if token.text else 'end of text'
        raise ParseError(f'expected a proposition, got {what}',
                         token.column, text)

def parse(text: str) -> Proposition:
    """Parse the text into a proposition, raising ParseError on failure."""
    return PropParser().parse(text)

def try_parse(text: Optional[str]) -> Optional[Proposition]:
    """Parse the text into a proposition, or None if it isn't one."""
    if text is None:
        return None
    try:
        return parse(text)
    except ParseError:
        return None

def stringify(prop: Proposition) -> str:
    """Convert the proposition into text that parses back to it."""
    if isinstance(prop, Constant):
        return 'T' if prop.value else 'F'
    if isinstance(prop, Variable):
        return prop.name
    if isinstance(prop, Negation):
        return 'not ' + _maybe_wrap(prop.arg, prop, True)
    if isinstance(prop, Operator):
        return '{} {} {}'.format(
            _maybe_wrap(prop.left, prop, False),
            prop.operator.keyword,
            _maybe_wrap(prop.right, prop, True),
        )
    raise TypeError(f'not a proposition: {prop!r}')

def _maybe_wrap(child: Proposition, parent: Proposition, right: bool) -> str:
    if wrap(child, parent.kind, right):
        return '(' + stringify(child) + ')'
    return stringify(child)

# The statement-entry surface hands us two raw strings.

@dataclass(frozen=True)
class Statement:
    """The premise and goal a user proposes for a new proof.
    Either proposition is None if its text did not parse;
    the matching error holds the reason.
    """
    start: Optional[Proposition]
    end: Optional[Proposition]
    start_error: Optional[str] = None
    end_error: Optional[str] = None

    @property
    def valid(self) -> bool:
        """Both fields parsed."""
        return self.start is not None and self.end is not None

def check_statement(start_text: str, end_text: str) -> Statement:
    """Parse both fields independently; never raises ParseError."""
    results = []
    for text in (start_text, end_text):
        try:
            results.append((parse(text), None))
        except ParseError as exc:
            results.append((None, str(exc)))
    (start, start_error), (end, end_error) = results
    return Statement(start=start, end=end,
                     start_error=start_error, end_error=end_error)
