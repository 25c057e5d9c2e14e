"""
The leaves found on the proposition tree.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Collection, Iterator, Tuple

__all__ = ['Kind', 'Logic', 'Proposition', 'Constant', 'Variable',
           'Negation', 'Operator', 'TRUE', 'FALSE', 'conjunction',
           'disjunction', 'implication', 'subterms', 'wrap', 'format_prop',
           'FWD_MARKS', 'BACK_MARKS']

class Kind(Enum):
    """Variants of propositions, valued by their rank.
    The lower the rank, the tighter the variant binds.
    """
    TRUE = 1
    FALSE = 2
    VARIABLE = 3
    NEGATION = 4
    AND = 5
    OR = 6
    IMPLIES = 7

class Logic(Enum):
    """Binary logic operators, valued by their display glyph."""
    AND = '∧'
    OR = '∨'
    IMPLIES = '→'

    @property
    def kind(self) -> Kind:
        """The proposition variant built with this operator."""
        return Kind[self.name]

    @property
    def keyword(self) -> str:
        """The ASCII keyword used in formula text."""
        return self.name.lower()

    @property
    def right_assoc(self) -> bool:
        """Only ``implies`` groups to the right."""
        return self is Logic.IMPLIES

# Propositions themselves

class Proposition:
    """
    All constants, variables, negations and operators are propositions.
    Equality is structural; identity is what back-references compare.
    """
    kind: Kind

    def __str__(self):
        return format_prop(self)

@dataclass(frozen=True)
class Constant(Proposition):
    """``T`` and ``F``."""
    value: bool

    @property
    def kind(self) -> Kind:
        return Kind.TRUE if self.value else Kind.FALSE

TRUE = Constant(True)
FALSE = Constant(False)

@dataclass(frozen=True)
class Variable(Proposition):
    """``P``, ``Q``, ``Rain2``: a capital letter followed by letters/digits."""
    name: str

    @property
    def kind(self) -> Kind:
        return Kind.VARIABLE

@dataclass(frozen=True)
class Negation(Proposition):
    """A proposition preceded by ``not`` is a proposition."""
    arg: Proposition

    @property
    def kind(self) -> Kind:
        return Kind.NEGATION

@dataclass(frozen=True)
class Operator(Proposition):
    """
    If ``x`` and ``y`` are propositions, then so are
    ``x and y``, ``x or y`` and ``x implies y``.
    """
    operator: Logic
    left: Proposition
    right: Proposition

    @property
    def kind(self) -> Kind:
        return self.operator.kind

def conjunction(left: Proposition, right: Proposition) -> Operator:
    """``left and right``"""
    return Operator(Logic.AND, left, right)

def disjunction(left: Proposition, right: Proposition) -> Operator:
    """``left or right``"""
    return Operator(Logic.OR, left, right)

def implication(left: Proposition, right: Proposition) -> Operator:
    """``left implies right``"""
    return Operator(Logic.IMPLIES, left, right)

def subterms(prop: Proposition) -> Iterator[Proposition]:
    """Yield every node of the tree, root first, then left before right."""
    yield prop
    if isinstance(prop, Negation):
        yield from subterms(prop.arg)
    elif isinstance(prop, Operator):
        yield from subterms(prop.left)
        yield from subterms(prop.right)

def wrap(child: Proposition, parent: Kind, right: bool) -> bool:
    """Whether ``child`` needs parentheses as an operand of ``parent``.
    ``right`` says which side of a binary parent the child sits on.
    """
    if child.kind.value != parent.value:
        return child.kind.value > parent.value
    if parent is Kind.NEGATION:
        return False # not not P
    # same operator: parenthesize against the associativity
    return right != (parent is Kind.IMPLIES)

# Pretty printing

FWD_MARKS: Tuple[str, str] = ('[', ']')
BACK_MARKS: Tuple[str, str] = ('{', '}')

def format_prop(prop: Proposition,
                fwd: Collection[Proposition] = (),
                back: Collection[Proposition] = (),
                fwd_marks: Tuple[str, str] = FWD_MARKS,
                back_marks: Tuple[str, str] = BACK_MARKS) -> str:
    """Pretty-print with Unicode glyphs and minimal parentheses.
    Sub-propositions that are (by identity) in ``fwd`` or ``back``
    are surrounded by the corresponding markers.
    """
    def fmt(node: Proposition, parent: Kind | None, right: bool) -> str:
        if node.kind is Kind.TRUE:
            text = 'T'
        elif node.kind is Kind.FALSE:
            text = 'F'
        elif isinstance(node, Variable):
            text = node.name
        elif isinstance(node, Negation):
            text = '¬' + fmt(node.arg, Kind.NEGATION, True)
        elif isinstance(node, Operator):
            text = '{} {} {}'.format(
                fmt(node.left, node.kind, False),
                node.operator.value,
                fmt(node.right, node.kind, True),
            )
        else:
            raise TypeError(f'not a proposition: {node!r}')
        if any(node is p for p in fwd):
            text = fwd_marks[0] + text + fwd_marks[1]
        if any(node is p for p in back):
            text = back_marks[0] + text + back_marks[1]
        if parent is not None and wrap(node, parent, right):
            text = '(' + text + ')'
        return text
    return fmt(prop, None, False)
