"""
Equivalence rules: algebraic laws that rewrite a proposition
into an equivalent one, in either direction.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple
from .leaves import Proposition, Negation, Operator, Logic, Kind, \
     TRUE, FALSE, conjunction, disjunction, implication

__all__ = ['RuleError', 'EquivRule', 'EquivVersion', 'Equivalence',
           'EQUIV_NAMES']

class RuleError(ValueError):
    """This rule can't be used this way."""
    pass

class EquivRule(IntEnum):
    """Laws of equivalence. Values are the codes used in snapshots."""
    UNKNOWN = 0
    IDENTITY = 1
    DOMINATION = 2
    IDEMPOTENCY = 3
    COMMUTATIVITY = 4
    ASSOCIATIVITY = 5
    DISTRIBUTIVITY = 6
    ABSORPTION = 7
    NEGATION = 8
    DE_MORGAN = 9
    DOUBLE_NEGATION = 10
    LAW_OF_IMPLICATION = 11
    CONTRAPOSITIVE = 12

class EquivVersion(IntEnum):
    """Which operator a right-to-left rule reintroduces."""
    UNKNOWN = 0
    AND = 1
    OR = 2

EQUIV_NAMES = {
    EquivRule.IDENTITY: 'Identity',
    EquivRule.DOMINATION: 'Domination',
    EquivRule.IDEMPOTENCY: 'Idempotency',
    EquivRule.COMMUTATIVITY: 'Commutativity',
    EquivRule.ASSOCIATIVITY: 'Associativity',
    EquivRule.DISTRIBUTIVITY: 'Distributivity',
    EquivRule.ABSORPTION: 'Absorption',
    EquivRule.NEGATION: 'Negation',
    EquivRule.DE_MORGAN: 'De Morgan',
    EquivRule.DOUBLE_NEGATION: 'Double Negation',
    EquivRule.LAW_OF_IMPLICATION: 'Law of Implication',
    EquivRule.CONTRAPOSITIVE: 'Contrapositive',
}

# Right-to-left is impossible without knowing the erased operand.
IRREVERSIBLE = frozenset({EquivRule.DOMINATION, EquivRule.ABSORPTION,
                          EquivRule.NEGATION})

def _is_op(prop: Proposition, *kinds: Kind) -> bool:
    return isinstance(prop, Operator) and prop.kind in kinds

def _is_neg(prop: Proposition) -> bool:
    return isinstance(prop, Negation)

def _rebuild(prop: Proposition, *args: Proposition) -> Proposition:
    """Same variant as ``prop``, new children."""
    if isinstance(prop, Negation):
        return Negation(args[0])
    return Operator(prop.operator, args[0], args[1])

def _children(prop: Proposition) -> Tuple[Proposition, ...]:
    if isinstance(prop, Negation):
        return (prop.arg,)
    if isinstance(prop, Operator):
        return (prop.left, prop.right)
    return ()

@dataclass(frozen=True)
class Equivalence:
    """
    An equivalence rule, applied left-to-right or right-to-left.
    Right-to-left Identity and Idempotency can't tell which operator
    to reintroduce, so ``version`` picks one.
    """
    rule: EquivRule = EquivRule.UNKNOWN
    left_to_right: bool = True
    version: EquivVersion = EquivVersion.UNKNOWN

    def __post_init__(self):
        object.__setattr__(self, 'rule', EquivRule(self.rule))
        object.__setattr__(self, 'version', EquivVersion(self.version))

    def name(self) -> str:
        """Display name of the law."""
        return EQUIV_NAMES.get(self.rule, 'Choose')

    def has_version(self) -> bool:
        """Whether a version must be chosen."""
        return not self.left_to_right and self.rule in (
            EquivRule.IDENTITY, EquivRule.IDEMPOTENCY)

    def is_complete(self) -> bool:
        """Whether all the information needed to apply the rule is set."""
        if self.rule is EquivRule.UNKNOWN:
            return False
        if self.has_version() and self.version is EquivVersion.UNKNOWN:
            return False
        return True

    # Enumerating matches

    def matches(self, prop: Proposition) -> List[Proposition]:
        """The sub-propositions where the rule applies, root first,
        then left subtree before right subtree.
        """
        result = []
        self._add_matches(prop, result)
        return result

    def _add_matches(self, prop: Proposition, result: list) -> None:
        if self.matches_at(prop):
            result.append(prop)
        for child in _children(prop):
            self._add_matches(child, result)

    def match_count(self, prop: Proposition) -> int:
        """Number of places where the rule applies."""
        return len(self.matches(prop))

    # Applying

    def apply_all(self, prop: Proposition) -> Proposition:
        """Rewrite every outermost match at once."""
        if self.matches_at(prop):
            return self.apply_at(prop)
        children = _children(prop)
        if not children:
            return prop
        return _rebuild(prop, *(self.apply_all(child) for child in children))

    def apply_once(self, prop: Proposition, match_number: int) -> Proposition:
        """Rewrite only the match with the given 0-based number."""
        return self._apply_once(prop, match_number, 0)[0]

    def _apply_once(self, prop: Proposition, match_number: int,
                    before: int) -> Tuple[Proposition, int]:
        """Returns the result and the number of matches inside ``prop``."""
        count = 1 if self.matches_at(prop) else 0
        if count and before == match_number:
            return self.apply_at(prop), 1
        children = _children(prop)
        if not children:
            return prop, count
        results = []
        for child in children:
            result, sub = self._apply_once(child, match_number, before + count)
            results.append(result)
            count += sub
        return _rebuild(prop, *results), count

    def matches_at(self, prop: Proposition) -> bool:
        """Whether the rule applies to the whole proposition."""
        if self.rule is EquivRule.UNKNOWN:
            return False
        if self.left_to_right:
            return getattr(self, '_ltr_match_' + self.rule.name.lower())(prop)
        if self.rule in IRREVERSIBLE:
            return False # cannot do these without knowing the operand
        return getattr(self, '_rtl_match_' + self.rule.name.lower())(prop)

    def apply_at(self, prop: Proposition) -> Proposition:
        """Rewrite the whole proposition, which must match."""
        if self.rule is EquivRule.UNKNOWN:
            raise RuleError('no rule chosen')
        if self.left_to_right:
            return getattr(self, '_ltr_apply_' + self.rule.name.lower())(prop)
        if self.rule in IRREVERSIBLE:
            raise RuleError(f'{self.name()} right-to-left is not allowed')
        return getattr(self, '_rtl_apply_' + self.rule.name.lower())(prop)

    # Left to right

    def _ltr_match_identity(self, prop):
        return (_is_op(prop, Kind.AND) and prop.right == TRUE
                or _is_op(prop, Kind.OR) and prop.right == FALSE)

    def _ltr_apply_identity(self, prop):
        return prop.left

    def _ltr_match_domination(self, prop):
        return (_is_op(prop, Kind.OR) and prop.right == TRUE
                or _is_op(prop, Kind.AND) and prop.right == FALSE)

    def _ltr_apply_domination(self, prop):
        return TRUE if prop.kind is Kind.OR else FALSE

    def _ltr_match_idempotency(self, prop):
        return _is_op(prop, Kind.AND, Kind.OR) and prop.left == prop.right

    def _ltr_apply_idempotency(self, prop):
        return prop.left

    def _ltr_match_commutativity(self, prop):
        return _is_op(prop, Kind.AND, Kind.OR)

    def _ltr_apply_commutativity(self, prop):
        return Operator(prop.operator, prop.right, prop.left)

    def _ltr_match_associativity(self, prop):
        return (_is_op(prop, Kind.AND, Kind.OR)
                and _is_op(prop.left, prop.kind))

    def _ltr_apply_associativity(self, prop):
        inner = prop.left
        return Operator(prop.operator, inner.left,
                        Operator(prop.operator, inner.right, prop.right))

    def _ltr_match_distributivity(self, prop):
        return (_is_op(prop, Kind.AND) and _is_op(prop.right, Kind.OR)
                or _is_op(prop, Kind.OR) and _is_op(prop.right, Kind.AND))

    def _ltr_apply_distributivity(self, prop):
        inner = prop.right
        return Operator(inner.operator,
                        Operator(prop.operator, prop.left, inner.left),
                        Operator(prop.operator, prop.left, inner.right))

    def _ltr_match_absorption(self, prop):
        return ((_is_op(prop, Kind.OR) and _is_op(prop.right, Kind.AND)
                 or _is_op(prop, Kind.AND) and _is_op(prop.right, Kind.OR))
                and prop.left == prop.right.left)

    def _ltr_apply_absorption(self, prop):
        return prop.left

    def _ltr_match_negation(self, prop):
        return (_is_op(prop, Kind.AND, Kind.OR) and _is_neg(prop.right)
                and prop.left == prop.right.arg)

    def _ltr_apply_negation(self, prop):
        return TRUE if prop.kind is Kind.OR else FALSE

    def _ltr_match_de_morgan(self, prop):
        return _is_neg(prop) and _is_op(prop.arg, Kind.AND, Kind.OR)

    def _ltr_apply_de_morgan(self, prop):
        inner = prop.arg
        dual = Logic.AND if inner.operator is Logic.OR else Logic.OR
        return Operator(dual, Negation(inner.left), Negation(inner.right))

    def _ltr_match_double_negation(self, prop):
        return _is_neg(prop) and _is_neg(prop.arg)

    def _ltr_apply_double_negation(self, prop):
        return prop.arg.arg

    def _ltr_match_law_of_implication(self, prop):
        return _is_op(prop, Kind.IMPLIES)

    def _ltr_apply_law_of_implication(self, prop):
        return disjunction(Negation(prop.left), prop.right)

    def _ltr_match_contrapositive(self, prop):
        return _is_op(prop, Kind.IMPLIES)

    def _ltr_apply_contrapositive(self, prop):
        return implication(Negation(prop.right), Negation(prop.left))

    # Right to left

    def _rtl_match_identity(self, prop):
        return self.version is not EquivVersion.UNKNOWN

    def _rtl_apply_identity(self, prop):
        if self.version is EquivVersion.AND:
            return conjunction(prop, TRUE)
        return disjunction(prop, FALSE)

    _rtl_match_idempotency = _rtl_match_identity

    def _rtl_apply_idempotency(self, prop):
        if self.version is EquivVersion.AND:
            return conjunction(prop, prop)
        return disjunction(prop, prop)

    _rtl_match_commutativity = _ltr_match_commutativity
    _rtl_apply_commutativity = _ltr_apply_commutativity

    def _rtl_match_associativity(self, prop):
        return (_is_op(prop, Kind.AND, Kind.OR)
                and _is_op(prop.right, prop.kind))

    def _rtl_apply_associativity(self, prop):
        inner = prop.right
        return Operator(prop.operator,
                        Operator(prop.operator, prop.left, inner.left),
                        inner.right)

    def _rtl_match_distributivity(self, prop):
        return (_is_op(prop, Kind.AND, Kind.OR)
                and _is_op(prop.left, Kind.AND, Kind.OR)
                and prop.left.kind is not prop.kind
                and _is_op(prop.right, prop.left.kind)
                and prop.left.left == prop.right.left)

    def _rtl_apply_distributivity(self, prop):
        first, second = prop.left, prop.right
        return Operator(first.operator, first.left,
                        Operator(prop.operator, first.right, second.right))

    def _rtl_match_de_morgan(self, prop):
        return (_is_op(prop, Kind.AND, Kind.OR)
                and _is_neg(prop.left) and _is_neg(prop.right))

    def _rtl_apply_de_morgan(self, prop):
        dual = Logic.AND if prop.operator is Logic.OR else Logic.OR
        return Negation(Operator(dual, prop.left.arg, prop.right.arg))

    def _rtl_match_double_negation(self, prop):
        return True

    def _rtl_apply_double_negation(self, prop):
        return Negation(Negation(prop))

    def _rtl_match_law_of_implication(self, prop):
        return _is_op(prop, Kind.OR) and _is_neg(prop.left)

    def _rtl_apply_law_of_implication(self, prop):
        return implication(prop.left.arg, prop.right)

    def _rtl_match_contrapositive(self, prop):
        return (_is_op(prop, Kind.IMPLIES)
                and _is_neg(prop.left) and _is_neg(prop.right))

    def _rtl_apply_contrapositive(self, prop):
        return implication(prop.right.arg, prop.left.arg)
