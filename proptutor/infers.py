"""
Inference rules of natural deduction, applied forward
(premises to conclusion) or backward (conclusion to premises).
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import List, Optional, Sequence
from .leaves import Proposition, Negation, Kind, conjunction
from .equivs import Equivalence, RuleError

__all__ = ['InferRule', 'InferVersion', 'Inference', 'INFER_NAMES']

class InferRule(IntEnum):
    """Rules of inference. Values are the codes used in snapshots."""
    UNKNOWN = 0
    DIRECT_PROOF = 1
    MODUS_PONENS = 2
    INTRO_AND = 3
    ELIM_AND = 4
    INTRO_OR = 5
    ELIM_OR = 6
    EQUIVALENCE = 7
    ASSUMPTION = 8

class InferVersion(IntEnum):
    """Which operand a rule keeps."""
    UNKNOWN = 0
    FIRST = 1
    SECOND = 2

INFER_NAMES = {
    InferRule.DIRECT_PROOF: 'Direct Proof',
    InferRule.MODUS_PONENS: 'Modus Ponens',
    InferRule.INTRO_AND: 'Intro ∧',
    InferRule.ELIM_AND: 'Elim ∧',
    InferRule.INTRO_OR: 'Intro ∨',
    InferRule.ELIM_OR: 'Elim ∨',
    InferRule.EQUIVALENCE: 'Equivalence',
    InferRule.ASSUMPTION: 'Assumption',
}

# rule: ((forward inputs, forward outputs), (backward inputs, backward outputs))
ARITY = {
    InferRule.UNKNOWN: ((0, 0), (0, 0)),
    InferRule.DIRECT_PROOF: ((1, 2), (1, 2)),
    InferRule.MODUS_PONENS: ((2, 1), (1, 2)),
    InferRule.INTRO_AND: ((2, 1), (1, 2)),
    InferRule.ELIM_AND: ((1, 2), (2, 1)),
    # backward needs the disjunction and yields the chosen disjunct
    InferRule.INTRO_OR: ((1, 2), (1, 1)),
    InferRule.ELIM_OR: ((2, 1), (1, 2)),
    InferRule.EQUIVALENCE: ((1, 1), (1, 1)),
    InferRule.ASSUMPTION: ((1, 0), (1, 0)),
}

# (rule, forward) pairs that are not implemented
UNSUPPORTED = frozenset({
    (InferRule.DIRECT_PROOF, True),
    (InferRule.ASSUMPTION, True),
    (InferRule.INTRO_OR, True),
    (InferRule.MODUS_PONENS, False),
    (InferRule.ELIM_OR, False),
})

@dataclass(frozen=True)
class Inference:
    """
    An inference rule and how it is applied.
    ``version`` is only used by forward Elim ∧ and backward Intro ∨.
    ``equiv`` and ``match_number`` are only used by Equivalence;
    a negative ``match_number`` means every match at once.
    """
    rule: InferRule = InferRule.UNKNOWN
    forward: bool = True
    version: InferVersion = InferVersion.UNKNOWN
    equiv: Optional[Equivalence] = field(default=None)
    match_number: int = -1

    def __post_init__(self):
        object.__setattr__(self, 'rule', InferRule(self.rule))
        object.__setattr__(self, 'version', InferVersion(self.version))
        if self.rule is InferRule.EQUIVALENCE:
            if self.equiv is None:
                object.__setattr__(self, 'equiv', Equivalence())
        else:
            object.__setattr__(self, 'equiv', None)

    def with_rule(self, rule: InferRule) -> Inference:
        """Copy with another rule, keeping the direction."""
        return replace(self, rule=rule)

    def name(self) -> str:
        """Display name of the rule."""
        if self.rule is InferRule.EQUIVALENCE:
            return self.equiv.name()
        return INFER_NAMES.get(self.rule, 'Choose')

    def num_inputs(self) -> int:
        """Number of propositions the rule takes."""
        return ARITY[self.rule][0 if self.forward else 1][0]

    def num_outputs(self) -> int:
        """Number of propositions the rule produces."""
        return ARITY[self.rule][0 if self.forward else 1][1]

    def num_args(self) -> int:
        """Number of argument slots a line with this rule has:
        inputs when working forward, outputs when working backward.
        """
        return self.num_inputs() if self.forward else self.num_outputs()

    def has_version(self) -> bool:
        """Whether a version must be chosen."""
        if self.forward:
            return self.num_outputs() == 2
        return self.rule is InferRule.INTRO_OR

    def is_supported(self) -> bool:
        """Whether this rule can be applied in this direction."""
        return (self.rule is not InferRule.UNKNOWN
                and (self.rule, self.forward) not in UNSUPPORTED)

    def is_complete(self) -> bool:
        """Whether all the information needed to apply the rule is set."""
        if self.rule is InferRule.UNKNOWN:
            return False
        if self.has_version() and self.version is InferVersion.UNKNOWN:
            return False
        if self.rule is InferRule.EQUIVALENCE and not self.equiv.is_complete():
            return False
        return True

    def _check(self) -> None:
        if not self.is_supported():
            direction = 'forward' if self.forward else 'backward'
            raise RuleError(f'{self.name()} {direction} is not allowed')

    def matches(self, props: Sequence[Proposition]) -> bool:
        """Whether the rule can be applied to the given proposition(s)."""
        self._check()
        if self.rule is InferRule.EQUIVALENCE:
            # no difference between directions here
            return self._matches_equivalence(props)
        if self.forward:
            return self._matches_forward(props)
        return self._matches_backward(props)

    def _matches_equivalence(self, ps):
        if len(ps) != 1:
            return False
        count = self.equiv.match_count(ps[0])
        return count > 0 and self.match_number < count

    def _matches_forward(self, ps):
        if self.rule is InferRule.MODUS_PONENS:
            return (len(ps) == 2 and ps[1].kind is Kind.IMPLIES
                    and ps[1].left == ps[0])
        if self.rule is InferRule.INTRO_AND:
            return len(ps) == 2
        if self.rule is InferRule.ELIM_AND:
            return len(ps) == 1 and ps[0].kind is Kind.AND
        if self.rule is InferRule.ELIM_OR:
            return (len(ps) == 2 and ps[0].kind is Kind.OR
                    and isinstance(ps[1], Negation)
                    and ps[0].left == ps[1].arg)
        raise RuleError(f'bad rule: {self.rule!r}')

    def _matches_backward(self, ps):
        if self.rule is InferRule.DIRECT_PROOF:
            return len(ps) == 1 and ps[0].kind is Kind.IMPLIES
        if self.rule is InferRule.INTRO_AND:
            return len(ps) == 1 and ps[0].kind is Kind.AND
        if self.rule is InferRule.ELIM_AND:
            return len(ps) == 2
        if self.rule is InferRule.INTRO_OR:
            return len(ps) == 1 and ps[0].kind is Kind.OR
        if self.rule is InferRule.ASSUMPTION:
            return True
        raise RuleError(f'bad rule: {self.rule!r}')

    def apply_forward(self, ps: Sequence[Proposition]) -> Proposition:
        """The conclusion of applying the rule to the premises."""
        self._check()
        if self.rule is InferRule.EQUIVALENCE:
            return self._apply_equivalence(ps[0])
        if not self.forward:
            raise RuleError('not a forward rule')
        if self.rule is InferRule.MODUS_PONENS:
            return ps[1].right
        if self.rule is InferRule.INTRO_AND:
            return conjunction(ps[0], ps[1])
        if self.rule is InferRule.ELIM_AND:
            if self.version is InferVersion.FIRST:
                return ps[0].left
            return ps[0].right
        if self.rule is InferRule.ELIM_OR:
            return ps[0].right
        raise RuleError(f'bad rule: {self.rule!r}')

    def apply_backward(self, ps: Sequence[Proposition]) -> List[Proposition]:
        """The premises needed to conclude the given proposition."""
        self._check()
        if self.forward:
            raise RuleError('not a backward rule')
        if self.rule is InferRule.ASSUMPTION:
            return []
        if self.rule in (InferRule.DIRECT_PROOF, InferRule.INTRO_AND):
            return [ps[0].left, ps[0].right]
        if self.rule is InferRule.ELIM_AND:
            return [conjunction(ps[0], ps[1])]
        if self.rule is InferRule.INTRO_OR:
            if self.version is InferVersion.FIRST:
                return [ps[0].left]
            return [ps[0].right]
        if self.rule is InferRule.EQUIVALENCE:
            return [self._apply_equivalence(ps[0])]
        raise RuleError(f'bad rule: {self.rule!r}')

    def _apply_equivalence(self, prop: Proposition) -> Proposition:
        if self.match_number < 0:
            return self.equiv.apply_all(prop)
        return self.equiv.apply_once(prop, self.match_number)
