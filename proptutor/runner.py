"""
Validate whole proofs.
"""
from __future__ import annotations
import logging
from typing import Iterator, List, Mapping, Optional, Union
from .leaves import Kind, Negation, Proposition
from .labels import Label, format_label
from .infers import InferRule, InferVersion
from .proof import Line, ProofState
from .snapshot import decode_proof, loads

__all__ = ['ProofRunner', 'ProofMistake', 'IncompleteLine', 'InvalidRule',
           'NotARule', 'InvalidReferral', 'InvalidSubproof', 'UnprovedGoal']

logger = logging.getLogger(__name__)

class ProofMistake(Exception):
    """Base class for mistakes in a proof."""
    pass

class IncompleteLine(ProofMistake):
    """The rule or its arguments are still being chosen."""
    pass

class InvalidRule(ValueError, ProofMistake):
    """This isn't the right rule."""
    pass

class NotARule(InvalidRule):
    """This rule can't be used in this direction."""
    pass

class InvalidReferral(ValueError, ProofMistake):
    """The line referred to is not correct for this derivation."""
    pass

class InvalidSubproof(ProofMistake):
    """Incorrect use of subproofs."""
    pass

class UnprovedGoal(ProofMistake):
    """The proof does not go from the premise to the goal."""
    pass

ProofLike = Union[str, Mapping, ProofState, None]

class ProofRunner:
    """Validate proofs."""

    state = None

    def __init__(self, state: ProofLike = None):
        """Initialize the runner, optionally with a proof to validate.
        (A string is a JSON snapshot; a mapping is a decoded one.)
        """
        state = self.load(state)
        if state is not None:
            self.state = state

    @staticmethod
    def load(state: ProofLike) -> Optional[ProofState]:
        if isinstance(state, str):
            return loads(state)
        if isinstance(state, Mapping):
            return decode_proof(state)
        return state

    def validate(self, state: ProofLike = None) -> None:
        """Validates every line of the proof, then that it proves the goal.
        If no issues, returns None.
        Otherwise, raises an exception tailored to the rule.
        ``state`` can be set at initialization or passed at call.
        """
        state = self.load(state) or self.state
        self.state = state
        for i in range(len(state.lines)):
            try:
                self.check_line(i)
            except ProofMistake as exc:
                raise self.tag(exc, i)
        self.check_goal()

    def mistakes(self, state: ProofLike = None) -> Iterator[ProofMistake]:
        """Like ``validate``, but yields every mistake instead of
        raising the first one.
        """
        state = self.load(state) or self.state
        self.state = state
        for i in range(len(state.lines)):
            try:
                self.check_line(i)
            except ProofMistake as exc:
                yield self.tag(exc, i)
        try:
            self.check_goal()
        except ProofMistake as exc:
            yield exc

    def tag(self, exc: ProofMistake, i: int) -> ProofMistake:
        """Prefix the message with the line it is about."""
        label = format_label(self.state.labels[i])
        line = self.state.lines[i]
        exc.args = (f"line {label}: '{line.prop}' " + exc.args[0], *exc.args[1:])
        logger.debug('%s', exc.args[0])
        return exc

    def check_goal(self) -> None:
        """The proof starts by assuming the premise and ends with the goal."""
        state = self.state
        if not state.lines:
            raise UnprovedGoal('the proof is empty')
        first = state.lines[0]
        if first.rule is not InferRule.ASSUMPTION or first.prop != state.start:
            raise UnprovedGoal(f'the proof must start by assuming {state.start}')
        last = state.lines[-1]
        if len(state.labels[-1]) != 1 or last.prop != state.end:
            raise UnprovedGoal(f'the proof must end with {state.end}')

    def check_line(self, i: int) -> None:
        line = self.state.lines[i]
        if not line.infer.is_complete():
            raise IncompleteLine(f'{line.infer.name()} is incomplete')
        if not line.infer.is_supported():
            direction = 'forward' if line.forward else 'backward'
            raise NotARule(f'{line.infer.name()} can\'t be used {direction}')
        getattr(self, 'rule_' + line.rule.name.lower(), self.rule_invalid)(i, line)

    # Arguments

    def inputs(self, i: int, line: Line) -> List[Proposition]:
        """The propositions a forward line cites, which must be in scope."""
        here = self.state.labels[i]
        visible = self.state.labels_before(here)
        props = []
        for k, arg in enumerate(line.args):
            if arg is None:
                raise IncompleteLine(f'missing argument {k + 1}')
            if arg not in self.state.labels:
                raise InvalidReferral(f'no line {format_label(arg)}')
            if arg not in visible:
                raise InvalidReferral(f'line {format_label(arg)} is not in scope')
            props.append(self.state.find_line(arg).prop)
        return props

    def outputs(self, i: int, line: Line, scoped: bool = True) -> List[Label]:
        """Check that a backward line cites what its rule needs."""
        if not line.infer.matches([line.prop]):
            raise InvalidRule(f'{line.infer.name()} does not apply here')
        props = line.infer.apply_backward([line.prop])
        here = self.state.labels[i]
        visible = self.state.labels_before(here) if scoped else self.state.labels
        for k, (prop, arg) in enumerate(zip(props, line.args)):
            if arg is None:
                raise IncompleteLine(f'missing argument {k + 1}')
            if arg not in visible:
                raise InvalidReferral(f'line {format_label(arg)} is not in scope')
            found = self.state.find_line(arg).prop
            if found != prop:
                raise InvalidReferral(f'line {format_label(arg)} should be '
                                      f'{prop}, not {found}')
        return line.args

    def conclude(self, line: Line, result: Proposition) -> None:
        if line.prop != result:
            raise InvalidRule(f'{line.infer.name()} gives {result}')

    # Rules

    def rule_invalid(self, i: int, line: Line) -> None:
        raise NotARule(f'{line.infer.name()} is not a rule')

    def rule_direct_proof(self, i: int, line: Line) -> None:
        """The premise and conclusion are the two ends of the subproof
        opened right above this line.
        """
        premise, conclusion = self.outputs(i, line, scoped=False)
        here = self.state.labels[i]
        if premise != here + (1,):
            raise InvalidSubproof(f'{format_label(premise)} does not open '
                                  f'the subproof of line {format_label(here)}')
        if conclusion[:-1] != here or len(conclusion) != len(here) + 1:
            raise InvalidSubproof(f'{format_label(conclusion)} is not in '
                                  f'the subproof of line {format_label(here)}')
        j = self.state.find_label(conclusion)
        if j + 1 >= len(self.state.lines) or self.state.labels[j + 1] != here:
            raise InvalidSubproof(f'{format_label(conclusion)} does not close '
                                  f'the subproof of line {format_label(here)}')
        if self.state.find_line(premise).rule is not InferRule.ASSUMPTION:
            raise InvalidSubproof(f'{format_label(premise)} must be an assumption')

    def rule_assumption(self, i: int, line: Line) -> None:
        """Only the premise and the first line of a subproof are assumed."""
        label = self.state.labels[i]
        if i == 0 and label == (1,):
            return
        if len(label) > 1 and label[-1] == 1:
            return
        raise InvalidRule('only the premise or the start of a subproof '
                          'can be assumed')

    def rule_modus_ponens(self, i: int, line: Line) -> None:
        antecedent, implication = self.inputs(i, line)
        if implication.kind is not Kind.IMPLIES:
            raise InvalidReferral(f'{implication} is not an implication')
        if implication.left != antecedent:
            raise InvalidReferral(f'{antecedent} is not the antecedent '
                                  f'of {implication}')
        self.conclude(line, implication.right)

    def rule_intro_and(self, i: int, line: Line) -> None:
        if not line.forward:
            self.outputs(i, line)
            return
        props = self.inputs(i, line)
        self.conclude(line, line.infer.apply_forward(props))

    def rule_elim_and(self, i: int, line: Line) -> None:
        if not line.forward:
            self.outputs(i, line)
            return
        conj, = self.inputs(i, line)
        if conj.kind is not Kind.AND:
            raise InvalidReferral(f'{conj} is not a conjunction')
        kept = conj.left if line.infer.version is InferVersion.FIRST else conj.right
        self.conclude(line, kept)

    def rule_intro_or(self, i: int, line: Line) -> None:
        self.outputs(i, line)

    def rule_elim_or(self, i: int, line: Line) -> None:
        disj, negated = self.inputs(i, line)
        if disj.kind is not Kind.OR:
            raise InvalidReferral(f'{disj} is not a disjunction')
        if not isinstance(negated, Negation) or negated.arg != disj.left:
            raise InvalidReferral(f'{negated} does not deny {disj.left}')
        self.conclude(line, disj.right)

    def rule_equivalence(self, i: int, line: Line) -> None:
        if not line.forward:
            self.outputs(i, line)
            return
        props = self.inputs(i, line)
        if not line.infer.matches(props):
            raise InvalidRule(f'{line.infer.name()} does not apply to {props[0]}')
        self.conclude(line, line.infer.apply_forward(props))
