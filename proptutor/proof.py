"""
The natural-deduction proof editor.

A proof is a sequence of labeled lines; Direct Proof nests subproofs, whose
lines are labeled by extending the label of the line they justify. Every edit
produces a new ProofState from the old one; states are never mutated once
built, so a renderer holding one always sees a consistent proof.
"""
from __future__ import annotations
import logging
from copy import deepcopy
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple
from .leaves import Proposition, format_prop
from .parser import parse
from .labels import Label, format_label, label_less, label_add_before, \
     label_in_scope, label_within
from .equivs import EquivRule, EquivVersion
from .infers import Inference, InferRule, InferVersion

__all__ = ['DEFAULT_START', 'DEFAULT_END', 'InvariantViolation',
           'EditRefused', 'Line', 'Row', 'ProofState', 'shift_labels_at',
           'remove_line', 'clear_from', 'find_prop', 'update_line',
           'prune_subproofs', 'ProofEdit', 'SetRule', 'SetDirection',
           'SetVersion', 'SetEquivRule', 'SetLeftToRight', 'SetEquivVersion',
           'SetMatchNumber', 'SetArgument', 'ToggleEditing', 'DeleteLine',
           'apply_edit']

logger = logging.getLogger(__name__)

DEFAULT_START = 'P implies Q implies R'
DEFAULT_END = 'Q implies P implies R'

class InvariantViolation(AssertionError):
    """The proof got into a state that the editor should never produce."""
    pass

class EditRefused(ValueError):
    """The line does not allow this edit."""
    pass

def _resized(args: list, length: int) -> list:
    """Truncate or pad with unset arguments."""
    return args[:length] + [None] * (length - len(args))

@dataclass(eq=False)
class Line:
    """
    A line of the proof:
    1. The proposition shown on it.
    2. The inference rule justifying it.
    3. ``fixed`` lines can't be deleted;
       lines that aren't ``editable`` can't have their rule changed.
    4. Arguments: labels of the inputs (forward)
       or of the lines produced (backward), possibly unset.
    5. ``gen_from``: the proposition (compared by identity) whose changes
       may regenerate this line in place.
    """
    prop: Proposition
    infer: Inference
    fixed: bool = False
    editable: bool = True
    editing: bool = False
    args: List[Optional[Label]] = field(default=None)
    gen_from: Optional[Proposition] = None

    def __post_init__(self):
        if self.args is None:
            self.args = [None] * self.infer.num_args()

    @property
    def rule(self) -> InferRule:
        return self.infer.rule

    @property
    def forward(self) -> bool:
        return self.infer.forward

    def copy(self) -> Line:
        """A copy whose arguments can be changed independently."""
        return replace(self, args=list(self.args))

    def with_infer(self, infer: Inference) -> Line:
        """A copy using another rule, with arguments resized to match."""
        line = self.copy()
        line.infer = infer
        line.args = _resized(line.args, infer.num_args())
        return line

    def with_rule(self, rule: InferRule) -> Line:
        return self.with_infer(self.infer.with_rule(rule))

    def with_forward(self, forward: bool) -> Line:
        return self.with_infer(replace(self.infer, forward=forward))

    def is_complete(self) -> bool:
        """Whether all the information needed to apply the rule is in place."""
        if not self.infer.is_complete():
            return False
        if len(self.args) != self.infer.num_args():
            raise InvariantViolation(
                f'wrong argument length: {self.infer.num_args()} '
                f'vs {len(self.args)}')
        # backward arguments are produced, not chosen
        if self.forward:
            return all(arg is not None for arg in self.args)
        return True

@dataclass(frozen=True)
class Row:
    """What a renderer needs to show one line."""
    label: str
    depth: int
    prop: str
    rule: str
    forward: bool
    fixed: bool
    editable: bool
    editing: bool
    complete: bool
    correct: bool
    error: bool
    collapsed: bool
    args: Tuple[str, ...]
    choices: Tuple[str, ...]
    match_count: int

@dataclass(frozen=True)
class ProofState:
    """The premise, the goal and the lines proving one from the other."""
    start: Proposition
    end: Proposition
    labels: Tuple[Label, ...]
    lines: Tuple[Line, ...]

    def __post_init__(self):
        object.__setattr__(self, 'labels', tuple(self.labels))
        object.__setattr__(self, 'lines', tuple(self.lines))
        if len(self.labels) != len(self.lines):
            raise InvariantViolation('lines and labels do not have equal length')

    @classmethod
    def bootstrap(cls, start: Proposition | str = DEFAULT_START,
                  end: Proposition | str = DEFAULT_END) -> ProofState:
        """The two-line proof: the premise assumed, the goal unexplained."""
        if isinstance(start, str):
            start = parse(start)
        if isinstance(end, str):
            end = parse(end)
        lines = (
            Line(start, Inference(InferRule.ASSUMPTION, forward=False),
                 fixed=True, editable=False),
            Line(end, Inference(InferRule.UNKNOWN, forward=False),
                 fixed=True, editable=True),
        )
        return cls(start=start, end=end, labels=((1,), (2,)), lines=lines)

    def find_label(self, label: Label) -> int:
        """Returns the index of the given label, which must exist."""
        try:
            return self.labels.index(tuple(label))
        except ValueError:
            raise InvariantViolation(
                f'no such line: {format_label(label)}') from None

    def find_line(self, label: Label) -> Line:
        """Returns the line with the given label, which must exist."""
        return self.lines[self.find_label(label)]

    def labels_before(self, label: Label) -> List[Label]:
        """All the earlier labels that the given line can cite."""
        end = self.find_label(label)
        return [lbl for lbl in self.labels[:end] if label_in_scope(lbl, label)]

    def all_gen_from(self, prop: Proposition) -> List[int]:
        """Indices of all the lines generated (recursively) from ``prop``."""
        results: List[int] = []
        pending = [prop]
        seen = set()
        while pending:
            source = pending.pop(0)
            if id(source) in seen:
                continue
            seen.add(id(source))
            for i, line in enumerate(self.lines):
                if line.gen_from is source and i not in results:
                    results.append(i)
                    if line.prop is not source:
                        pending.append(line.prop)
        return results

    def cited_backward(self, label: Label) -> bool:
        """Whether some backward line lists ``label`` among its outputs."""
        return any(not line.forward and tuple(label) in line.args
                   for line in self.lines)

    def is_correct(self, index: int) -> bool:
        """Whether the line follows by its rule."""
        line = self.lines[index]
        if not line.is_complete() or not line.infer.is_supported():
            return False
        # Forward reasoning is correct if it produces the proposition listed.
        if line.forward:
            props = [self.find_line(lbl).prop for lbl in line.args]
            return (line.infer.matches(props)
                    and line.prop == line.infer.apply_forward(props))
        # Backward outputs are placed by the editor, so they must agree.
        if not line.infer.matches([line.prop]):
            return False
        props = line.infer.apply_backward([line.prop])
        if len(props) != len(line.args):
            raise InvariantViolation('incorrect argument length (backward)')
        for prop, lbl in zip(props, line.args):
            if lbl is None:
                return False
            if prop != self.find_line(lbl).prop:
                raise InvariantViolation(
                    f'argument {format_label(lbl)} does not match '
                    f'line {format_label(self.labels[index])}')
        return True

    def is_finished(self) -> bool:
        """Whether every line of the proof is correct."""
        return all(self.is_correct(i) for i in range(len(self.lines)))

    def rows(self) -> List[Row]:
        """Renderable summaries of every line."""
        rows = []
        for i, (label, line) in enumerate(zip(self.labels, self.lines)):
            correct = self.is_correct(i)
            complete = line.is_complete()
            match_count = 0
            if line.rule is InferRule.EQUIVALENCE and line.infer.equiv.is_complete():
                match_count = line.infer.equiv.match_count(line.prop)
            choices = ()
            if line.forward:
                choices = tuple(map(format_label, self.labels_before(label)))
            rows.append(Row(
                label=format_label(label), depth=len(label),
                prop=format_prop(line.prop), rule=line.infer.name(),
                forward=line.forward, fixed=line.fixed,
                editable=line.editable, editing=line.editing,
                complete=complete, correct=correct,
                error=complete and not correct,
                collapsed=correct and not line.editing,
                args=tuple(map(format_label, line.args)),
                choices=choices, match_count=match_count,
            ))
        return rows

# Structural helpers. These work on the editor's private lists.

def shift_labels_at(label: Label, start: int, delta: int,
                    labels: List[Label], lines: List[Line]) -> None:
    """Update labels and arguments for the insertion (delta > 0)
    or deletion (delta < 0) of lines just before ``label``.
    """
    for i in range(start, len(labels)):
        labels[i] = label_add_before(labels[i], label, delta)
    for i in range(start, len(lines)):
        args = lines[i].args
        shifted = [arg if arg is None or label_less(arg, label)
                   else label_add_before(arg, label, delta) for arg in args]
        if shifted != args:
            lines[i] = lines[i].copy()
            lines[i].args = shifted

def remove_line(lines: List[Line], labels: List[Label], index: int) -> Label:
    """Splice out a line and its label, unsetting arguments that cited it."""
    label = labels.pop(index)
    lines.pop(index)
    for i, line in enumerate(lines):
        if label in line.args:
            lines[i] = line.copy()
            lines[i].args = [None if arg == label else arg for arg in line.args]
    shift_labels_at(label, index, -1, labels, lines)
    return label

def clear_from(prop: Proposition, lines: List[Line]) -> None:
    """Unset any ``gen_from`` pointing at the given proposition."""
    for i, line in enumerate(lines):
        if line.gen_from is prop:
            lines[i] = line.copy()
            lines[i].gen_from = None

def find_prop(prop: Proposition, lines: List[Line], labels: List[Label],
              index: int) -> Optional[int]:
    """Index of an earlier line in scope at ``index`` that states ``prop``."""
    for i in range(index):
        if label_in_scope(labels[i], labels[index]) and lines[i].prop == prop:
            return i
    return None

def update_line(state: ProofState, index: int, line: Line) -> ProofState:
    """Replace the line at ``index`` with ``line`` (a fresh copy) and
    reconcile the rest of the proof with the change.
    """
    lines = list(state.lines)
    labels = list(state.labels)

    if not line.is_complete() or not line.infer.is_supported():
        # Wait for the user to finish choosing.
        lines[index] = line
    elif not line.forward:
        if not line.infer.matches([line.prop]):
            lines[index] = line
        else:
            _expand_backward(state, lines, labels, index, line)
    else:
        props = [state.find_line(lbl).prop for lbl in line.args]
        if not line.infer.matches(props):
            lines[index] = line
        else:
            _derive_forward(state, lines, labels, index, line,
                            deepcopy(line.infer.apply_forward(props)))

    return prune_subproofs(state, lines, labels)

def _expand_backward(state: ProofState, lines: List[Line],
                     labels: List[Label], index: int, line: Line) -> None:
    """Produce the lines the backward rule needs and cite them."""
    prev_prop = state.lines[index].prop
    lines[index] = line

    # Remove everything generated from the previous version of this line.
    doomed = sorted(set(state.all_gen_from(prev_prop)) - {index}, reverse=True)
    for i in doomed:
        removed = remove_line(lines, labels, i)
        logger.debug('removed generated line %s', format_label(removed))
        if i < index:
            index -= 1

    # each line owns its proposition; gen_from compares by identity
    props = [deepcopy(prop) for prop in line.infer.apply_backward([line.prop])]
    label = labels[index]

    # For direct proof, the produced propositions form a subproof.
    if line.rule is InferRule.DIRECT_PROOF:
        premise = Line(props[0], Inference(InferRule.ASSUMPTION, forward=False),
                       fixed=True, editable=False, gen_from=line.prop)
        conclusion = Line(props[1], Inference(InferRule.UNKNOWN, forward=False),
                          fixed=True, editable=True, gen_from=line.prop)
        plabel, clabel = label + (1,), label + (2,)
        lines[index:index] = [premise, conclusion]
        labels[index:index] = [plabel, clabel]
        lines[index + 2] = lines[index + 2].copy()
        lines[index + 2].args = [plabel, clabel]
        logger.debug('opened subproof %s', format_label(label))
        return

    # Otherwise cite earlier lines, inserting the missing ones just before.
    args = []
    count = 0
    for prop in props:
        match = find_prop(prop, lines, labels, index)
        if match is None:
            # or one just inserted for this same line
            match = next((index + k for k in range(count)
                          if lines[index + k].prop == prop), None)
        if match is not None:
            args.append(labels[match])
            continue
        placeholder = Line(prop, Inference(InferRule.UNKNOWN, forward=False),
                           fixed=True, editable=True, gen_from=line.prop)
        new_label = label_add_before(label, label, count)
        lines.insert(index + count, placeholder)
        labels.insert(index + count, new_label)
        args.append(new_label)
        count += 1
    if count:
        shift_labels_at(label, index + count, count, labels, lines)
        logger.debug('inserted %d line(s) before line %s', count,
                     format_label(labels[index + count]))
    # shifting would mess these up, so place them after
    lines[index + count] = lines[index + count].copy()
    lines[index + count].args = args

def _derive_forward(state: ProofState, lines: List[Line], labels: List[Label],
                    index: int, line: Line, new_prop: Proposition) -> None:
    """Put the conclusion of a forward rule in place."""
    prev_prop = state.lines[index].prop
    next_prop = state.lines[index + 1].prop if index + 1 < len(lines) else None

    # Generated by this line and nothing else came from it: replace it.
    if (line.gen_from is prev_prop and len(state.all_gen_from(line.prop)) == 1
            and not state.cited_backward(labels[index])):
        line.prop = new_prop
        line.gen_from = new_prop
        lines[index] = line

    # The rule explains the proposition already here.
    # An existing explanation is left in place.
    elif line.prop == new_prop:
        if line.gen_from is None:
            line.gen_from = line.prop
        lines[index] = line

    # Otherwise insert the new proposition so that nothing is lost.
    else:
        line.fixed = False
        line.editable = True
        line.prop = new_prop
        line.gen_from = new_prop
        lines.insert(index, line)
        labels.insert(index, labels[index])
        shift_labels_at(labels[index + 1], index + 1, 1, labels, lines)
        logger.debug('inserted derived line %s', format_label(labels[index]))

        # No more change-in-place for the old version.
        clear_from(prev_prop, lines)

        # The old line's rule is stale unless another line explains it.
        old = lines[index + 1]
        if old.gen_from is None or old.gen_from is next_prop:
            lines[index + 1] = Line(
                old.prop, Inference(InferRule.UNKNOWN, forward=old.forward),
                fixed=old.fixed, editable=old.editable)

def _unset_within(lines: List[Line], parent: Label) -> None:
    """Unset arguments citing lines of the subproof opened by ``parent``."""
    for i, line in enumerate(lines):
        args = [None if arg is not None and label_within(arg, parent) else arg
                for arg in line.args]
        if args != line.args:
            lines[i] = line.copy()
            lines[i].args = args

def prune_subproofs(state: ProofState, lines: List[Line],
                    labels: List[Label]) -> ProofState:
    """Build the next state after removing subproofs no longer closed
    by a Direct Proof line.
    """
    # Only the line closing a subproof can cite into it, and gen_from only
    # targets lines at the same depth.
    starts = [0]
    i = 1
    while i < len(lines):
        depth = len(labels[i])
        while depth > len(starts):
            starts.append(i)
        if depth < len(starts):
            if lines[i].rule is not InferRule.DIRECT_PROOF:
                start = starts[depth]
                parent = labels[i]
                logger.debug('pruned abandoned subproof %s..%s',
                             format_label(labels[start]),
                             format_label(labels[i - 1]))
                del labels[start:i]
                del lines[start:i]
                _unset_within(lines, parent)
                starts.pop()
                i = start
            while depth < len(starts):
                starts.pop()
        i += 1
    return replace(state, labels=tuple(labels), lines=tuple(lines))

# Edits the user can make

@dataclass(frozen=True)
class ProofEdit:
    """Base class for edits to the line at ``index``."""
    index: int

    def apply(self, state: ProofState) -> ProofState:
        raise NotImplementedError

    def line(self, state: ProofState) -> Line:
        """The line being edited."""
        if not 0 <= self.index < len(state.lines):
            raise EditRefused(f'no line at index {self.index}')
        return state.lines[self.index]

    def editable_line(self, state: ProofState) -> Line:
        """The line being edited, which must allow rule changes."""
        line = self.line(state)
        if not line.editable:
            raise EditRefused(
                f'line {format_label(state.labels[self.index])} is not editable')
        return line

    def equivalence_line(self, state: ProofState) -> Line:
        """The line being edited, which must use an equivalence."""
        line = self.editable_line(state)
        if line.rule is not InferRule.EQUIVALENCE:
            raise EditRefused(
                f'line {format_label(state.labels[self.index])} '
                'does not use an equivalence')
        return line

@dataclass(frozen=True)
class SetRule(ProofEdit):
    """Choose the inference rule."""
    rule: InferRule = InferRule.UNKNOWN

    def apply(self, state):
        line = self.editable_line(state).with_rule(InferRule(self.rule))
        return update_line(state, self.index, line)

@dataclass(frozen=True)
class SetDirection(ProofEdit):
    """Switch between forward and backward reasoning."""

    def apply(self, state):
        line = self.editable_line(state)
        line = line.with_forward(not line.forward)
        # Direct proof only works backward.
        if line.forward and line.rule is InferRule.DIRECT_PROOF:
            line = line.with_rule(InferRule.UNKNOWN)
        return update_line(state, self.index, line)

@dataclass(frozen=True)
class SetVersion(ProofEdit):
    """Choose which operand the rule keeps."""
    version: InferVersion = InferVersion.UNKNOWN

    def apply(self, state):
        line = self.editable_line(state)
        infer = replace(line.infer, version=self.version)
        return update_line(state, self.index, line.with_infer(infer))

@dataclass(frozen=True)
class SetEquivRule(ProofEdit):
    """Choose the law used by an Equivalence line."""
    rule: EquivRule = EquivRule.UNKNOWN

    def apply(self, state):
        line = self.equivalence_line(state)
        infer = replace(line.infer, equiv=replace(line.infer.equiv, rule=self.rule))
        return update_line(state, self.index, line.with_infer(infer))

@dataclass(frozen=True)
class SetLeftToRight(ProofEdit):
    """Choose the direction of the law used by an Equivalence line."""
    left_to_right: bool = True

    def apply(self, state):
        line = self.equivalence_line(state)
        equiv = replace(line.infer.equiv, left_to_right=self.left_to_right)
        infer = replace(line.infer, equiv=equiv)
        return update_line(state, self.index, line.with_infer(infer))

@dataclass(frozen=True)
class SetEquivVersion(ProofEdit):
    """Choose the operator a right-to-left law reintroduces."""
    version: EquivVersion = EquivVersion.UNKNOWN

    def apply(self, state):
        line = self.equivalence_line(state)
        equiv = replace(line.infer.equiv, version=self.version)
        infer = replace(line.infer, equiv=equiv)
        return update_line(state, self.index, line.with_infer(infer))

@dataclass(frozen=True)
class SetMatchNumber(ProofEdit):
    """Choose which match an Equivalence rewrites (negative for all)."""
    match_number: int = -1

    def apply(self, state):
        line = self.equivalence_line(state)
        infer = replace(line.infer, match_number=self.match_number)
        return update_line(state, self.index, line.with_infer(infer))

@dataclass(frozen=True)
class SetArgument(ProofEdit):
    """Cite an earlier line as an input of a forward rule."""
    arg_index: int = 0
    label: Optional[Label] = None

    def apply(self, state):
        line = self.line(state)
        if not line.forward:
            raise EditRefused('only forward arguments are chosen')
        if not 0 <= self.arg_index < len(line.args):
            raise EditRefused(f'no argument {self.arg_index}')
        label = None if self.label is None else tuple(self.label)
        here = state.labels[self.index]
        if label is not None and label not in state.labels_before(here):
            raise EditRefused(f'line {format_label(label)} is not in scope '
                              f'at line {format_label(here)}')
        line = line.copy()
        line.args[self.arg_index] = label
        return update_line(state, self.index, line)

@dataclass(frozen=True)
class ToggleEditing(ProofEdit):
    """Show or hide the rule controls of a correct line."""

    def apply(self, state):
        line = self.line(state).copy()
        line.editing = not line.editing
        lines = list(state.lines)
        lines[self.index] = line
        return replace(state, lines=tuple(lines))

@dataclass(frozen=True)
class DeleteLine(ProofEdit):
    """Remove a line the user added."""

    def apply(self, state):
        if self.line(state).fixed:
            raise EditRefused(
                f'line {format_label(state.labels[self.index])} is fixed')
        lines = list(state.lines)
        labels = list(state.labels)
        removed = remove_line(lines, labels, self.index)
        logger.debug('deleted line %s', format_label(removed))
        return prune_subproofs(state, lines, labels)

def apply_edit(state: ProofState, edit: ProofEdit) -> ProofState:
    """The state after the edit. ``state`` itself is left untouched."""
    logger.debug('applying %r', edit)
    return edit.apply(state)
