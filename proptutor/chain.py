"""
The equivalence-chain editor.

A chain starts at the premise and lists propositions, each equivalent to the
one before it by a single law. A law may be read forward (rewriting the line
above into this one) or backward (rewriting this line into the one above).
A pair of successive rules can be forward-forward, backward-backward or
forward-backward, so the direction changes at most once along a chain.
"""
from __future__ import annotations
import logging
from copy import deepcopy
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple
from .leaves import Proposition, format_prop
from .parser import parse
from .equivs import Equivalence, EquivRule, EquivVersion
from .proof import DEFAULT_START, DEFAULT_END, EditRefused

__all__ = ['ChainLine', 'ChainRow', 'ChainState', 'update_chain_line',
           'ChainEdit', 'SetLaw', 'SetLawDirection', 'SetLawVersion',
           'SetLawMatch', 'ToggleChainDirection', 'ToggleChainEditing',
           'DeleteChainLine', 'apply_chain_edit']

logger = logging.getLogger(__name__)

@dataclass(eq=False)
class ChainLine:
    """
    A proposition in the chain and the law connecting it to the line above.
    ``gen_from`` is the proposition (compared by identity) that this line was
    computed from, or that was computed from it when working backward.
    """
    prop: Proposition
    equiv: Equivalence = Equivalence()
    match_number: int = -1 # use -1 for all
    forward: bool = True
    editable: bool = False # show editing even if correct
    gen_from: Optional[Proposition] = None

    def copy(self) -> ChainLine:
        return replace(self)

    def name(self) -> str:
        """Same whether the law is read forward or backward."""
        return self.equiv.name()

    def match_count(self, prev_prop: Proposition) -> int:
        """Number of matches in the proposition the law rewrites."""
        if not self.equiv.is_complete():
            return 0
        if self.forward:
            return self.equiv.match_count(prev_prop)
        return self.equiv.match_count(self.prop)

    def match_set(self, prop: Proposition) -> List[Proposition]:
        """The strict sub-propositions of ``prop`` that the law rewrites."""
        if not self.equiv.is_complete():
            return []
        matches = self.equiv.matches(prop)
        if self.match_number < 0:
            return [match for match in matches if match is not prop]
        if self.match_number < len(matches):
            match = matches[self.match_number]
            return [] if match is prop else [match]
        return []

    def is_applicable(self, prev_prop: Proposition) -> bool:
        """Whether the law can be applied."""
        if not self.equiv.is_complete():
            return False
        count = self.match_count(prev_prop)
        return count > 0 and self.match_number < count

    def apply(self, prev_prop: Proposition) -> Proposition:
        """The result of applying the law, which must be applicable."""
        if not self.is_applicable(prev_prop):
            raise ValueError('law is not applicable')
        prop = prev_prop if self.forward else self.prop
        if self.match_number < 0:
            return self.equiv.apply_all(prop)
        return self.equiv.apply_once(prop, self.match_number)

    def is_correct(self, prev_prop: Proposition) -> bool:
        """Whether the law turns one of the two propositions into the other."""
        if not self.is_applicable(prev_prop):
            return False
        result = self.apply(prev_prop)
        if self.forward:
            return self.prop == result
        return prev_prop == result

@dataclass(frozen=True)
class ChainRow:
    """What a renderer needs to show one step of the chain."""
    prop: str
    rule: str
    forward: bool
    editable: bool
    complete: bool
    correct: bool
    error: bool
    collapsed: bool
    match_count: int
    can_delete: bool

@dataclass(frozen=True)
class ChainState:
    """The premise, the goal and the chain between them.
    ``lines`` does not include the premise.
    """
    start: Proposition
    end: Proposition
    lines: Tuple[ChainLine, ...]

    def __post_init__(self):
        object.__setattr__(self, 'lines', tuple(self.lines))

    @classmethod
    def bootstrap(cls, start: Proposition | str = DEFAULT_START,
                  end: Proposition | str = DEFAULT_END) -> ChainState:
        """A single line holding the goal, with no law chosen."""
        if isinstance(start, str):
            start = parse(start)
        if isinstance(end, str):
            end = parse(end)
        return cls(start=start, end=end, lines=(ChainLine(end),))

    def prev_prop(self, index: int) -> Proposition:
        """The proposition just above the line at ``index``."""
        return self.start if index == 0 else self.lines[index - 1].prop

    def is_correct(self, index: int) -> bool:
        return self.lines[index].is_correct(self.prev_prop(index))

    def is_finished(self) -> bool:
        """Every step is correct and the chain ends at the goal."""
        return (bool(self.lines) and self.lines[-1].prop == self.end
                and all(self.is_correct(i) for i in range(len(self.lines))))

    def rows(self) -> List[ChainRow]:
        """The premise followed by every line, with matches highlighted:
        ``[...]`` where the next line's forward law applies,
        ``{...}`` where this line's backward law applies.
        """
        lines = self.lines
        first = lines[0].match_set(self.start) if lines and lines[0].forward else ()
        rows = [ChainRow(prop=format_prop(self.start, first), rule='',
                         forward=True, editable=False, complete=True,
                         correct=True, error=False, collapsed=True,
                         match_count=0, can_delete=False)]
        for i, line in enumerate(lines):
            fwd = ()
            if i + 1 < len(lines) and lines[i + 1].forward:
                fwd = lines[i + 1].match_set(line.prop)
            back = line.match_set(line.prop) if not line.forward else ()
            correct = self.is_correct(i)
            complete = line.equiv.is_complete()
            rows.append(ChainRow(
                prop=format_prop(line.prop, fwd, back),
                rule=line.name(), forward=line.forward,
                editable=line.editable, complete=complete, correct=correct,
                error=complete and not correct,
                collapsed=correct and not line.editable,
                match_count=line.match_count(self.prev_prop(i)),
                can_delete=i + 1 < len(lines),
            ))
        return rows

def update_chain_line(state: ChainState, index: int, equiv: Equivalence,
                      match_number: int) -> ChainState:
    """Replace the law at ``index``, updating the lines around it
    so as to maintain the links between them.
    """
    lines = list(state.lines)
    prev_prop = state.prev_prop(index)

    line = lines[index].copy()
    line.equiv = equiv
    line.match_number = match_number

    # If the law doesn't match at all, update nothing else. gen_from is
    # left as is, so the proposition can still change in place later.
    if not line.is_applicable(prev_prop):
        lines[index] = line
        return replace(state, lines=tuple(lines))

    # a new object: links between lines compare by identity
    new_prop = deepcopy(line.apply(prev_prop))
    if line.forward:
        following = lines[index + 1] if index + 1 < len(lines) else None
        # Computed from the line above and nothing computed from it: replace.
        if (line.gen_from is prev_prop
                and (following is None or following.gen_from is not line.prop)):
            line.prop = new_prop
            lines[index] = line

        # The law explains the proposition already here.
        elif line.prop == new_prop:
            if line.gen_from is None:
                line.gen_from = prev_prop
            lines[index] = line

        # Otherwise insert the new proposition so that nothing is lost.
        else:
            line.prop = new_prop
            line.gen_from = prev_prop
            lines.insert(index, line)
            logger.debug('inserted chain line %d', index)

            # No more change-in-place for the old version, whose law is stale
            # unless it was computed from somewhere else.
            old = lines[index + 1].copy()
            if old.gen_from is prev_prop:
                old.gen_from = None
            if old.gen_from is None:
                old.equiv = Equivalence()
                old.match_number = -1
            lines[index + 1] = old

    else:
        above = lines[index - 1] if index >= 1 else None
        # The line above was computed from this one and nothing above it
        # was computed from that: change it in place.
        if (above is not None and above.gen_from is line.prop
                and (index < 2 or lines[index - 2].gen_from is not above.prop)):
            above = above.copy()
            above.prop = new_prop
            lines[index - 1] = above
            lines[index] = line

        # The law explains the line above. An existing link is left alone.
        elif prev_prop == new_prop:
            if above is not None and above.gen_from is None:
                above = above.copy()
                above.gen_from = line.prop
                lines[index - 1] = above
            lines[index] = line

        # Otherwise insert the new proposition so that nothing is lost.
        else:
            # assume they want to continue backward
            lines.insert(index, ChainLine(new_prop, forward=False,
                                          gen_from=line.prop))
            lines[index + 1] = line
            logger.debug('inserted chain line %d', index)

            # Separate the ones that are now two links apart.
            if above is not None and above.gen_from is line.prop:
                above = above.copy()
                above.gen_from = None
                lines[index - 1] = above

    return replace(state, lines=tuple(lines))

# Edits the user can make

@dataclass(frozen=True)
class ChainEdit:
    """Base class for edits to the line at ``index``."""
    index: int

    def apply(self, state: ChainState) -> ChainState:
        raise NotImplementedError

    def line(self, state: ChainState) -> ChainLine:
        if not 0 <= self.index < len(state.lines):
            raise EditRefused(f'no line at index {self.index}')
        return state.lines[self.index]

@dataclass(frozen=True)
class SetLaw(ChainEdit):
    """Choose the law."""
    rule: EquivRule = EquivRule.UNKNOWN

    def apply(self, state):
        line = self.line(state)
        return update_chain_line(state, self.index,
                                 replace(line.equiv, rule=self.rule),
                                 line.match_number)

@dataclass(frozen=True)
class SetLawDirection(ChainEdit):
    """Read the law left-to-right or right-to-left."""
    left_to_right: bool = True

    def apply(self, state):
        line = self.line(state)
        return update_chain_line(
            state, self.index,
            replace(line.equiv, left_to_right=self.left_to_right),
            line.match_number)

@dataclass(frozen=True)
class SetLawVersion(ChainEdit):
    """Choose the operator a right-to-left law reintroduces."""
    version: EquivVersion = EquivVersion.UNKNOWN

    def apply(self, state):
        line = self.line(state)
        return update_chain_line(state, self.index,
                                 replace(line.equiv, version=self.version),
                                 line.match_number)

@dataclass(frozen=True)
class SetLawMatch(ChainEdit):
    """Choose which match the law rewrites (negative for all)."""
    match_number: int = -1

    def apply(self, state):
        line = self.line(state)
        return update_chain_line(state, self.index, line.equiv,
                                 self.match_number)

@dataclass(frozen=True)
class ToggleChainDirection(ChainEdit):
    """Switch between rewriting the line above and rewriting this line."""

    def apply(self, state):
        lines = list(state.lines)
        line = self.line(state).copy()
        if line.forward:
            line.gen_from = None # break any link
        elif self.index >= 1 and lines[self.index - 1].gen_from is line.prop:
            lines[self.index - 1] = lines[self.index - 1].copy()
            lines[self.index - 1].gen_from = None # break the link
        line.forward = not line.forward
        lines[self.index] = line
        return replace(state, lines=tuple(lines))

@dataclass(frozen=True)
class ToggleChainEditing(ChainEdit):
    """Show or hide the law controls of a correct line."""

    def apply(self, state):
        lines = list(state.lines)
        line = self.line(state).copy()
        line.editable = not line.editable
        lines[self.index] = line
        return replace(state, lines=tuple(lines))

@dataclass(frozen=True)
class DeleteChainLine(ChainEdit):
    """Remove a line; the last line (the goal) stays."""

    def apply(self, state):
        line = self.line(state)
        if self.index + 1 >= len(state.lines):
            raise EditRefused('the last line of the chain cannot be deleted')
        lines = list(state.lines)
        del lines[self.index]
        for i in (self.index - 1, self.index):
            if 0 <= i < len(lines) and lines[i].gen_from is line.prop:
                lines[i] = lines[i].copy()
                lines[i].gen_from = None
        logger.debug('deleted chain line %d', self.index)
        return replace(state, lines=tuple(lines))

def apply_chain_edit(state: ChainState, edit: ChainEdit) -> ChainState:
    """The state after the edit. ``state`` itself is left untouched."""
    logger.debug('applying %r', edit)
    return edit.apply(state)
