"""
Host objects for the editors. Each holds the current state, applies edits
to it one at a time and reports every new snapshot to a listener.
"""
from __future__ import annotations
import logging
from typing import Callable, Optional
from .proof import ProofState, ProofEdit, apply_edit
from .chain import ChainState, ChainEdit, apply_chain_edit
from .snapshot import loads, dumps

__all__ = ['Proof', 'Chain']

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]

class Proof:
    """A natural-deduction proof being edited."""

    state: ProofState

    def __init__(self, snapshot: Optional[str] = None,
                 on_change: Optional[Listener] = None):
        """Start from a snapshot (JSON text), or from the default statement.
        ``on_change`` is called with the new snapshot after each edit.
        """
        self.state = loads(snapshot)
        self.on_change = on_change

    def apply(self, edit: ProofEdit) -> ProofState:
        """Apply an edit and publish the result.
        If the edit raises, the previous state stays current.
        """
        state = apply_edit(self.state, edit)
        self.state = state
        logger.debug('proof has %d lines', len(state.lines))
        if self.on_change is not None:
            self.on_change(dumps(state))
        return state

    def snapshot(self) -> str:
        return dumps(self.state)

    def rows(self):
        return self.state.rows()

    def is_finished(self) -> bool:
        return self.state.is_finished()

class Chain:
    """An equivalence chain being edited."""

    state: ChainState

    def __init__(self, snapshot: Optional[str] = None,
                 on_change: Optional[Listener] = None):
        self.state = loads(snapshot, chain=True)
        self.on_change = on_change

    def apply(self, edit: ChainEdit) -> ChainState:
        """Apply an edit and publish the result.
        If the edit raises, the previous state stays current.
        """
        state = apply_chain_edit(self.state, edit)
        self.state = state
        logger.debug('chain has %d lines', len(state.lines))
        if self.on_change is not None:
            self.on_change(dumps(state))
        return state

    def snapshot(self) -> str:
        return dumps(self.state)

    def rows(self):
        return self.state.rows()

    def is_finished(self) -> bool:
        return self.state.is_finished()
