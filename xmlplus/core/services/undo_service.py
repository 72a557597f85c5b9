from __future__ import annotations

"""Undo/redo history for edited documents.

Edits never mutate a tree, so a history is just a list of earlier root
locations: restoring one is handing it back. No serialization is needed.

Design principles
-----------------
- No UI imports and no I/O.
- Redo stack is cleared on every new push (standard undo/redo behavior).
- Memory usage controlled by a max_history policy (trim oldest).
"""

import logging
from typing import List, Optional

from xmlplus.core.location import Location

__all__ = ["UndoService"]

logger = logging.getLogger(__name__)


class UndoService:
    """Manage undo/redo stacks of document versions.

    Callers push the state before their first edit (the baseline) and after
    every edit. The top of the undo stack is the current state; ``undo``
    returns the one below it.

    Parameters
    ----------
    max_history : int, default=50
        Maximum number of versions to keep. Oldest entries are discarded when
        the capacity is exceeded. Values below 1 are coerced to 1.

    Examples
    --------
    >>> svc = UndoService(max_history=10)
    >>> svc.push(loc)                       # baseline
    >>> loc = edit_tag(loc, "section")
    >>> svc.push(loc)                       # after the edit
    >>> loc = svc.undo()                    # root location of the baseline
    >>> loc = svc.redo()                    # back to the edited version
    """

    def __init__(self, max_history: int = 50) -> None:
        self._max_history: int = max(1, int(max_history))
        self._undo_stack: List[Location] = []
        self._redo_stack: List[Location] = []

    # --------------------------------------------------------------------- API

    def push(self, loc: Location) -> None:
        """Record the tree of *loc* as the current version."""
        self._undo_stack.append(loc.root())
        self._redo_stack.clear()
        self._trim(self._undo_stack)

    def undo(self) -> Optional[Location]:
        """Return the root location of the previous version, or ``None``."""
        if not self.can_undo():
            return None
        self._redo_stack.append(self._undo_stack.pop())
        self._trim(self._redo_stack)
        logger.debug("Undo: %d version(s) left", len(self._undo_stack))
        return self._undo_stack[-1]

    def redo(self) -> Optional[Location]:
        """Return the root location of the version last undone, or ``None``."""
        if not self._redo_stack:
            return None
        restored = self._redo_stack.pop()
        self._undo_stack.append(restored)
        self._trim(self._undo_stack)
        logger.debug("Redo: %d version(s) left to redo", len(self._redo_stack))
        return restored

    def current(self) -> Optional[Location]:
        return self._undo_stack[-1] if self._undo_stack else None

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 1

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def clear(self) -> None:
        """Clear both undo and redo histories."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    # --------------------------------------------------------------- Internals

    def _trim(self, stack: List[Location]) -> None:
        overflow = len(stack) - self._max_history
        if overflow > 0:
            del stack[0:overflow]
