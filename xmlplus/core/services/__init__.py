from __future__ import annotations

"""Stateful helpers built on top of the pure core."""

from .undo_service import UndoService  # noqa: F401

__all__: list[str] = [
    "UndoService",
]
