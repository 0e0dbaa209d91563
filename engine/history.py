"""Snapshot-based undo history."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

from .board import Board

DEFAULT_HISTORY_LIMIT = 50


@dataclass(frozen=True)
class Snapshot:
    board: Board
    score: int
    move_count: int

    @classmethod
    def capture(cls, board: Board, score: int, move_count: int) -> Snapshot:
        return cls(board=board.copy(), score=score, move_count=move_count)


class History:
    """Bounded stack of snapshots; the oldest entry is dropped on overflow."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self.limit = limit
        self._entries: Deque[Snapshot] = deque(maxlen=limit)

    def push(self, snapshot: Snapshot) -> None:
        self._entries.append(snapshot)

    def pop(self) -> Optional[Snapshot]:
        if not self._entries:
            return None
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
