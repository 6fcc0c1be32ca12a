from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal

from errors import InvalidMoveSet, UnknownMove

logger = logging.getLogger(__name__)

Outcome = Literal["Win", "Lose", "Draw"]

DEFAULT_MOVES: tuple[str, ...] = ("Rock", "Paper", "Scissors")


@dataclass(frozen=True)
class MoveSet:
    moves: tuple[str, ...]

    def __post_init__(self) -> None:
        names = tuple(m.strip() for m in self.moves)
        if any(not m for m in names):
            raise InvalidMoveSet("move names must be non-empty")
        if len(names) < 3:
            raise InvalidMoveSet(f"need at least 3 moves, got {len(names)}")
        if len(names) % 2 == 0:
            raise InvalidMoveSet(f"number of moves must be odd, got {len(names)}")
        dupes = sorted({m for m in names if names.count(m) > 1})
        if dupes:
            raise InvalidMoveSet("duplicate moves: " + ", ".join(dupes))
        object.__setattr__(self, "moves", names)

    @classmethod
    def of(cls, moves: Iterable[str]) -> "MoveSet":
        return cls(tuple(moves))

    def index(self, move: str) -> int:
        try:
            return self.moves.index(move)
        except ValueError:
            raise UnknownMove(move, self.moves) from None

    def __contains__(self, move: object) -> bool:
        return move in self.moves

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self):
        return iter(self.moves)


class ResolutionTable:
    """Outcome of every ordered pair of moves in a MoveSet.

    Moves are arranged on a circle in MoveSet order. Each move loses to the
    ``N // 2`` moves that follow it and beats the ``N // 2`` moves that
    precede it, so with Rock, Paper, Scissors: Paper beats Rock, Scissors
    beats Paper, Rock beats Scissors.
    """

    def __init__(self, moves: MoveSet | Iterable[str]) -> None:
        self._moves = moves if isinstance(moves, MoveSet) else MoveSet.of(moves)
        self._matrix = _build_matrix(len(self._moves))
        logger.debug("built %dx%d resolution table", len(self._moves), len(self._moves))

    @property
    def moves(self) -> MoveSet:
        return self._moves

    def resolve(self, move_a: str, move_b: str) -> Outcome:
        """Result of ``move_a`` played against ``move_b``, from ``move_a``'s side."""
        return self._matrix[self._moves.index(move_a)][self._moves.index(move_b)]

    def beats(self, move: str) -> tuple[str, ...]:
        row = self._matrix[self._moves.index(move)]
        return tuple(m for m, outcome in zip(self._moves, row) if outcome == "Win")

    def beaten_by(self, move: str) -> tuple[str, ...]:
        row = self._matrix[self._moves.index(move)]
        return tuple(m for m, outcome in zip(self._moves, row) if outcome == "Lose")

    def render(self) -> str:
        names = self._moves.moves
        width = max(len(n) for n in names + ("Draw", "Lose"))
        corner = "User \\ PC"
        first = max(width, len(corner))

        lines: list[str] = []
        header = f"{corner:<{first}} | " + "  ".join(f"{n:<{width}}" for n in names)
        lines.append(header.rstrip())
        lines.append("-" * len(header.rstrip()))
        for name, row in zip(names, self._matrix):
            cells = "  ".join(f"{o:<{width}}" for o in row)
            lines.append(f"{name:<{first}} | {cells}".rstrip())
        return "\n".join(lines)


def _build_matrix(n: int) -> tuple[tuple[Outcome, ...], ...]:
    half = n // 2
    rows = []
    for i in range(n):
        row: list[Outcome] = []
        for j in range(n):
            step = (j - i) % n
            if step == 0:
                row.append("Draw")
            elif step <= half:
                row.append("Lose")
            else:
                row.append("Win")
        rows.append(tuple(row))
    return tuple(rows)
