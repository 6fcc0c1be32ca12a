from __future__ import annotations

import enum
import logging
import secrets
from dataclasses import dataclass, field

from commit_reveal import compute_digest, generate_key, key_to_hex, verify_digest
from errors import InvalidState
from protocol import Outcome, ResolutionTable

logger = logging.getLogger(__name__)


class RoundState(enum.Enum):
    IDLE = "idle"
    COMMITTED = "committed"
    REVEALED = "revealed"


@dataclass(frozen=True)
class Commitment:
    # Key and move stay out of repr until the round is revealed.
    secret_key: bytes = field(repr=False)
    chosen_move: str = field(repr=False)
    digest: str

    @classmethod
    def create(cls, key: bytes, move: str) -> "Commitment":
        return cls(secret_key=key, chosen_move=move, digest=compute_digest(key, move))


@dataclass(frozen=True)
class RoundResult:
    player_move: str
    computer_move: str
    outcome: Outcome
    secret_key: bytes
    digest: str

    @property
    def key_hex(self) -> str:
        return key_to_hex(self.secret_key)

    def verify(self) -> bool:
        return verify_digest(self.digest, self.secret_key, self.computer_move)


class FairRoundProtocol:
    """One committed round: start -> submit_player_move -> reveal.

    ``start`` fixes the computer's move and publishes only its HMAC digest.
    The key and the move come out through ``reveal`` and nowhere else. An
    instance plays exactly one round; build a new one for the next round so
    every round gets a fresh key.
    """

    def __init__(self, table: ResolutionTable) -> None:
        self._table = table
        self._state = RoundState.IDLE
        self._commitment: Commitment | None = None
        self._player_move: str | None = None

    def __repr__(self) -> str:
        return f"FairRoundProtocol(state={self._state.value}, digest={self.digest!r})"

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def digest(self) -> str | None:
        return self._commitment.digest if self._commitment is not None else None

    def start(self) -> str:
        if self._state is not RoundState.IDLE:
            raise InvalidState(self._state.value, "round already started; use a new protocol instance")

        move = secrets.choice(self._table.moves.moves)
        self._commitment = Commitment.create(generate_key(), move)
        self._state = RoundState.COMMITTED
        logger.debug("round committed, digest=%s", self._commitment.digest)
        return self._commitment.digest

    def submit_player_move(self, move: str) -> None:
        if self._state is not RoundState.COMMITTED:
            raise InvalidState(self._state.value, "player move can only be submitted after start()")
        # Raises UnknownMove before anything is recorded.
        self._table.moves.index(move)
        self._player_move = move
        logger.debug("player move recorded")

    def reveal(self) -> RoundResult:
        if self._state is not RoundState.COMMITTED:
            raise InvalidState(self._state.value, "reveal() requires a committed round")
        if self._player_move is None or self._commitment is None:
            raise InvalidState(self._state.value, "reveal() called before submit_player_move()")

        c = self._commitment
        outcome = self._table.resolve(self._player_move, c.chosen_move)
        self._state = RoundState.REVEALED
        logger.debug("round revealed: %s vs %s -> %s", self._player_move, c.chosen_move, outcome)
        return RoundResult(
            player_move=self._player_move,
            computer_move=c.chosen_move,
            outcome=outcome,
            secret_key=c.secret_key,
            digest=c.digest,
        )
