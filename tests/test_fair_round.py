from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
APP_DIR = ROOT / "src" / "app"
sys.path.insert(0, str(APP_DIR))

import fair_round  # type: ignore[import-not-found]  # noqa: E402
from commit_reveal import compute_digest, key_to_hex  # type: ignore[import-not-found]  # noqa: E402
from errors import InvalidState, UnknownMove  # type: ignore[import-not-found]  # noqa: E402
from fair_round import FairRoundProtocol, RoundState  # type: ignore[import-not-found]  # noqa: E402
from protocol import ResolutionTable  # type: ignore[import-not-found]  # noqa: E402

MOVES = ["Rock", "Spock", "Paper", "Lizard", "Scissors"]


@pytest.fixture
def table() -> ResolutionTable:
    return ResolutionTable(MOVES)


def test_full_round_verifies(table: ResolutionTable) -> None:
    proto = FairRoundProtocol(table)
    assert proto.state is RoundState.IDLE
    assert proto.digest is None

    digest = proto.start()
    assert proto.state is RoundState.COMMITTED
    assert proto.digest == digest

    proto.submit_player_move("Lizard")
    result = proto.reveal()

    assert proto.state is RoundState.REVEALED
    assert result.player_move == "Lizard"
    assert result.computer_move in MOVES
    assert result.digest == digest
    assert compute_digest(result.secret_key, result.computer_move) == digest
    assert result.verify()
    assert len(result.secret_key) >= 32
    assert result.outcome == table.resolve("Lizard", result.computer_move)


def test_start_and_submit_do_not_expose_secrets(table: ResolutionTable, monkeypatch: pytest.MonkeyPatch) -> None:
    key = b"\x07" * 32
    monkeypatch.setattr(fair_round, "generate_key", lambda: key)
    monkeypatch.setattr(fair_round.secrets, "choice", lambda seq: "Spock")

    proto = FairRoundProtocol(table)
    exposed = [proto.start(), proto.submit_player_move("Rock"), repr(proto)]

    for value in exposed:
        text = repr(value)
        assert "Spock" not in text
        assert key_to_hex(key) not in text
        assert repr(key) not in text

    result = proto.reveal()
    assert result.computer_move == "Spock"
    assert result.secret_key == key
    assert result.outcome == "Lose"


def test_computer_move_uses_secrets_choice(table: ResolutionTable, monkeypatch: pytest.MonkeyPatch) -> None:
    seen: list[tuple[str, ...]] = []

    def fake_choice(seq):
        seen.append(tuple(seq))
        return seq[-1]

    monkeypatch.setattr(fair_round.secrets, "choice", fake_choice)
    proto = FairRoundProtocol(table)
    proto.start()
    proto.submit_player_move("Rock")
    assert seen == [tuple(MOVES)]
    assert proto.reveal().computer_move == "Scissors"


def test_fresh_key_per_round(table: ResolutionTable) -> None:
    keys = set()
    for _ in range(5):
        proto = FairRoundProtocol(table)
        proto.start()
        proto.submit_player_move("Rock")
        keys.add(proto.reveal().secret_key)
    assert len(keys) == 5


def test_unknown_player_move_leaves_round_committed(table: ResolutionTable) -> None:
    proto = FairRoundProtocol(table)
    proto.start()
    with pytest.raises(UnknownMove):
        proto.submit_player_move("Dynamite")
    assert proto.state is RoundState.COMMITTED

    with pytest.raises(InvalidState):
        proto.reveal()

    proto.submit_player_move("Paper")
    assert proto.reveal().player_move == "Paper"


def test_resubmit_replaces_player_move(table: ResolutionTable) -> None:
    proto = FairRoundProtocol(table)
    proto.start()
    proto.submit_player_move("Rock")
    proto.submit_player_move("Paper")
    assert proto.reveal().player_move == "Paper"


def test_reveal_twice_fails(table: ResolutionTable) -> None:
    proto = FairRoundProtocol(table)
    proto.start()
    proto.submit_player_move("Rock")
    proto.reveal()
    with pytest.raises(InvalidState) as exc_info:
        proto.reveal()
    assert exc_info.value.state == "revealed"


def test_out_of_order_calls(table: ResolutionTable) -> None:
    proto = FairRoundProtocol(table)
    with pytest.raises(InvalidState):
        proto.submit_player_move("Rock")
    with pytest.raises(InvalidState):
        proto.reveal()

    proto.start()
    with pytest.raises(InvalidState):
        proto.start()

    proto.submit_player_move("Rock")
    proto.reveal()
    with pytest.raises(InvalidState):
        proto.start()
    with pytest.raises(InvalidState):
        proto.submit_player_move("Rock")


def test_player_outcome_direction() -> None:
    table = ResolutionTable(["Rock", "Paper", "Scissors"])
    proto = FairRoundProtocol(table)
    proto.start()
    proto.submit_player_move("Rock")
    result = proto.reveal()
    expected = {"Rock": "Draw", "Paper": "Lose", "Scissors": "Win"}[result.computer_move]
    assert result.outcome == expected
