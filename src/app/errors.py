from __future__ import annotations


class RpsError(ValueError):
    """Base class for every error raised by the game core."""


class InvalidMoveSet(RpsError):
    pass


class UnknownMove(RpsError):
    def __init__(self, move: str, valid: tuple[str, ...] = ()) -> None:
        self.move = move
        msg = f"unknown move: {move!r}"
        if valid:
            msg += f" (expected one of {', '.join(valid)})"
        super().__init__(msg)


class InvalidState(RpsError):
    def __init__(self, state: str, message: str) -> None:
        self.state = state
        super().__init__(f"{message} (state={state})")
