from __future__ import annotations

import argparse
import logging
import os
import sys

from commit_reveal import key_from_hex, verify_digest
from errors import InvalidMoveSet, UnknownMove
from fair_round import FairRoundProtocol, RoundResult
from protocol import DEFAULT_MOVES, MoveSet, ResolutionTable

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_USAGE = 2

_RESULT_TEXT = {"Win": "You win!", "Lose": "You lose!", "Draw": "Draw!"}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rps")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd")

    play = sub.add_parser("play", help="Play one provably-fair round against the computer (default)")
    play.add_argument("moves", nargs="*", help="Odd number (>= 3) of distinct move names, in cyclic order")

    table = sub.add_parser("table", help="Print the win/lose/draw table for a move set")
    table.add_argument("moves", nargs="*")

    verify = sub.add_parser("verify", help="Check a revealed key and move against a published HMAC")
    verify.add_argument("--key", required=True, help="Revealed HMAC key (hex)")
    verify.add_argument("--move", required=True, help="Revealed computer move")
    verify.add_argument("--digest", required=True, help="HMAC shown before you chose your move (hex)")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "verify":
        return _verify(args.key, args.move, args.digest)

    try:
        resolution = ResolutionTable(_resolve_moves(getattr(args, "moves", None)))
    except InvalidMoveSet as exc:
        print(f"Invalid move set: {exc}", file=sys.stderr)
        print("Example: rps play Rock Paper Scissors", file=sys.stderr)
        return EXIT_USAGE

    if args.cmd == "table":
        print(resolution.render())
        return EXIT_OK

    return play_round(resolution)


def play_round(resolution: ResolutionTable) -> int:
    protocol = FairRoundProtocol(resolution)
    print(f"HMAC: {protocol.start()}")

    moves = resolution.moves.moves
    while True:
        _print_menu(moves)
        try:
            answer = input("Enter your move: ").strip()
        except EOFError:
            print()
            return EXIT_OK

        if answer == "?":
            print(resolution.render())
            return EXIT_OK
        if answer == "0":
            print("Exiting the game.")
            return EXIT_OK

        try:
            protocol.submit_player_move(_move_from_answer(answer, moves))
        except UnknownMove:
            print("Invalid input! Please enter a valid move.")
            continue
        break

    _show_result(protocol.reveal())
    return EXIT_OK


def _resolve_moves(cli_moves: list[str] | None) -> MoveSet:
    if cli_moves:
        return MoveSet.of(cli_moves)
    env = os.environ.get("RPS_MOVES")
    if env:
        return MoveSet.of(env.split(","))
    return MoveSet(DEFAULT_MOVES)


def _move_from_answer(answer: str, moves: tuple[str, ...]) -> str:
    # Menu numbers are 1..N inclusive; anything else is an unknown move.
    if answer.isdecimal() and 1 <= int(answer) <= len(moves):
        return moves[int(answer) - 1]
    raise UnknownMove(answer, moves)


def _print_menu(moves: tuple[str, ...]) -> None:
    print("Available moves:")
    for i, move in enumerate(moves, start=1):
        print(f"{i} - {move}")
    print("0 - exit")
    print("? - help")


def _show_result(result: RoundResult) -> None:
    print(f"Your move: {result.player_move}")
    print(f"Computer move: {result.computer_move}")
    print(_RESULT_TEXT[result.outcome])
    print(f"HMAC key: {result.key_hex}")


def _verify(key_hex: str, move: str, digest: str) -> int:
    try:
        key = key_from_hex(key_hex)
    except ValueError:
        print("--key must be hex", file=sys.stderr)
        return EXIT_USAGE
    if verify_digest(digest, key, move):
        print("OK: HMAC matches, the computer's move was fixed before you played.")
        return EXIT_OK
    print("MISMATCH: HMAC does not match this key and move.")
    return EXIT_MISMATCH


if __name__ == "__main__":
    raise SystemExit(main())
