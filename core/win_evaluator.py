"""Win condition evaluation for the Scotland Yard game engine."""

from __future__ import annotations

from typing import Sequence

from .constants import Piece
from .board import GameSetup
from .player import Player
from .moves import LogEntry
from .move_generator import is_stuck, mrx_moves


def detectives_win(detectives: Sequence[Player]) -> frozenset[Piece]:
    return frozenset(d.piece for d in detectives)


def is_captured(mrx: Player, detectives: Sequence[Player]) -> bool:
    """Check if any detective stands on MrX's location."""
    return any(d.location == mrx.location for d in detectives)


def compute_winner(
    setup: GameSetup,
    mrx: Player,
    detectives: Sequence[Player],
    remaining: frozenset[Piece],
    log: Sequence[LogEntry],
) -> frozenset[Piece]:
    """Compute the winners of a game position.

    Conditions are checked in order:
    1. A detective stands on MrX: all detectives win.
    2. The log is full and the detectives' last round is over: MrX wins.
       This only fires once MrX is back in ``remaining``.
    3. No detective can move: MrX wins, whoever's turn it is.
    4. It is MrX's turn and he has no move: all detectives win.

    Args:
        setup: The game setup.
        mrx: The MrX player.
        detectives: All detective players.
        remaining: Pieces still to act this round.
        log: MrX's travel log so far.

    Returns:
        The winning pieces, or an empty frozenset if the game goes on.
    """
    if is_captured(mrx, detectives):
        return detectives_win(detectives)

    mrx_to_move = mrx.piece in remaining
    if mrx_to_move and len(log) >= setup.total_rounds:
        return frozenset({mrx.piece})

    if all(is_stuck(setup, d, detectives) for d in detectives):
        return frozenset({mrx.piece})

    rounds_remaining = setup.total_rounds - len(log)
    if mrx_to_move and not mrx_moves(setup, mrx, detectives, rounds_remaining):
        return detectives_win(detectives)

    return frozenset()
