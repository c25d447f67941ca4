"""Core data models and rules for the Scotland Yard game engine."""

from .constants import (
    Piece,
    Ticket,
    Transport,
    TRANSPORT_TICKETS,
    MRX_ONLY_TICKETS,
    DETECTIVE_PIECES,
    MIN_DETECTIVES,
    MAX_DETECTIVES,
    MRX_DEFAULT_TICKETS,
    DETECTIVE_DEFAULT_TICKETS,
    STANDARD_ROUNDS,
    REVEAL_ROUNDS,
    STANDARD_REVEAL_SCHEDULE,
    MRX_START_LOCATIONS,
    DETECTIVE_START_LOCATIONS,
)

from .board import (
    NodeId,
    TransportGraph,
    GameSetup,
)

from .player import Player

from .moves import SingleMove, DoubleMove, Move, LogEntry

from .move_generator import (
    occupied_locations,
    single_moves,
    double_moves,
    detective_moves,
    mrx_moves,
    is_stuck,
)

from .win_evaluator import compute_winner

from .game_state import GameState, GameSetupError, IllegalMoveError

__all__ = [
    # Constants
    "Piece",
    "Ticket",
    "Transport",
    "TRANSPORT_TICKETS",
    "MRX_ONLY_TICKETS",
    "DETECTIVE_PIECES",
    "MIN_DETECTIVES",
    "MAX_DETECTIVES",
    "MRX_DEFAULT_TICKETS",
    "DETECTIVE_DEFAULT_TICKETS",
    "STANDARD_ROUNDS",
    "REVEAL_ROUNDS",
    "STANDARD_REVEAL_SCHEDULE",
    "MRX_START_LOCATIONS",
    "DETECTIVE_START_LOCATIONS",
    # Board
    "NodeId",
    "TransportGraph",
    "GameSetup",
    # Player
    "Player",
    # Moves
    "SingleMove",
    "DoubleMove",
    "Move",
    "LogEntry",
    # Move generation
    "occupied_locations",
    "single_moves",
    "double_moves",
    "detective_moves",
    "mrx_moves",
    "is_stuck",
    # Win evaluation
    "compute_winner",
    # Game State
    "GameState",
    "GameSetupError",
    "IllegalMoveError",
]
