"""Initial game configuration for the Scotland Yard game engine.

Turns a configuration (pieces, start locations and ticket allotments)
into the opening GameState:
1. Read player configuration (from code or a plain dictionary)
2. Fill in the standard ticket allotments where none are given
3. Build the players and the opening position, MrX to move
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from core.constants import (
    Piece,
    Ticket,
    DETECTIVE_PIECES,
    MIN_DETECTIVES,
    MAX_DETECTIVES,
    MRX_DEFAULT_TICKETS,
    DETECTIVE_DEFAULT_TICKETS,
    MRX_START_LOCATIONS,
    DETECTIVE_START_LOCATIONS,
)
from core.board import GameSetup, NodeId, TransportGraph
from core.player import Player
from core.game_state import GameState


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerConfig:
    """Starting configuration for one player.

    Attributes:
        piece: The piece to play.
        location: Starting node.
        tickets: Ticket counts; None means the standard allotment.
    """

    piece: Piece
    location: NodeId
    tickets: Optional[Mapping[Ticket, int]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], piece: Optional[Piece] = None) -> PlayerConfig:
        """Parse a player entry such as {"piece": "red", "location": 13}.

        Args:
            data: The player entry.
            piece: Piece to use when the entry does not name one.

        Raises:
            ValueError: If the entry is malformed.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Player entry must be a mapping, got {type(data).__name__}")
        if "location" not in data:
            raise ValueError("Player entry missing 'location'")

        if "piece" in data:
            name = str(data["piece"])
            try:
                piece = Piece[name.upper()]
            except KeyError:
                raise ValueError(f"Unknown piece: {name}")
        if piece is None:
            raise ValueError("Player entry missing 'piece'")

        location = data["location"]
        if not isinstance(location, int) or isinstance(location, bool):
            raise ValueError(f"Invalid location for {piece.name}: {location!r}")

        tickets = None
        if data.get("tickets") is not None:
            tickets = cls._parse_tickets(piece, data["tickets"])

        return cls(piece=piece, location=location, tickets=tickets)

    @staticmethod
    def _parse_tickets(piece: Piece, data: Any) -> dict[Ticket, int]:
        if not isinstance(data, Mapping):
            raise ValueError(f"Tickets for {piece.name} must be a mapping, got {type(data).__name__}")

        tickets = {}
        for name, count in data.items():
            try:
                ticket = Ticket(str(name).lower())
            except ValueError:
                raise ValueError(f"Unknown ticket for {piece.name}: {name}")
            if not isinstance(count, int) or isinstance(count, bool):
                raise ValueError(f"Invalid {ticket.value} count for {piece.name}: {count!r}")
            tickets[ticket] = count
        return tickets

    def default_tickets(self) -> Mapping[Ticket, int]:
        return MRX_DEFAULT_TICKETS if self.piece.is_mrx() else DETECTIVE_DEFAULT_TICKETS

    def make_player(self) -> Player:
        """Build the Player this configuration describes."""
        tickets = self.tickets if self.tickets is not None else self.default_tickets()
        return Player(piece=self.piece, location=self.location, tickets=tickets)


@dataclass(frozen=True)
class GameConfig:
    """Starting configuration for all players.

    Attributes:
        mrx: MrX's configuration.
        detectives: Detective configurations in turn order.
    """

    mrx: PlayerConfig
    detectives: tuple[PlayerConfig, ...]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameConfig:
        """Parse {"mrx": {...}, "detectives": [{...}, ...]}.

        Raises:
            ValueError: If the configuration is malformed.
        """
        if "mrx" not in data:
            raise ValueError("Game configuration missing 'mrx'")
        if not isinstance(data.get("detectives"), list):
            raise ValueError("Game configuration 'detectives' must be a list")

        mrx = PlayerConfig.from_dict(data["mrx"], piece=Piece.MRX)
        detectives = tuple(PlayerConfig.from_dict(entry) for entry in data["detectives"])
        return cls(mrx=mrx, detectives=detectives)

    def make_players(self) -> tuple[Player, list[Player]]:
        return self.mrx.make_player(), [d.make_player() for d in self.detectives]


def initialize_game(setup: GameSetup, config: GameConfig) -> GameState:
    """Build the opening GameState for a configuration.

    Args:
        setup: The board and reveal schedule.
        config: Player configuration.

    Returns:
        The initial state with MrX to move.

    Raises:
        GameSetupError: If the players break any game invariant.
    """
    mrx, detectives = config.make_players()
    state = GameState.build(setup, mrx, detectives)
    logger.info(
        "Game initialized: %d detectives, %d rounds, MrX at %d",
        len(detectives),
        setup.total_rounds,
        mrx.location,
    )
    return state


def random_game_config(
    graph: TransportGraph,
    detective_pieces: Sequence[Piece] = DETECTIVE_PIECES,
    seed: Optional[int] = None,
) -> GameConfig:
    """Deal start locations from the standard start cards.

    Only start locations present on ``graph`` are dealt. Every player
    receives the standard ticket allotment.

    Raises:
        ValueError: If the detective count is out of range or the graph
            has too few start locations.
    """
    if not MIN_DETECTIVES <= len(detective_pieces) <= MAX_DETECTIVES:
        raise ValueError(
            f"Number of detectives must be between {MIN_DETECTIVES} and {MAX_DETECTIVES}, "
            f"got {len(detective_pieces)}"
        )

    rng = random.Random(seed)
    mrx_choices = [n for n in MRX_START_LOCATIONS if graph.has_node(n)]
    detective_choices = [n for n in DETECTIVE_START_LOCATIONS if graph.has_node(n)]
    if not mrx_choices:
        raise ValueError("Graph has none of the MrX start locations")
    if len(detective_choices) < len(detective_pieces):
        raise ValueError(
            f"Graph has {len(detective_choices)} detective start locations, "
            f"need {len(detective_pieces)}"
        )

    mrx = PlayerConfig(piece=Piece.MRX, location=rng.choice(mrx_choices))
    locations = rng.sample(detective_choices, len(detective_pieces))
    detectives = tuple(
        PlayerConfig(piece=piece, location=location)
        for piece, location in zip(detective_pieces, locations)
    )
    logger.debug("Dealt start locations (seed=%s): MrX=%d detectives=%s", seed, mrx.location, locations)
    return GameConfig(mrx=mrx, detectives=detectives)
