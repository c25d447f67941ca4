"""Legal move generation for the Scotland Yard game engine.

All functions here are pure: the setup and player lists are passed in
explicitly and every call returns a freshly built frozenset.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence

from .constants import Piece, Ticket
from .board import GameSetup, NodeId
from .player import Player
from .moves import SingleMove, DoubleMove, Move


def occupied_locations(
    detectives: Iterable[Player],
    exclude: Optional[Piece] = None,
) -> frozenset[NodeId]:
    """Return the locations blocked by detectives.

    Args:
        detectives: All detective players.
        exclude: A piece whose own location should not count (the mover).
    """
    return frozenset(d.location for d in detectives if d.piece != exclude)


def _single_move_candidates(
    setup: GameSetup,
    occupied: frozenset[NodeId],
    player: Player,
    source: NodeId,
) -> Iterator[SingleMove]:
    for destination in setup.graph.adjacent_nodes(source):
        if destination in occupied:
            continue
        for transport in setup.graph.transports_between(source, destination):
            if player.has(transport.required_ticket):
                yield SingleMove(player.piece, source, transport.required_ticket, destination)
        if player.has(Ticket.SECRET):
            yield SingleMove(player.piece, source, Ticket.SECRET, destination)


def single_moves(
    setup: GameSetup,
    occupied: frozenset[NodeId],
    player: Player,
    source: NodeId,
) -> frozenset[SingleMove]:
    """Compute every legal one-ticket move for a player.

    A move is emitted for each unoccupied neighbour of ``source`` and each
    transport on that edge the player has a ticket for. A Secret ticket
    reaches any unoccupied neighbour regardless of the edge's transports.
    Duplicate (ticket, destination) pairs collapse into one move.

    Args:
        setup: The game setup (provides the graph).
        occupied: Locations held by detectives other than the mover.
        player: The moving player.
        source: The location to move from.

    Returns:
        Frozenset of SingleMove.
    """
    return frozenset(_single_move_candidates(setup, occupied, player, source))


def double_moves(
    setup: GameSetup,
    occupied: frozenset[NodeId],
    player: Player,
    source: NodeId,
    rounds_remaining: int,
) -> frozenset[DoubleMove]:
    """Compute every legal Double-ticket move for a player.

    Each first leg is applied hypothetically (ticket spent, player moved)
    before the second leg is generated, so two legs of the same kind need
    two tickets. The second leg may return to ``source`` unless a detective
    stands there.

    Returns:
        Frozenset of DoubleMove, empty without a Double ticket or with
        fewer than two rounds left.
    """
    if not player.has(Ticket.DOUBLE) or rounds_remaining < 2:
        return frozenset()

    return frozenset(
        DoubleMove(
            player.piece,
            source,
            first.ticket,
            first.destination,
            second.ticket,
            second.destination,
        )
        for first in single_moves(setup, occupied, player, source)
        for second in single_moves(
            setup,
            occupied,
            player.use(first.ticket).at(first.destination),
            first.destination,
        )
    )


def detective_moves(
    setup: GameSetup,
    detective: Player,
    detectives: Sequence[Player],
) -> frozenset[SingleMove]:
    """Legal moves for one detective; other detectives block, MrX does not."""
    occupied = occupied_locations(detectives, exclude=detective.piece)
    return single_moves(setup, occupied, detective, detective.location)


def is_stuck(setup: GameSetup, detective: Player, detectives: Sequence[Player]) -> bool:
    """Check if a detective has no legal move."""
    return not detective_moves(setup, detective, detectives)


def mrx_moves(
    setup: GameSetup,
    mrx: Player,
    detectives: Sequence[Player],
    rounds_remaining: int,
) -> frozenset[Move]:
    """Legal single and double moves for MrX."""
    occupied = occupied_locations(detectives)
    singles = single_moves(setup, occupied, mrx, mrx.location)
    doubles = double_moves(setup, occupied, mrx, mrx.location, rounds_remaining)
    return singles | doubles
