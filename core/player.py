"""Player model for the Scotland Yard game engine.

A player pairs a piece with its current location and ticket inventory.
Players are immutable: spending or receiving tickets and moving all
return a new Player value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from .constants import Piece, Ticket
from .board import NodeId


@dataclass(frozen=True)
class Player:
    """Represents a player in the Scotland Yard game.

    Attributes:
        piece: The piece this player controls (MrX or a detective colour).
        location: The node the piece currently stands on.
        tickets: Read-only count of tickets held, one entry per Ticket kind.
    """

    piece: Piece
    location: NodeId
    tickets: Mapping[Ticket, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        counts = {ticket: 0 for ticket in Ticket}
        for ticket, count in self.tickets.items():
            ticket = Ticket(ticket)
            if not isinstance(count, int) or isinstance(count, bool):
                raise ValueError(
                    f"{self.piece.name} ticket count for {ticket.value} must be an integer, got {count!r}"
                )
            if count < 0:
                raise ValueError(
                    f"{self.piece.name} cannot hold a negative number of {ticket.value} tickets"
                )
            counts[ticket] = count
        object.__setattr__(self, "tickets", MappingProxyType(counts))

    def __hash__(self) -> int:
        return hash((self.piece, self.location, tuple(self.tickets.items())))

    def is_mrx(self) -> bool:
        return self.piece.is_mrx()

    def is_detective(self) -> bool:
        return self.piece.is_detective()

    def has(self, ticket: Ticket) -> bool:
        """Check if the player holds at least one ticket of a kind."""
        return self.tickets[ticket] > 0

    def use(self, ticket: Ticket) -> Player:
        """Spend one ticket.

        Raises:
            ValueError: If the player holds no ticket of that kind.
        """
        if not self.has(ticket):
            raise ValueError(f"{self.piece.name} has no {ticket.value} tickets remaining")
        return self._with_count(ticket, self.tickets[ticket] - 1)

    def use_all(self, tickets: Iterable[Ticket]) -> Player:
        player = self
        for ticket in tickets:
            player = player.use(ticket)
        return player

    def give(self, ticket: Ticket) -> Player:
        """Receive one ticket."""
        return self._with_count(ticket, self.tickets[ticket] + 1)

    def give_all(self, tickets: Iterable[Ticket]) -> Player:
        player = self
        for ticket in tickets:
            player = player.give(ticket)
        return player

    def at(self, location: NodeId) -> Player:
        """Return this player relocated to another node."""
        return Player(piece=self.piece, location=location, tickets=self.tickets)

    def _with_count(self, ticket: Ticket, count: int) -> Player:
        tickets = dict(self.tickets)
        tickets[ticket] = count
        return Player(piece=self.piece, location=self.location, tickets=tickets)

    def __str__(self) -> str:
        held = ", ".join(f"{t.value}={n}" for t, n in self.tickets.items() if n)
        return f"{self.piece.name}@{self.location} [{held}]"
