"""Moves and travel log entries for the Scotland Yard game engine.

A move is one of two shapes:
- SingleMove: one ticket, one destination
- DoubleMove: a Double ticket plus two legs, each with its own ticket

Both are frozen, hashable values so legal move sets can be compared with
set semantics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .constants import Piece, Ticket
from .board import NodeId


@dataclass(frozen=True)
class SingleMove:
    """A move along one edge using one ticket."""

    piece: Piece
    source: NodeId
    ticket: Ticket
    destination: NodeId

    def tickets(self) -> tuple[Ticket, ...]:
        """All tickets spent by this move."""
        return (self.ticket,)

    @property
    def final_destination(self) -> NodeId:
        return self.destination

    def __str__(self) -> str:
        return f"{self.piece.name}: {self.source} -{self.ticket.value}-> {self.destination}"


@dataclass(frozen=True)
class DoubleMove:
    """Two consecutive moves played with a Double ticket."""

    piece: Piece
    source: NodeId
    ticket1: Ticket
    destination1: NodeId
    ticket2: Ticket
    destination2: NodeId

    def tickets(self) -> tuple[Ticket, ...]:
        """All tickets spent by this move, the Double ticket first."""
        return (Ticket.DOUBLE, self.ticket1, self.ticket2)

    @property
    def final_destination(self) -> NodeId:
        return self.destination2

    def __str__(self) -> str:
        return (
            f"{self.piece.name}: {self.source} -{self.ticket1.value}-> {self.destination1}"
            f" -{self.ticket2.value}-> {self.destination2}"
        )


Move = Union[SingleMove, DoubleMove]


@dataclass(frozen=True)
class LogEntry:
    """One round of MrX's travel log.

    The ticket is always recorded. The location is only present on reveal
    rounds; hidden entries carry ``location=None``.
    """

    ticket: Ticket
    location: Optional[NodeId] = None

    @classmethod
    def reveal(cls, ticket: Ticket, location: NodeId) -> LogEntry:
        return cls(ticket=ticket, location=location)

    @classmethod
    def hidden(cls, ticket: Ticket) -> LogEntry:
        return cls(ticket=ticket)

    def is_revealed(self) -> bool:
        return self.location is not None

    def __str__(self) -> str:
        where = self.location if self.is_revealed() else "?"
        return f"{self.ticket.value}->{where}"
