"""Constants and enums for the Scotland Yard game engine."""

from enum import Enum


class Piece(Enum):
    """Player identities, valued by their web colour."""

    MRX = "#000"
    RED = "#f00"
    GREEN = "#0f0"
    BLUE = "#00f"
    WHITE = "#fff"
    YELLOW = "#ff0"

    def is_mrx(self) -> bool:
        """Check if this piece is MrX."""
        return self is Piece.MRX

    def is_detective(self) -> bool:
        """Check if this piece is one of the detectives."""
        return self is not Piece.MRX


class Ticket(Enum):
    """Ticket kinds held by players."""

    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    SECRET = "secret"  # MrX only
    DOUBLE = "double"  # MrX only


class Transport(Enum):
    """Transport modes carried by graph edges."""

    TAXI = "taxi"
    BUS = "bus"
    UNDERGROUND = "underground"
    FERRY = "ferry"

    @property
    def required_ticket(self) -> Ticket:
        """The ticket a player must spend to travel by this transport."""
        return TRANSPORT_TICKETS[self]


TRANSPORT_TICKETS = {
    Transport.TAXI: Ticket.TAXI,
    Transport.BUS: Ticket.BUS,
    Transport.UNDERGROUND: Ticket.UNDERGROUND,
    Transport.FERRY: Ticket.SECRET,
}

# Tickets a detective may never hold
MRX_ONLY_TICKETS = frozenset({Ticket.SECRET, Ticket.DOUBLE})

DETECTIVE_PIECES = (Piece.RED, Piece.GREEN, Piece.BLUE, Piece.WHITE, Piece.YELLOW)

# Player limits
MIN_DETECTIVES = 1
MAX_DETECTIVES = len(DETECTIVE_PIECES)

# Standard ticket allotments
MRX_DEFAULT_TICKETS = {
    Ticket.TAXI: 4,
    Ticket.BUS: 3,
    Ticket.UNDERGROUND: 3,
    Ticket.DOUBLE: 2,
    Ticket.SECRET: 5,
}
DETECTIVE_DEFAULT_TICKETS = {
    Ticket.TAXI: 11,
    Ticket.BUS: 8,
    Ticket.UNDERGROUND: 4,
    Ticket.DOUBLE: 0,
    Ticket.SECRET: 0,
}

# Standard 24-round game, MrX surfaces on rounds 3, 8, 13, 18 and 24
STANDARD_ROUNDS = 24
REVEAL_ROUNDS = (3, 8, 13, 18, 24)
STANDARD_REVEAL_SCHEDULE = tuple(
    round_number in REVEAL_ROUNDS for round_number in range(1, STANDARD_ROUNDS + 1)
)

# Start cards of the standard board
MRX_START_LOCATIONS = (35, 45, 51, 71, 78, 104, 106, 127, 132, 146, 166, 170, 172)
DETECTIVE_START_LOCATIONS = (
    13, 26, 29, 34, 50, 53, 91, 94, 103, 112, 117, 123, 138, 141, 155, 174,
)
