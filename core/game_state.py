"""Game state for the Scotland Yard game engine.

GameState is the single source of truth for a game position. It is
immutable: advance() validates a move and returns a brand new state, so
earlier states stay valid and can be explored independently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from .constants import Piece, Ticket, MRX_ONLY_TICKETS
from .board import GameSetup, NodeId
from .player import Player
from .moves import SingleMove, DoubleMove, Move, LogEntry
from .move_generator import detective_moves, is_stuck, mrx_moves
from .win_evaluator import compute_winner


class GameSetupError(ValueError):
    """Raised when a game state is built from an invalid configuration."""


class IllegalMoveError(ValueError):
    """Raised when advance() is given a move that is not currently legal."""


@dataclass(frozen=True)
class GameState:
    """An immutable game position.

    Attributes:
        setup: The board and reveal schedule.
        remaining: Pieces still to act in the current round.
        log: MrX's travel log, one entry per MrX ticket played.
        mrx: The MrX player.
        detectives: Detective players in turn order.
    """

    setup: GameSetup
    remaining: frozenset[Piece]
    log: tuple[LogEntry, ...]
    mrx: Player
    detectives: tuple[Player, ...]
    _winner: frozenset[Piece] = field(init=False, repr=False, compare=False)
    _moves: frozenset[Move] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "remaining", frozenset(self.remaining))
        object.__setattr__(self, "log", tuple(self.log))
        object.__setattr__(self, "detectives", tuple(self.detectives))
        self._validate()

        winner = compute_winner(self.setup, self.mrx, self.detectives, self.remaining, self.log)
        object.__setattr__(self, "_winner", winner)
        object.__setattr__(self, "_moves", frozenset() if winner else self._compute_moves())

    @classmethod
    def build(
        cls,
        setup: GameSetup,
        mrx: Player,
        detectives: Sequence[Player],
    ) -> GameState:
        """Create the opening position: empty log, MrX to move.

        Raises:
            GameSetupError: If the configuration breaks any game invariant.
        """
        return cls(
            setup=setup,
            remaining=frozenset({Piece.MRX}),
            log=(),
            mrx=mrx,
            detectives=tuple(detectives),
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate(self) -> None:
        if not self.setup.reveal_schedule:
            raise GameSetupError("Reveal schedule is empty")
        if self.setup.graph.edge_count() == 0:
            raise GameSetupError("Graph has no edges")
        if not self.detectives:
            raise GameSetupError("There are no detectives")
        if self.mrx is None or not self.mrx.is_mrx():
            raise GameSetupError(f"MrX player has the wrong piece: {self.mrx}")

        pieces: set[Piece] = set()
        locations: set[NodeId] = set()
        for detective in self.detectives:
            if not detective.is_detective():
                raise GameSetupError(f"Detective has a MrX piece: {detective}")
            if detective.piece in pieces:
                raise GameSetupError(f"Duplicate detective: {detective.piece.name}")
            if detective.location in locations:
                raise GameSetupError(
                    f"Detectives share location {detective.location}"
                )
            for ticket in MRX_ONLY_TICKETS:
                if detective.has(ticket):
                    raise GameSetupError(
                        f"Detective {detective.piece.name} holds {ticket.value} tickets"
                    )
            pieces.add(detective.piece)
            locations.add(detective.location)

        for player in (self.mrx, *self.detectives):
            if not self.setup.graph.has_node(player.location):
                raise GameSetupError(
                    f"{player.piece.name} is at {player.location}, which is not on the graph"
                )

        if len(self.log) > self.setup.total_rounds:
            raise GameSetupError(
                f"Travel log has {len(self.log)} entries but only "
                f"{self.setup.total_rounds} rounds are scheduled"
            )

        if not self.remaining:
            raise GameSetupError("No pieces left to act")
        unknown = self.remaining - pieces - {self.mrx.piece}
        if unknown:
            raise GameSetupError(f"Remaining pieces not in game: {sorted(p.name for p in unknown)}")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def players(self) -> frozenset[Piece]:
        """All pieces in the game."""
        return frozenset({self.mrx.piece, *(d.piece for d in self.detectives)})

    @property
    def travel_log(self) -> tuple[LogEntry, ...]:
        return self.log

    @property
    def winner(self) -> frozenset[Piece]:
        """The winning pieces (empty while the game goes on)."""
        return self._winner

    @property
    def available_moves(self) -> frozenset[Move]:
        """Legal moves for the pieces still to act (empty once there is a winner)."""
        return self._moves

    @property
    def round_number(self) -> int:
        """Rounds MrX has played so far."""
        return len(self.log)

    @property
    def rounds_remaining(self) -> int:
        return self.setup.total_rounds - len(self.log)

    def is_game_over(self) -> bool:
        return bool(self._winner)

    def is_mrx_turn(self) -> bool:
        return self.mrx.piece in self.remaining

    def get_player(self, piece: Piece) -> Optional[Player]:
        """Get the player controlling a piece, or None if not in the game."""
        if piece == self.mrx.piece:
            return self.mrx
        for detective in self.detectives:
            if detective.piece == piece:
                return detective
        return None

    def get_detective_location(self, piece: Piece) -> Optional[NodeId]:
        """Get a detective's location; None for MrX or absent pieces."""
        player = self.get_player(piece)
        if player is None or not player.is_detective():
            return None
        return player.location

    def get_player_tickets(self, piece: Piece) -> Optional[Mapping[Ticket, int]]:
        """Get a read-only view of a piece's tickets, or None if absent."""
        player = self.get_player(piece)
        return None if player is None else player.tickets

    # -------------------------------------------------------------------------
    # Move generation
    # -------------------------------------------------------------------------

    def _compute_moves(self) -> frozenset[Move]:
        if self.is_mrx_turn():
            return mrx_moves(self.setup, self.mrx, self.detectives, self.rounds_remaining)
        return frozenset().union(
            *(
                detective_moves(self.setup, d, self.detectives)
                for d in self.detectives
                if d.piece in self.remaining
            )
        )

    # -------------------------------------------------------------------------
    # Transition
    # -------------------------------------------------------------------------

    def advance(self, move: Move) -> GameState:
        """Play a legal move and return the resulting state.

        Args:
            move: A member of available_moves.

        Returns:
            A new GameState; this one is left untouched.

        Raises:
            IllegalMoveError: If the move is not currently legal.
        """
        if move not in self._moves:
            raise IllegalMoveError(f"Illegal move: {move}")

        if isinstance(move, SingleMove):
            mrx, detectives, log = self._apply_single(move)
        elif isinstance(move, DoubleMove):
            mrx, detectives, log = self._apply_double(move)
        else:
            raise TypeError(f"Unknown move type: {type(move).__name__}")

        remaining = self._next_remaining(move.piece, detectives)
        return GameState(
            setup=self.setup,
            remaining=remaining,
            log=log,
            mrx=mrx,
            detectives=detectives,
        )

    def _apply_single(
        self, move: SingleMove
    ) -> tuple[Player, tuple[Player, ...], tuple[LogEntry, ...]]:
        if move.piece == self.mrx.piece:
            mrx = self.mrx.use(move.ticket).at(move.destination)
            log = self._logged(self.log, move.ticket, move.destination)
            return mrx, self.detectives, log

        # Detectives hand their spent ticket over to MrX
        detectives = tuple(
            d.use(move.ticket).at(move.destination) if d.piece == move.piece else d
            for d in self.detectives
        )
        return self.mrx.give_all(move.tickets()), detectives, self.log

    def _apply_double(
        self, move: DoubleMove
    ) -> tuple[Player, tuple[Player, ...], tuple[LogEntry, ...]]:
        mrx = self.mrx.use_all(move.tickets()).at(move.final_destination)
        log = self._logged(self.log, move.ticket1, move.destination1)
        log = self._logged(log, move.ticket2, move.destination2)
        return mrx, self.detectives, log

    def _logged(
        self, log: tuple[LogEntry, ...], ticket: Ticket, destination: NodeId
    ) -> tuple[LogEntry, ...]:
        if self.setup.is_reveal_round(len(log)):
            return log + (LogEntry.reveal(ticket, destination),)
        return log + (LogEntry.hidden(ticket),)

    def _next_remaining(
        self, mover: Piece, detectives: tuple[Player, ...]
    ) -> frozenset[Piece]:
        """Work out who still acts this round after ``mover`` has played.

        After MrX, every detective who can move is owed a turn. After a
        detective, that detective is done and any remaining detective who
        has become stuck is skipped. An empty round hands the turn to MrX.
        """
        if mover == self.mrx.piece:
            owed = {d.piece for d in detectives}
        else:
            owed = set(self.remaining) - {mover}

        remaining = frozenset(
            d.piece
            for d in detectives
            if d.piece in owed and not is_stuck(self.setup, d, detectives)
        )
        return remaining or frozenset({self.mrx.piece})

    # -------------------------------------------------------------------------
    # String representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        winner = ", ".join(sorted(p.name for p in self._winner)) or "none"
        lines = [
            f"GameState(round={self.round_number}/{self.setup.total_rounds}, winner={winner})",
            f"  To move: {', '.join(sorted(p.name for p in self.remaining))}",
            f"  MrX: {self.mrx}",
            f"  Detectives ({len(self.detectives)}):",
        ]
        for detective in self.detectives:
            lines.append(f"    {detective}")
        lines.append(f"  Log: {' '.join(str(entry) for entry in self.log) or '-'}")
        lines.append(f"  Available moves: {len(self._moves)}")
        return "\n".join(lines)
