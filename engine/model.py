"""Observable game model for the Scotland Yard game engine.

The Model wraps the current GameState and is the object a front end talks
to. It provides:
- choose_move(): Advance the game with a legal move
- register_observer() / unregister_observer(): Subscribe to state changes

After every successful move each observer is told about the new state,
with Event.GAME_OVER once a winner exists and Event.MOVE_MADE otherwise.

Usage:
    model = Model.build(setup, mrx, detectives)
    model.register_observer(renderer)

    while not model.current_state.is_game_over():
        move = select_move(model.current_state.available_moves)
        model.choose_move(move)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence

from core.board import GameSetup
from core.player import Player
from core.moves import Move
from core.game_state import GameState


logger = logging.getLogger(__name__)


class Event(Enum):
    """Kinds of model change sent to observers."""

    MOVE_MADE = "move_made"
    GAME_OVER = "game_over"


class Observer(ABC):
    """Abstract base class for anything that follows a Model."""

    @abstractmethod
    def on_model_changed(self, state: GameState, event: Event) -> None:
        """Called after each move with the resulting state."""
        pass


class Model:
    """Holds the current game state and notifies observers as it changes."""

    def __init__(self, state: GameState):
        self._state = state
        self._observers: list[Observer] = []

    @classmethod
    def build(
        cls,
        setup: GameSetup,
        mrx: Player,
        detectives: Sequence[Player],
    ) -> Model:
        """Create a model at the opening position of a new game."""
        return cls(GameState.build(setup, mrx, detectives))

    @property
    def current_state(self) -> GameState:
        return self._state

    @property
    def observers(self) -> tuple[Observer, ...]:
        """Currently registered observers, in registration order."""
        return tuple(self._observers)

    def register_observer(self, observer: Observer) -> None:
        """Register an observer.

        Raises:
            ValueError: If the observer is None or already registered.
        """
        if observer is None:
            raise ValueError("Observer must not be None")
        if any(o is observer for o in self._observers):
            raise ValueError(f"Observer already registered: {observer!r}")
        self._observers.append(observer)

    def unregister_observer(self, observer: Observer) -> None:
        """Unregister an observer.

        Raises:
            ValueError: If the observer is None or was never registered.
        """
        if observer is None:
            raise ValueError("Observer must not be None")
        for i, registered in enumerate(self._observers):
            if registered is observer:
                del self._observers[i]
                return
        raise ValueError(f"Observer not registered: {observer!r}")

    def choose_move(self, move: Move) -> None:
        """Play a move and notify every observer.

        Raises:
            IllegalMoveError: If the move is not legal; observers are not
                notified and the state is unchanged.
        """
        self._state = self._state.advance(move)
        logger.debug("Move made: %s (now at %s)", move, move.final_destination)

        if self._state.is_game_over():
            event = Event.GAME_OVER
            logger.info("Game over, winner: %s", sorted(p.name for p in self._state.winner))
        else:
            event = Event.MOVE_MADE

        for observer in self.observers:
            observer.on_model_changed(self._state, event)
