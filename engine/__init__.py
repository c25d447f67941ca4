"""Game engine for the Scotland Yard board game.

This module provides the layer above the core rules:
- Game configuration and opening-position setup
- The observable Model that front ends drive
"""

from .setup import (
    PlayerConfig,
    GameConfig,
    initialize_game,
    random_game_config,
)

from .model import (
    Model,
    Observer,
    Event,
)

__all__ = [
    # Setup
    "PlayerConfig",
    "GameConfig",
    "initialize_game",
    "random_game_config",
    # Model
    "Model",
    "Observer",
    "Event",
]
