"""Tests for game configuration and initial setup."""

import pytest

from core.constants import (
    Piece,
    Ticket,
    Transport,
    DETECTIVE_PIECES,
    MRX_DEFAULT_TICKETS,
    DETECTIVE_DEFAULT_TICKETS,
    MRX_START_LOCATIONS,
    DETECTIVE_START_LOCATIONS,
    STANDARD_REVEAL_SCHEDULE,
)
from core.board import TransportGraph, GameSetup
from core.game_state import GameSetupError
from engine.setup import (
    PlayerConfig,
    GameConfig,
    initialize_game,
    random_game_config,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def full_graph() -> TransportGraph:
    """A taxi line over every location of the standard board."""
    return TransportGraph.from_routes(
        [(n, n + 1, [Transport.TAXI]) for n in range(1, 199)]
    )


@pytest.fixture
def setup(full_graph) -> GameSetup:
    return GameSetup(graph=full_graph, reveal_schedule=STANDARD_REVEAL_SCHEDULE)


# =============================================================================
# PlayerConfig Tests
# =============================================================================

class TestPlayerConfig:
    """Test PlayerConfig parsing and player creation."""

    def test_from_dict(self):
        config = PlayerConfig.from_dict({"piece": "red", "location": 13, "tickets": {"taxi": 3}})
        assert config.piece == Piece.RED
        assert config.location == 13
        assert config.tickets == {Ticket.TAXI: 3}

    def test_default_piece(self):
        """MrX's entry does not need to name its piece."""
        config = PlayerConfig.from_dict({"location": 45}, piece=Piece.MRX)
        assert config.piece == Piece.MRX

    def test_missing_piece_raises(self):
        with pytest.raises(ValueError):
            PlayerConfig.from_dict({"location": 45})

    def test_unknown_piece_raises(self):
        with pytest.raises(ValueError):
            PlayerConfig.from_dict({"piece": "purple", "location": 1})

    def test_missing_location_raises(self):
        with pytest.raises(ValueError):
            PlayerConfig.from_dict({"piece": "red"})

    def test_bad_location_raises(self):
        with pytest.raises(ValueError):
            PlayerConfig.from_dict({"piece": "red", "location": "13"})

    def test_unknown_ticket_raises(self):
        with pytest.raises(ValueError):
            PlayerConfig.from_dict({"piece": "red", "location": 1, "tickets": {"boat": 1}})

    def test_tickets_must_be_mapping(self):
        """A ticket list is rejected with the piece named."""
        with pytest.raises(ValueError, match="RED"):
            PlayerConfig.from_dict({"piece": "red", "location": 3, "tickets": ["taxi"]})

    def test_non_integer_ticket_count_raises(self):
        with pytest.raises(ValueError, match="GREEN"):
            PlayerConfig.from_dict({"piece": "green", "location": 3, "tickets": {"taxi": "lots"}})
        with pytest.raises(ValueError):
            PlayerConfig.from_dict({"piece": "green", "location": 3, "tickets": {"taxi": 1.5}})

    def test_unknown_ticket_names_piece(self):
        with pytest.raises(ValueError, match="BLUE"):
            PlayerConfig.from_dict({"piece": "blue", "location": 3, "tickets": {"rocket": 1}})

    def test_default_tickets(self):
        """Without a ticket map each side gets the standard allotment."""
        mrx = PlayerConfig(piece=Piece.MRX, location=45).make_player()
        red = PlayerConfig(piece=Piece.RED, location=13).make_player()
        assert dict(mrx.tickets) == MRX_DEFAULT_TICKETS
        assert dict(red.tickets) == DETECTIVE_DEFAULT_TICKETS

    def test_explicit_tickets(self):
        player = PlayerConfig(Piece.BLUE, 13, {Ticket.BUS: 1}).make_player()
        assert player.tickets[Ticket.BUS] == 1
        assert player.tickets[Ticket.TAXI] == 0


# =============================================================================
# GameConfig Tests
# =============================================================================

class TestGameConfig:
    """Test GameConfig parsing."""

    def test_from_dict(self):
        config = GameConfig.from_dict({
            "mrx": {"location": 45, "tickets": {"taxi": 4, "secret": 5, "double": 2}},
            "detectives": [
                {"piece": "red", "location": 13},
                {"piece": "green", "location": 26},
            ],
        })
        assert config.mrx.piece == Piece.MRX
        assert config.mrx.tickets[Ticket.SECRET] == 5
        assert [d.piece for d in config.detectives] == [Piece.RED, Piece.GREEN]

    def test_missing_mrx_raises(self):
        with pytest.raises(ValueError):
            GameConfig.from_dict({"detectives": []})

    def test_detectives_must_be_list(self):
        with pytest.raises(ValueError):
            GameConfig.from_dict({"mrx": {"location": 45}, "detectives": {"piece": "red"}})


# =============================================================================
# initialize_game Tests
# =============================================================================

class TestInitializeGame:
    """Test building the opening position."""

    def test_initialize(self, setup):
        config = GameConfig.from_dict({
            "mrx": {"location": 45},
            "detectives": [{"piece": "red", "location": 13}, {"piece": "blue", "location": 26}],
        })
        state = initialize_game(setup, config)
        assert state.remaining == {Piece.MRX}
        assert state.mrx.location == 45
        assert state.get_detective_location(Piece.BLUE) == 26
        assert state.available_moves

    def test_detective_with_secret_rejected(self, setup):
        config = GameConfig.from_dict({
            "mrx": {"location": 45},
            "detectives": [{"piece": "red", "location": 13, "tickets": {"secret": 1}}],
        })
        with pytest.raises(GameSetupError):
            initialize_game(setup, config)


# =============================================================================
# random_game_config Tests
# =============================================================================

class TestRandomGameConfig:
    """Test dealing start locations."""

    def test_deals_standard_locations(self, full_graph):
        config = random_game_config(full_graph, seed=7)
        assert config.mrx.location in MRX_START_LOCATIONS
        locations = [d.location for d in config.detectives]
        assert len(set(locations)) == len(DETECTIVE_PIECES)
        assert all(location in DETECTIVE_START_LOCATIONS for location in locations)
        assert [d.piece for d in config.detectives] == list(DETECTIVE_PIECES)

    def test_seed_is_reproducible(self, full_graph):
        assert random_game_config(full_graph, seed=3) == random_game_config(full_graph, seed=3)

    def test_playable(self, setup, full_graph):
        config = random_game_config(full_graph, [Piece.RED, Piece.YELLOW], seed=1)
        state = initialize_game(setup, config)
        assert state.players == {Piece.MRX, Piece.RED, Piece.YELLOW}

    def test_detective_count_limits(self, full_graph):
        with pytest.raises(ValueError):
            random_game_config(full_graph, [])
        with pytest.raises(ValueError):
            random_game_config(full_graph, list(DETECTIVE_PIECES) + [Piece.RED])

    def test_graph_without_start_locations(self):
        graph = TransportGraph.from_routes([(1, 2, [Transport.TAXI])])
        with pytest.raises(ValueError):
            random_game_config(graph, [Piece.RED])
