"""Unit tests for src/db/memory_repository.py"""

from datetime import datetime, timezone
from uuid import uuid4

from src.core.models import GameModel
from src.core.shared_types import PlayerType
from src.db.memory_repository import InMemoryRepository


def make_model(status: str = "in_progress") -> GameModel:
    return GameModel(
        board=[None] * 9,
        player_x_id=uuid4(),
        player_o_id=uuid4(),
        current_symbol="X",
        status=status,
        mode="human-human",
        created_at=datetime.now(timezone.utc),
    )


# -- PLAYERS --
def test_create_and_get_player(repository: InMemoryRepository) -> None:
    player = repository.create_player("Alice", PlayerType.HUMAN)
    assert player.name == "Alice"
    assert player.type == PlayerType.HUMAN
    assert repository.get_player(player.id) == player


def test_get_unknown_player(repository: InMemoryRepository) -> None:
    assert repository.get_player(uuid4()) is None


def test_find_player_ignores_case(repository: InMemoryRepository) -> None:
    player = repository.create_player("Alice", PlayerType.HUMAN)
    assert repository.find_player(PlayerType.HUMAN, "aLiCe") == player


def test_find_player_checks_type(repository: InMemoryRepository) -> None:
    repository.create_player("CPU", PlayerType.CPU)
    assert repository.find_player(PlayerType.HUMAN, "CPU") is None
    assert repository.find_player(PlayerType.CPU, "CPU") is not None


def test_find_cpu_player_matches_exact_label(repository: InMemoryRepository) -> None:
    """Only human names ignore case, CPU labels are compared as they are."""
    repository.create_player("CPU", PlayerType.CPU)
    repository.create_player("CPU 1", PlayerType.CPU)
    assert repository.find_player(PlayerType.CPU, "cpu") is None
    assert repository.find_player(PlayerType.CPU, "cpu 1") is None
    assert repository.find_player(PlayerType.CPU, "CPU 1") is not None


def test_list_players_in_creation_order(repository: InMemoryRepository) -> None:
    first = repository.create_player("Alice", PlayerType.HUMAN)
    cpu = repository.create_player("CPU", PlayerType.CPU)
    second = repository.create_player("Bob", PlayerType.HUMAN)

    assert repository.list_players() == [first, cpu, second]
    assert repository.list_players(PlayerType.HUMAN) == [first, second]
    assert repository.list_players(PlayerType.CPU) == [cpu]


def test_cpu_labels_keep_counting(repository: InMemoryRepository) -> None:
    assert repository.next_cpu_labels(2) == ["CPU 1", "CPU 2"]
    assert repository.next_cpu_labels(2) == ["CPU 3", "CPU 4"]


def test_cpu_labels_are_per_store() -> None:
    assert InMemoryRepository().next_cpu_labels(1) == ["CPU 1"]
    assert InMemoryRepository().next_cpu_labels(1) == ["CPU 1"]


# -- GAMES --
def test_create_game(repository: InMemoryRepository) -> None:
    model = make_model()
    stored, game_id = repository.create_game(model)
    assert stored == model
    assert repository.get_game(game_id) == model


def test_get_unknown_game(repository: InMemoryRepository) -> None:
    assert repository.get_game(uuid4()) is None


def test_update_game(repository: InMemoryRepository) -> None:
    _, game_id = repository.create_game(make_model())
    updated = make_model(status="draw")
    assert repository.update_game(game_id, updated) == updated
    found = repository.get_game(game_id)
    assert found is not None
    assert found.status == "draw"


def test_update_unknown_game(repository: InMemoryRepository) -> None:
    assert repository.update_game(uuid4(), make_model()) is None


def test_list_games_most_recent_first(repository: InMemoryRepository) -> None:
    _, first_id = repository.create_game(make_model())
    _, second_id = repository.create_game(make_model())
    _, third_id = repository.create_game(make_model())
    assert [game_id for game_id, _ in repository.list_games()] == [
        third_id,
        second_id,
        first_id,
    ]


def test_stored_game_is_a_copy(repository: InMemoryRepository) -> None:
    """Mutating a model after storing it, or after reading it, never changes the stored record."""
    model = make_model()
    _, game_id = repository.create_game(model)
    model.board[0] = "X"

    found = repository.get_game(game_id)
    assert found is not None
    assert found.board[0] is None

    found.board[1] = "O"
    again = repository.get_game(game_id)
    assert again is not None
    assert again.board[1] is None
