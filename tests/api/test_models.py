from uuid import UUID, uuid4

import pytest

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    ListPlayersRequest,
    MoveRequest,
    RegisterPlayerRequest,
)
from src.core.exceptions import ValidationError
from src.core.shared_types import GameMode, PlayerFilter


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - RegisterPlayerRequest --
def test_name_is_stripped() -> None:
    assert RegisterPlayerRequest(name="  don't hate the player  ").name == (
        "don't hate the player"
    )


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_blank_name(name: str) -> None:
    with pytest.raises(ValidationError):
        _ = RegisterPlayerRequest(name=name)


def test_missing_name() -> None:
    """The default (empty) name is validated too."""
    with pytest.raises(ValidationError):
        _ = RegisterPlayerRequest()


def test_null_name() -> None:
    """A JSON null name is a blank name, not a type error."""
    with pytest.raises(ValidationError, match="Name is required."):
        _ = RegisterPlayerRequest.model_validate({"name": None})


# -- Validation - CreateGameRequest --
@pytest.mark.parametrize("mode", list(GameMode))
def test_valid_modes(mode: GameMode) -> None:
    assert CreateGameRequest(mode=mode).mode == mode


def test_mode_is_normalized() -> None:
    assert CreateGameRequest(mode="  CPU-CPU ").mode == GameMode.CPU_CPU


@pytest.mark.parametrize(
    "mode",
    [
        "",  # nothing
        "cpu-human",  # not (yet) a mode
        "humanhuman",  # missing separator
    ],
)
def test_invalid_mode(mode: str) -> None:
    with pytest.raises(ValidationError):
        _ = CreateGameRequest(mode=mode)


def test_missing_mode() -> None:
    with pytest.raises(ValidationError):
        _ = CreateGameRequest()


def test_player_ids_from_camel_case_json(mock_id: UUID) -> None:
    """JSON keys are camelCase, as sent by the web client."""
    request = CreateGameRequest.model_validate(
        {"mode": "human-cpu", "playerXId": str(mock_id)}
    )
    assert request.player_x_id == mock_id
    assert request.player_o_id is None


@pytest.mark.parametrize("value", ["nope", "", 42, None])
def test_unparsable_player_id_counts_as_missing(value: object) -> None:
    request = CreateGameRequest.model_validate(
        {"mode": "human-human", "playerXId": value, "playerOId": value}
    )
    assert request.player_x_id is None
    assert request.player_o_id is None


# -- Validation - ListPlayersRequest --
@pytest.mark.parametrize(
    "value, expected",
    [
        ("human", PlayerFilter.HUMAN),
        ("CPU", PlayerFilter.CPU),
        ("all", PlayerFilter.ALL),
        ("whatever", PlayerFilter.ALL),
        (None, PlayerFilter.ALL),
    ],
)
def test_player_filter(value: str | None, expected: PlayerFilter) -> None:
    assert ListPlayersRequest(type=value).type == expected


# -- MoveRequest --
def test_move_index_is_not_range_checked(mock_id: UUID) -> None:
    """Range is checked by the Game (after game existence and status), not by the request."""
    assert MoveRequest(game_id=mock_id, index=42).index == 42


# -- Serialization --
def test_game_response_serializes_camel_case(mock_id: UUID) -> None:
    response = GameResponse(
        id=mock_id,
        board=[None] * 9,
        player_x_id=mock_id,
        player_o_id=mock_id,
        player_x=None,
        player_o=None,
        current_symbol="X",
        status="in_progress",
        winner_symbol=None,
        winner_id=None,
        mode="cpu-cpu",
        created_at="2024-01-01T00:00:00Z",
        last_move_at=None,
    )
    data = response.model_dump(by_alias=True)
    assert {"playerXId", "playerOId", "currentSymbol", "winnerSymbol", "lastMoveAt"} <= set(
        data
    )
