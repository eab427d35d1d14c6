from __future__ import annotations

import pytest
from pydantic import ValidationError

from constants import DEFAULT_DRAW_MODE
from models import DrawRequest, Player, PlayerAttributes


def test_attribute_average() -> None:
    attributes = PlayerAttributes(serve=7, passing=7, attack=7, block=0, defense=0, setting=0, fitness=7)
    assert attributes.average() == pytest.approx(4.0)


def test_attributes_are_bounded() -> None:
    with pytest.raises(ValidationError):
        PlayerAttributes(serve=11)
    with pytest.raises(ValidationError):
        PlayerAttributes(block=-1)


def test_player_from_row_derives_rating() -> None:
    row = {
        "id": "p1",
        "user_id": "u1",
        "username": "Ana",
        "attributes": {"serve": 10, "passing": 8, "attack": 6, "block": 4, "defense": 2, "setting": 5, "fitness": 7},
        "created_at": "2026-10-01T12:00:00",
    }
    player = Player.from_row(row)

    assert player.id == "p1"
    assert player.user_id == "u1"
    assert player.average_rating == pytest.approx(6.0)
    assert not player.is_visitor


def test_player_from_row_without_attributes() -> None:
    player = Player.from_row({"id": "p2", "user_id": "u2", "username": "Bia", "attributes": None})

    assert player.attributes == PlayerAttributes()
    assert player.average_rating == 0.0


def test_player_rating_from_uneven_attributes() -> None:
    player = Player(
        id="p3",
        username="Caio",
        attributes={"serve": 10, "passing": 0, "attack": 10, "block": 0, "defense": 10, "setting": 0, "fitness": 10},
    )

    assert player.average_rating == pytest.approx(40 / 7)


def test_player_explicit_rating_wins_over_attributes() -> None:
    player = Player(id="p4", username="Duda", attributes={"serve": 10}, average_rating=2.5)

    assert player.average_rating == 2.5


def test_player_without_attributes_keeps_given_rating() -> None:
    assert Player(id="p5", username="Edu").average_rating == 0.0
    assert Player(id="p6", username="Fabi", average_rating=7).average_rating == 7.0


def test_draw_request_defaults_to_preset() -> None:
    request = DrawRequest()

    assert request.number_of_teams == 2
    assert request.max_players_per_team == 6
    assert request.mode == DEFAULT_DRAW_MODE
    assert request.visitors == 0


def test_draw_request_fills_from_named_format() -> None:
    request = DrawRequest(format="3teams-4vs4")

    assert request.number_of_teams == 3
    assert request.max_players_per_team == 4


def test_draw_request_explicit_numbers_override_format() -> None:
    request = DrawRequest(format="4teams-3vs3", max_players_per_team=5)

    assert request.number_of_teams == 4
    assert request.max_players_per_team == 5


@pytest.mark.parametrize(
    "payload",
    [
        {"number_of_teams": 0},
        {"max_players_per_team": 0},
        {"mode": "alphabetical"},
        {"format": "5teams-1vs1"},
        {"visitors": -1},
    ],
)
def test_draw_request_rejects_invalid_configuration(payload: dict) -> None:
    with pytest.raises(ValidationError):
        DrawRequest(**payload)
