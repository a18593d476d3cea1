"""Tests for game setup configuration and its validation rules."""

from __future__ import annotations

from dataclasses import replace

import pytest

from concierge.domain.constraints import (
    HOTEL_SIZE_PRESETS,
    GameConfig,
    validate_game_config,
)
from concierge.domain.models import RoomQuality
from concierge.utils.config import get_settings


def valid_config(**overrides) -> GameConfig:
    """Return a valid baseline GameConfig, optionally overriding fields."""
    defaults = {
        "num_rooms": 3,
        "hotel_name": "La'Milton",
        "room_qualities": (RoomQuality.BASIC, RoomQuality.PLUS, RoomQuality.DELUXE),
        "roster_size": 10,
        "starting_reputation": 50,
    }
    defaults.update(overrides)
    return GameConfig(**defaults)


# --- Baseline pass ---

def test_valid_config_passes() -> None:
    validate_game_config(valid_config())


def test_default_config_matches_reference_game() -> None:
    config = GameConfig()
    assert config.num_rooms == 25
    assert config.roster_size == 100
    assert config.room_qualities is None
    validate_game_config(config)


# --- num_rooms ---

def test_num_rooms_zero_raises() -> None:
    with pytest.raises(ValueError):
        validate_game_config(valid_config(num_rooms=0, room_qualities=None))


def test_num_rooms_negative_raises() -> None:
    with pytest.raises(ValueError):
        validate_game_config(valid_config(num_rooms=-4, room_qualities=None))


# --- hotel_name ---

def test_blank_hotel_name_raises() -> None:
    with pytest.raises(ValueError):
        validate_game_config(valid_config(hotel_name="   "))


# --- roster_size ---

def test_negative_roster_size_raises() -> None:
    with pytest.raises(ValueError):
        validate_game_config(valid_config(roster_size=-1))


def test_empty_roster_passes() -> None:
    validate_game_config(valid_config(roster_size=0))


# --- starting_reputation ---

def test_starting_reputation_above_max_raises() -> None:
    with pytest.raises(ValueError):
        validate_game_config(valid_config(starting_reputation=101))


def test_starting_reputation_below_min_raises() -> None:
    with pytest.raises(ValueError):
        validate_game_config(valid_config(starting_reputation=-1))


def test_starting_reputation_bounds_pass() -> None:
    validate_game_config(valid_config(starting_reputation=0))
    validate_game_config(valid_config(starting_reputation=100))


# --- room_qualities ---

def test_room_qualities_length_mismatch_raises() -> None:
    with pytest.raises(ValueError):
        validate_game_config(valid_config(num_rooms=4))


def test_room_qualities_unknown_value_raises() -> None:
    with pytest.raises(ValueError):
        validate_game_config(valid_config(room_qualities=(0, 1, 7)))


# --- presets ---

@pytest.mark.parametrize("size", sorted(HOTEL_SIZE_PRESETS))
def test_presets_build_valid_configs(size: str) -> None:
    config = GameConfig.from_preset(size, hotel_name="Preset Inn")
    validate_game_config(config)
    basic, plus, deluxe = HOTEL_SIZE_PRESETS[size]
    assert config.num_rooms == basic + plus + deluxe
    assert config.room_qualities.count(RoomQuality.BASIC) == basic
    assert config.room_qualities.count(RoomQuality.PLUS) == plus
    assert config.room_qualities.count(RoomQuality.DELUXE) == deluxe


def test_large_preset_matches_status_panel_capacity() -> None:
    config = GameConfig.from_preset("large")
    assert config.num_rooms == 38
    assert config.room_qualities[0] == RoomQuality.BASIC
    assert config.room_qualities[-1] == RoomQuality.DELUXE


def test_unknown_preset_raises() -> None:
    with pytest.raises(ValueError):
        GameConfig.from_preset("palatial")


def test_from_settings_uses_settings_defaults_and_ignores_none_overrides() -> None:
    settings = replace(
        get_settings(),
        default_num_rooms=12,
        default_hotel_name="Settings Hotel",
        guest_roster_size=7,
        starting_reputation=30,
    )
    config = GameConfig.from_settings(settings, num_rooms=None, hotel_name="Override")
    assert config.num_rooms == 12
    assert config.hotel_name == "Override"
    assert config.roster_size == 7
    assert config.starting_reputation == 30
