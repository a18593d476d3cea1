"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass(frozen=True)
class Settings:
    app_name: str = "Concierge"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    default_hotel_name: str = "Hotel"
    default_num_rooms: int = 25
    guest_roster_size: int = 100
    starting_reputation: int = 50
    random_seed: Optional[int] = None
    api_base_url: str = "http://127.0.0.1:8000"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call `cache_clear()` to reload."""
    return Settings(
        app_name=os.getenv("CONCIERGE_APP_NAME", "Concierge"),
        app_version=os.getenv("CONCIERGE_APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        default_hotel_name=os.getenv("CONCIERGE_HOTEL_NAME", "Hotel"),
        default_num_rooms=int(os.getenv("CONCIERGE_NUM_ROOMS", "25")),
        guest_roster_size=int(os.getenv("CONCIERGE_ROSTER_SIZE", "100")),
        starting_reputation=int(os.getenv("CONCIERGE_STARTING_REPUTATION", "50")),
        random_seed=_optional_int(os.getenv("CONCIERGE_RANDOM_SEED")),
        api_base_url=os.getenv("CONCIERGE_API_URL", "http://127.0.0.1:8000"),
    )
