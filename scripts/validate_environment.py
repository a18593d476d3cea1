#!/usr/bin/env python3
"""Validate local Concierge environment readiness."""

from __future__ import annotations

import importlib
import random
import sys
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from concierge.domain.constraints import GameConfig
from concierge.domain.models import Decision
from concierge.services.game_service import ConciergeGame
from concierge.utils.config import get_settings

SEPARATOR_LINE = "=" * 44
SMOKE_TEST_DAYS = 30


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.11
    if sys.version_info >= (3, 11):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.11",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable with versions
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("pandas", "pandas"),
        ("requests", "requests"),
        ("streamlit", "streamlit"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    import_errors: list[str] = []
    try:
        from importlib.metadata import version
    except Exception:  # pragma: no cover
        version = None  # type: ignore[assignment]
    for module_name, dist_name in package_specs:
        try:
            module = importlib.import_module(module_name)
            if version is not None:
                _ = version(dist_name)
            else:
                _ = getattr(module, "__version__", "unknown")
        except Exception as exc:  # pragma: no cover - runtime guard
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    settings = replace(get_settings(), random_seed=7)

    # CHECK 3: Game construction
    game = None
    try:
        game = ConciergeGame(GameConfig.from_preset("medium", settings=settings), settings=settings)
        if len(game.guests) != settings.guest_roster_size:
            raise RuntimeError(
                f"expected {settings.guest_roster_size} guests, got {len(game.guests)}"
            )
        ok, line = _print_result(
            "Game construction",
            True,
            f": {game.hotel.num_rooms} rooms, {len(game.guests)} guests",
        )
    except Exception as exc:
        ok, line = _print_result("Game construction", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Smoke-run days, resolving every request at random
    if game is not None:
        try:
            chooser = random.Random(0)
            resolved = 0
            for _ in range(SMOKE_TEST_DAYS):
                game.advance_day()
                while game.request_queue:
                    request = game.request_queue[0]
                    wants_accept = chooser.random() < 0.5 and request.can_accept(game)
                    game.resolve_request(
                        0,
                        Decision.ACCEPT if wants_accept else Decision.DECLINE,
                    )
                    resolved += 1
                for room in game.hotel.rooms:
                    if room.occupant_uid is not None:
                        occupant = game.get_guest(room.occupant_uid)
                        if occupant.room_number != room.room_number:
                            raise RuntimeError(f"occupancy mismatch in room {room.room_number}")
            ok, line = _print_result(
                f"Simulation smoke run: {SMOKE_TEST_DAYS} days",
                True,
                f": {resolved} requests resolved, reputation={game.hotel.reputation}",
            )
        except Exception as exc:
            ok, line = _print_result("Simulation smoke run", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Concierge Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
