"""
Create the tables and reset the game config row to its defaults.

Usage:
    cd backend
    python -m scripts.seed_game_config          # Dry-run (shows current and default values)
    python -m scripts.seed_game_config --apply  # Actually write the row
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Suppress noisy SQLAlchemy logs during seed
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

# Ensure backend root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.core.config import get_settings
from app.infrastructure.local.database import dispose_engine, get_session_factory, init_db
from app.infrastructure.local.game_config_repository import SqliteGameConfigRepository
from app.models.game import DEFAULT_GAME_CONFIG, GameSettingsUpdate


async def seed(dry_run: bool = True) -> None:
    settings = get_settings()
    print(f"Database: {settings.DATABASE_URL}")

    await init_db(seed_game_config=False)
    repo = SqliteGameConfigRepository(get_session_factory())
    try:
        current = await repo.get()
        print(f"Current: {current.model_dump() if current else '(no row)'}")
        print(f"Default: {DEFAULT_GAME_CONFIG}")

        if dry_run:
            print("\n→ --apply フラグで実行してください")
            return

        # Assets are kept; only the counting rules are reset
        update = GameSettingsUpdate(
            **DEFAULT_GAME_CONFIG,
            aho_text=current.aho_text if current else None,
            aho_image_url=current.aho_image_url if current else None,
            aho_sound_url=current.aho_sound_url if current else None,
        )
        saved = await repo.save(update)
        print(f"Saved: {saved.model_dump()}")
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Reset the Nabeatsu game config to its defaults."
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Actually write the row. Default is dry-run.",
    )
    args = parser.parse_args()
    asyncio.run(seed(dry_run=not args.apply))


if __name__ == "__main__":
    main()
