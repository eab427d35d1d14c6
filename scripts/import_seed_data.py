#!/usr/bin/env python3
"""
Import seed data into local database for testing.

Usage:
    python scripts/import_seed_data.py

Reads from data/seed_data.json and imports into local database.
Requires DATABASE_URL to be set in .env file.
"""

import json
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from psycopg2.extras import Json

from config import DATA_DIR
from database import get_db, init_db


def import_data():
    """Import seed data from JSON file."""
    seed_file = DATA_DIR / "seed_data.json"

    if not seed_file.exists():
        print(f"Error: {seed_file} not found")
        print("Run export_prod_data.py first to create seed data")
        sys.exit(1)

    with open(seed_file) as f:
        data = json.load(f)

    print(f"Loading seed data from {seed_file}")
    print(f"  Games: {len(data.get('games', []))}")
    print(f"  Players: {len(data.get('players', []))}")
    print(f"  Confirmations: {len(data.get('confirmations', []))}")
    print(f"  MVP votes: {len(data.get('mvp_votes', []))}")

    # Initialize database schema
    print("\nInitializing database schema...")
    init_db()

    with get_db() as conn:
        cursor = conn.cursor()

        for game in data.get("games", []):
            cursor.execute("""
                INSERT INTO games (id, game_date, start_time, location, max_players, created_by, created_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (id) DO UPDATE SET
                    game_date = EXCLUDED.game_date,
                    start_time = EXCLUDED.start_time,
                    location = EXCLUDED.location,
                    max_players = EXCLUDED.max_players
            """, (
                game["id"],
                game["game_date"],
                game.get("start_time", "19:00"),
                game["location"],
                game.get("max_players", 18),
                game.get("created_by", "system"),
                game.get("created_at")
            ))
        print(f"Imported {len(data.get('games', []))} games")

        for player in data.get("players", []):
            cursor.execute("""
                INSERT INTO players (id, user_id, username, attributes, created_at)
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (id) DO UPDATE SET
                    username = EXCLUDED.username,
                    attributes = EXCLUDED.attributes
            """, (
                player["id"],
                player["user_id"],
                player["username"],
                Json(player.get("attributes") or {}),
                player.get("created_at")
            ))
        print(f"Imported {len(data.get('players', []))} players")

        for confirmation in data.get("confirmations", []):
            cursor.execute("""
                INSERT INTO confirmations (game_id, user_id, username, confirmed_at)
                VALUES (%s, %s, %s, %s)
                ON CONFLICT (game_id, user_id) DO NOTHING
            """, (
                confirmation["game_id"],
                confirmation["user_id"],
                confirmation["username"],
                confirmation.get("confirmed_at")
            ))
        print(f"Imported {len(data.get('confirmations', []))} confirmations")

        for vote in data.get("mvp_votes", []):
            cursor.execute("""
                INSERT INTO mvp_votes (game_id, voter_id, player_id, username, rank, created_at)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON CONFLICT (game_id, voter_id, rank) DO NOTHING
            """, (
                vote["game_id"],
                vote["voter_id"],
                vote["player_id"],
                vote["username"],
                vote["rank"],
                vote.get("created_at")
            ))
        print(f"Imported {len(data.get('mvp_votes', []))} MVP votes")

    print("\nSeed data imported successfully!")


if __name__ == "__main__":
    import_data()
