#!/usr/bin/env python3
"""
Create the club's weekly Saturday game.

Usage:
    python scripts/create_weekly_game.py

Meant to run from cron every Saturday afternoon, e.g.:

    0 14 * * 6  cd /srv/volleyball && python scripts/create_weekly_game.py

Running it twice for the same Saturday does not create a second game.
Requires DATABASE_URL to be set in .env file.
"""

import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from database import get_db
from weekly_game import create_weekly_game


def main():
    with get_db() as conn:
        game = create_weekly_game(conn)

    print(f"Weekly game {game['id']} on {game['game_date']} at {game['start_time']}")
    print(f"Location: {game['location']} (max {game['max_players']} players)")


if __name__ == "__main__":
    main()
