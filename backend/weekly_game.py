import logging
import secrets
from datetime import date, timedelta
from typing import Optional

from constants import (
    WEEKLY_GAME_CREATED_BY, WEEKLY_GAME_LOCATION, WEEKLY_GAME_MAX_PLAYERS,
    WEEKLY_GAME_TIME, WEEKLY_GAME_WEEKDAY
)

logger = logging.getLogger(__name__)


def generate_game_id() -> str:
    return secrets.token_urlsafe(6)


def next_game_date(today: date, weekday: int = WEEKLY_GAME_WEEKDAY) -> date:
    """First date on or after ``today`` that falls on ``weekday``."""
    return today + timedelta(days=(weekday - today.weekday()) % 7)


def create_weekly_game(conn, today: Optional[date] = None) -> dict:
    """Insert the club's recurring game, once per game date."""
    game_date = next_game_date(today or date.today())
    cursor = conn.cursor()

    cursor.execute(
        "SELECT * FROM games WHERE game_date = %s AND created_by = %s",
        (game_date, WEEKLY_GAME_CREATED_BY)
    )
    existing = cursor.fetchone()
    if existing:
        logger.info("Weekly game for %s already exists", game_date)
        return dict(existing)

    cursor.execute("""
        INSERT INTO games (id, game_date, start_time, location, max_players, created_by)
        VALUES (%s, %s, %s, %s, %s, %s)
        RETURNING *
    """, (generate_game_id(), game_date, WEEKLY_GAME_TIME, WEEKLY_GAME_LOCATION,
          WEEKLY_GAME_MAX_PLAYERS, WEEKLY_GAME_CREATED_BY))
    row = cursor.fetchone()
    logger.info("Created weekly game %s for %s", row["id"], game_date)
    return dict(row)
