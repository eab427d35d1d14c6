"""Shared fixtures: an in-memory stand-in for the PostgreSQL store."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, timedelta
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

import main


class FakeStore:
    """Rows of the tables the API reads, kept as plain dicts."""

    def __init__(self) -> None:
        self.games: list[dict[str, Any]] = []
        self.players: list[dict[str, Any]] = []
        self.confirmations: list[dict[str, Any]] = []
        self.mvp_votes: list[dict[str, Any]] = []
        self._clock = datetime(2026, 10, 1, 12, 0)

    def _tick(self) -> datetime:
        self._clock += timedelta(minutes=1)
        return self._clock

    def add_game(self, game_id: str, game_date: date = date(2026, 10, 24), **fields: Any) -> dict[str, Any]:
        row = {
            "id": game_id,
            "game_date": game_date,
            "start_time": "19:00",
            "location": "Main court",
            "max_players": 18,
            "created_by": "admin",
            "created_at": self._tick(),
        }
        row.update(fields)
        self.games.append(row)
        return row

    def add_player(
        self,
        player_id: str,
        username: str,
        rating: int = 5,
        user_id: str | None = None,
        attributes: dict[str, int] | None = None,
    ) -> dict[str, Any]:
        # Every attribute is ``rating`` unless given one by one
        attributes = {
            name: rating
            for name in ("serve", "passing", "attack", "block", "defense", "setting", "fitness")
        } | (attributes or {})
        row = {
            "id": player_id,
            "user_id": user_id or f"user-{player_id}",
            "username": username,
            "attributes": attributes,
            "created_at": self._tick(),
        }
        self.players.append(row)
        return row

    def confirm(self, game_id: str, player: dict[str, Any]) -> None:
        self.confirmations.append({
            "id": len(self.confirmations) + 1,
            "game_id": game_id,
            "user_id": player["user_id"],
            "username": player["username"],
            "confirmed_at": self._tick(),
        })

    def vote(self, game_id: str, voter_id: str, player: dict[str, Any], rank: int) -> None:
        self.mvp_votes.append({
            "id": len(self.mvp_votes) + 1,
            "game_id": game_id,
            "voter_id": voter_id,
            "player_id": player["id"],
            "username": player["username"],
            "rank": rank,
            "created_at": self._tick(),
        })


class FakeCursor:
    """Answers the handful of queries the application issues."""

    def __init__(self, store: FakeStore) -> None:
        self.store = store
        self.executed: list[tuple[str, Any]] = []
        self._rows: list[dict[str, Any]] = []

    def execute(self, sql: str, params: Any = None) -> None:
        self.executed.append((sql, params))
        store = self.store

        if "NOT EXISTS" in sql:
            confirmed = {c["user_id"] for c in store.confirmations if c["game_id"] == params[0]}
            rows = [p for p in store.players if p["user_id"] not in confirmed]
            self._rows = sorted(rows, key=lambda p: p["username"])
        elif "JOIN players p" in sql:
            confirmations = sorted(
                (c for c in store.confirmations if c["game_id"] == params[0]),
                key=lambda c: (c["confirmed_at"], c["id"]),
            )
            by_user = {p["user_id"]: p for p in store.players}
            self._rows = [by_user[c["user_id"]] for c in confirmations if c["user_id"] in by_user]
        elif "FROM players WHERE id = ANY" in sql:
            wanted = set(params[0])
            self._rows = [p for p in store.players if p["id"] in wanted]
        elif "FROM mvp_votes" in sql:
            self._rows = [v for v in store.mvp_votes if v["game_id"] == params[0]]
        elif "FROM games WHERE id" in sql:
            self._rows = [g for g in store.games if g["id"] == params[0]]
        elif "FROM games ORDER BY created_at DESC" in sql:
            self._rows = sorted(store.games, key=lambda g: g["created_at"], reverse=True)[:1]
        elif "FROM games WHERE game_date" in sql:
            self._rows = [
                g for g in store.games
                if g["game_date"] == params[0] and g["created_by"] == params[1]
            ]
        elif "INSERT INTO games" in sql:
            game_id, game_date, start_time, location, max_players, created_by = params
            self._rows = [store.add_game(
                game_id,
                game_date=game_date,
                start_time=start_time,
                location=location,
                max_players=max_players,
                created_by=created_by,
            )]
        else:
            raise AssertionError(f"Unexpected SQL: {sql}")

    def fetchone(self) -> dict[str, Any] | None:
        return self._rows[0] if self._rows else None

    def fetchall(self) -> list[dict[str, Any]]:
        return list(self._rows)


class FakeConnection:
    def __init__(self, store: FakeStore) -> None:
        self.store = store
        self.commits = 0

    def cursor(self) -> FakeCursor:
        return FakeCursor(self.store)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        pass

    def close(self) -> None:
        pass


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> FakeStore:
    fake = FakeStore()

    @contextmanager
    def fake_get_db() -> Iterator[FakeConnection]:
        yield FakeConnection(fake)

    monkeypatch.setattr(main, "get_db", fake_get_db)
    return fake


@pytest.fixture
def client(store: FakeStore) -> TestClient:
    # Not used as a context manager, so the startup hook never touches a real database
    return TestClient(main.app)
