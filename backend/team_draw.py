"""Team draw engine: split the players present at a game into teams."""

import itertools
import logging
import random
from typing import Iterable, Optional, Sequence

from constants import (
    DRAW_MODES, MODE_BY_SKILL, MODE_RANDOM,
    OVERFLOW_TEAM_NAME, TEAM_NAME_PREFIX,
    VISITOR_ID_PREFIX, VISITOR_NAME_PREFIX
)
from models import Player, Team

logger = logging.getLogger(__name__)


def average_rating(players: Sequence[Player]) -> float:
    """Mean skill rating of ``players``; 0 for an empty team."""
    if not players:
        return 0.0
    return sum(player.average_rating for player in players) / len(players)


def make_visitors(count: int, taken_ids: Iterable[str] = ()) -> list[Player]:
    """Zero-rated placeholders for guests who are not club members.

    Numbering skips any visitor id already in ``taken_ids``.
    """
    taken = set(taken_ids)
    visitors = []
    for n in itertools.count(1):
        if len(visitors) == count:
            break
        visitor_id = f"{VISITOR_ID_PREFIX}{n}"
        if visitor_id in taken:
            continue
        visitors.append(Player(
            id=visitor_id,
            username=f"{VISITOR_NAME_PREFIX} {n}",
            average_rating=0.0,
            is_visitor=True,
        ))
    return visitors


def build_draw_pool(
    confirmed: Iterable[Player],
    extra_players: Iterable[Player] = (),
    absent_ids: Iterable[str] = (),
    visitors: int = 0,
) -> list[Player]:
    """Assemble the players to draw from.

    Confirmed players come first, in confirmation order, followed by the
    unconfirmed players the admin added by hand and finally ``visitors``
    placeholders. Players marked absent are left out and no player id is
    listed twice.
    """
    if visitors < 0:
        raise ValueError("visitors must not be negative")

    absent = set(absent_ids)
    seen = set()
    pool = []
    for player in itertools.chain(confirmed, extra_players):
        if player.id in absent or player.id in seen:
            continue
        seen.add(player.id)
        pool.append(player)

    pool.extend(make_visitors(visitors, taken_ids=seen))
    return pool


def _check_configuration(number_of_teams: int, max_players_per_team: int, mode: str) -> None:
    if number_of_teams < 1:
        raise ValueError("number_of_teams must be at least 1")
    if max_players_per_team < 1:
        raise ValueError("max_players_per_team must be at least 1")
    if mode not in DRAW_MODES:
        raise ValueError(f"Invalid draw mode '{mode}'. Must be one of {', '.join(DRAW_MODES)}")


def _check_unique(players: Sequence[Player]) -> None:
    ids = [player.id for player in players]
    if len(ids) != len(set(ids)):
        raise ValueError("A player can only be drawn once")


def _round_robin_lane(index: int, number_of_teams: int) -> int:
    return index % number_of_teams


def _snake_lane(index: int, number_of_teams: int) -> int:
    # 0..N-1 on even rounds, N-1..0 on odd rounds
    round_number, offset = divmod(index, number_of_teams)
    if round_number % 2:
        return number_of_teams - 1 - offset
    return offset


def _assemble(lanes: list[list[Player]], overflow: list[Player]) -> list[Team]:
    teams = [
        Team(
            id=position,
            name=f"{TEAM_NAME_PREFIX} {position}",
            players=members,
            average_rating=average_rating(members),
        )
        for position, members in enumerate(lanes, start=1)
    ]
    if overflow:
        teams.append(Team(
            id=len(lanes) + 1,
            name=OVERFLOW_TEAM_NAME,
            players=overflow,
            average_rating=average_rating(overflow),
            is_overflow=True,
        ))
    return teams


def draw_teams(
    players: Sequence[Player],
    number_of_teams: int,
    max_players_per_team: int,
    mode: str = MODE_RANDOM,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> list[Team]:
    """Partition ``players`` into teams.

    Parameters
    ----------
    players : Sequence[Player]
        The draw pool. It is copied, never mutated.
    number_of_teams : int
        How many regular teams to fill, at least 1.
    max_players_per_team : int
        Capacity of every regular team, at least 1.
    mode : str
        ``"random"`` shuffles the pool and deals it round-robin.
        ``"by-skill"`` sorts the pool by rating, best first, and deals it
        in snake order so the teams end up with similar averages.
    seed : Optional[int]
        Seed for the shuffle in ``"random"`` mode. Without a seed (or
        ``rng``) every call gives a different draw.
    rng : Optional[random.Random]
        Random source to shuffle with; takes precedence over ``seed``.

    Returns
    -------
    list[Team]
        ``number_of_teams`` regular teams, possibly empty, followed by one
        overflow team holding everyone past the total capacity. An empty
        pool gives an empty list.

    Raises
    ------
    ValueError
        If the configuration is invalid or a player is listed twice.
    """
    _check_configuration(number_of_teams, max_players_per_team, mode)

    pool = list(players)
    if not pool:
        return []
    _check_unique(pool)

    if mode == MODE_BY_SKILL:
        # sorted() is stable, ties keep their pool order
        ordered = sorted(pool, key=lambda player: player.average_rating, reverse=True)
        lane_for = _snake_lane
    else:
        ordered = pool
        (rng or random.Random(seed)).shuffle(ordered)
        lane_for = _round_robin_lane

    capacity = number_of_teams * max_players_per_team
    lanes = [[] for _ in range(number_of_teams)]
    for index, player in enumerate(ordered[:capacity]):
        lanes[lane_for(index, number_of_teams)].append(player)

    teams = _assemble(lanes, ordered[capacity:])
    logger.info(
        "Drew %d players into %d teams (mode=%s, overflow=%d)",
        len(pool), number_of_teams, mode, max(len(pool) - capacity, 0),
    )
    return teams


def block_assignment(
    players: Sequence[Player],
    number_of_teams: int,
    max_players_per_team: int,
) -> list[Team]:
    """Cut the rating-sorted pool into contiguous chunks, one per team.

    This is the naive baseline skill balancing is measured against.
    """
    _check_configuration(number_of_teams, max_players_per_team, MODE_BY_SKILL)
    ordered = sorted(players, key=lambda player: player.average_rating, reverse=True)
    if not ordered:
        return []

    capacity = number_of_teams * max_players_per_team
    lanes = [
        ordered[start:start + max_players_per_team]
        for start in range(0, capacity, max_players_per_team)
    ]
    return _assemble(lanes, ordered[capacity:])


def rating_spread(teams: Sequence[Team]) -> float:
    """Largest difference between the averages of the regular teams."""
    averages = [team.average_rating for team in teams if not team.is_overflow]
    if len(averages) < 2:
        return 0.0
    return max(averages) - min(averages)
