"""MVP podium built from ranked votes."""

from typing import Iterable

from constants import MVP_DEFAULT_POINTS, MVP_PODIUM_SIZE, MVP_RANK_POINTS
from models import MvpVote, PodiumEntry


def points_for_rank(rank: int) -> int:
    return MVP_RANK_POINTS.get(rank, MVP_DEFAULT_POINTS)


def tally_mvp_votes(votes: Iterable[MvpVote]) -> dict[str, dict]:
    """Total points per voted player, keyed by player id in first-seen order."""
    scores: dict[str, dict] = {}
    for vote in votes:
        entry = scores.setdefault(vote.player_id, {"username": vote.username, "score": 0})
        entry["score"] += points_for_rank(vote.rank)
    return scores


def _placeholder_name(position: int) -> str:
    if 10 <= position % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(position % 10, "th")
    return f"{position}{suffix} Place"


def build_podium(votes: Iterable[MvpVote], size: int = MVP_PODIUM_SIZE) -> list[PodiumEntry]:
    """Top ``size`` players by score, padded with empty places."""
    scores = tally_mvp_votes(votes)
    ranked = sorted(scores.items(), key=lambda item: item[1]["score"], reverse=True)[:size]

    podium = [
        PodiumEntry(position=position, player_id=player_id, username=entry["username"], score=entry["score"])
        for position, (player_id, entry) in enumerate(ranked, start=1)
    ]
    while len(podium) < size:
        position = len(podium) + 1
        podium.append(PodiumEntry(position=position, username=_placeholder_name(position), score=0))
    return podium
