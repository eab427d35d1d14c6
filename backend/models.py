from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional
from constants import (
    ATTRIBUTE_MIN, ATTRIBUTE_MAX,
    DEFAULT_DRAW_MODE, DEFAULT_TEAM_FORMAT, TEAM_FORMATS, VISITORS_MAX
)


class PlayerAttributes(BaseModel):
    serve: int = Field(default=0, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    passing: int = Field(default=0, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    attack: int = Field(default=0, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    block: int = Field(default=0, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    defense: int = Field(default=0, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    setting: int = Field(default=0, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)
    fitness: int = Field(default=0, ge=ATTRIBUTE_MIN, le=ATTRIBUTE_MAX)

    def average(self) -> float:
        """Skill rating of a player: the mean of all attributes."""
        values = list(self.model_dump().values())
        return sum(values) / len(values)


class Player(BaseModel):
    id: str
    user_id: Optional[str] = None
    username: str
    attributes: PlayerAttributes = Field(default_factory=PlayerAttributes)
    average_rating: float = 0.0
    is_visitor: bool = False

    @model_validator(mode='after')
    def derive_rating(self):
        # An explicit rating wins over the attributes
        if "attributes" in self.model_fields_set and "average_rating" not in self.model_fields_set:
            self.average_rating = self.attributes.average()
        return self

    @classmethod
    def from_row(cls, row: dict) -> "Player":
        """Build a player from a `players` row, deriving the rating from its attributes."""
        attributes = PlayerAttributes(**(row.get("attributes") or {}))
        return cls(
            id=str(row["id"]),
            user_id=row.get("user_id"),
            username=row["username"],
            attributes=attributes,
        )


class GameResponse(BaseModel):
    id: str
    game_date: date
    start_time: str
    location: str
    max_players: int
    created_by: str
    created_at: Optional[datetime] = None


class ConfirmationResponse(BaseModel):
    game_id: str
    user_id: str
    username: str
    confirmed_at: datetime


class GamePlayersResponse(BaseModel):
    game: GameResponse
    confirmed: list[Player]
    unconfirmed: list[Player]


class DrawOptions(BaseModel):
    format: Optional[str] = None
    number_of_teams: Optional[int] = Field(default=None, ge=1)
    max_players_per_team: Optional[int] = Field(default=None, ge=1)
    mode: str = Field(default=DEFAULT_DRAW_MODE, pattern=r"^(random|by-skill)$")
    visitors: int = Field(default=0, ge=0, le=VISITORS_MAX)
    absent_player_ids: list[str] = Field(default_factory=list)
    seed: Optional[int] = None

    @field_validator('format')
    @classmethod
    def validate_format(cls, v):
        if v is not None and v not in TEAM_FORMATS:
            raise ValueError(f"Unknown team format '{v}'. Must be one of {', '.join(TEAM_FORMATS)}")
        return v

    @model_validator(mode='after')
    def fill_from_format(self):
        # Explicit numbers win over the preset
        preset = TEAM_FORMATS[self.format or DEFAULT_TEAM_FORMAT]
        if self.number_of_teams is None:
            self.number_of_teams = preset["number_of_teams"]
        if self.max_players_per_team is None:
            self.max_players_per_team = preset["max_players_per_team"]
        return self


class DrawRequest(DrawOptions):
    extra_player_ids: list[str] = Field(default_factory=list)


class PoolDrawRequest(DrawOptions):
    model_config = ConfigDict(extra="forbid")

    players: list[Player] = Field(default_factory=list)


class Team(BaseModel):
    id: int
    name: str
    players: list[Player] = Field(default_factory=list)
    average_rating: float = 0.0
    is_overflow: bool = False


class DrawResponse(BaseModel):
    game_id: Optional[str] = None
    mode: str
    number_of_teams: int
    max_players_per_team: int
    seed: Optional[int] = None
    pool_size: int
    empty: bool = False
    message: Optional[str] = None
    teams: list[Team]


class MvpVote(BaseModel):
    game_id: str
    voter_id: str
    player_id: str
    username: str
    rank: int = Field(..., ge=1, le=3)


class PodiumEntry(BaseModel):
    position: int
    player_id: Optional[str] = None
    username: str
    score: int


class MvpPodiumResponse(BaseModel):
    game_id: str
    total_votes: int
    podium: list[PodiumEntry]
