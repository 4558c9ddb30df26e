from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from diamondstats.models import PlayerSummary, PlayerUpdate


class PlayerDetailResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    position: Optional[str] = None
    position_name: Optional[str] = None
    games: Optional[int] = None
    at_bat: Optional[int] = None
    runs: Optional[int] = None
    hits: Optional[int] = None
    doubles: Optional[int] = None
    triples: Optional[int] = None
    home_runs: Optional[int] = None
    rbi: Optional[int] = None
    walks: Optional[int] = None
    strikeouts: Optional[int] = None
    stolen_bases: Optional[int] = None
    caught_stealing: Optional[int] = None
    batting_average: Optional[float] = None
    on_base_percentage: Optional[float] = None
    slugging_percentage: Optional[float] = None
    on_base_plus_slugging: Optional[float] = None
    hits_per_game: Optional[float] = None

    @classmethod
    def from_summary(cls, summary: PlayerSummary) -> "PlayerDetailResponse":
        return cls.model_validate(summary.model_dump())


class PlayerEditResponse(BaseModel):
    id: int
    name: str
    position: Optional[str] = None
    position_name: Optional[str] = None
    games: Optional[int] = None
    at_bat: Optional[int] = None
    runs: Optional[int] = None
    hits: Optional[int] = None
    doubles: Optional[int] = None
    triples: Optional[int] = None
    home_runs: Optional[int] = None
    rbi: Optional[int] = None
    walks: Optional[int] = None
    strikeouts: Optional[int] = None
    stolen_bases: Optional[int] = None
    caught_stealing: Optional[int] = None
    batting_average: Optional[float] = None
    on_base_percentage: Optional[float] = None
    slugging_percentage: Optional[float] = None
    on_base_plus_slugging: Optional[float] = None

    @classmethod
    def from_summary(cls, summary: PlayerSummary) -> "PlayerEditResponse":
        return cls.model_validate(summary.model_dump(exclude={"description", "hits_per_game"}))


class PlayerListResponse(BaseModel):
    players: List[PlayerDetailResponse]
    sort: str
    direction: Literal["asc", "desc"]


class DescriptionResponse(BaseModel):
    description: str


# request body for PUT /players/{id}
PlayerUpdateRequest = PlayerUpdate
