from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LineScore(BaseModel):
    """Per-team, per-period point totals for one game."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    team_abbr: str = Field("", alias="TeamAbbr")
    team_city: str = Field("", alias="TeamCity")
    team_nickname: str = Field("", alias="TeamNickname")
    pts_qtr1: int = Field(0, alias="PtsQtr1")
    pts_qtr2: int = Field(0, alias="PtsQtr2")
    pts_qtr3: int = Field(0, alias="PtsQtr3")
    pts_qtr4: int = Field(0, alias="PtsQtr4")
    pts_ot1: int = Field(0, alias="PtsOt1")
    pts_ot2: int = Field(0, alias="PtsOt2")
    pts_ot3: int = Field(0, alias="PtsOt3")
    pts_ot4: int = Field(0, alias="PtsOt4")
    pts_ot5: int = Field(0, alias="PtsOt5")
    pts_ot6: int = Field(0, alias="PtsOt6")
    pts_ot7: int = Field(0, alias="PtsOt7")
    pts_ot8: int = Field(0, alias="PtsOt8")
    pts_ot9: int = Field(0, alias="PtsOt9")
    pts_ot10: int = Field(0, alias="PtsOt10")
    pts: int = Field(0, alias="Pts")


class ScoreboardResponse(BaseModel):
    """Game date plus one line score per team, as returned by the relay."""

    model_config = ConfigDict(populate_by_name=True)

    # None only when the upstream document had no line-score rows
    date: Optional[datetime] = None
    line_scores: List[LineScore] = Field(default_factory=list, alias="lineScores")


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    """Body returned with every non-2xx relay response."""

    error: ErrorDetail
