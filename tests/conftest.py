"""Shared fixtures: upstream-shaped rows and documents, no network access."""

from typing import Any, List

import pytest
from loguru import logger

LINE_SCORE_HEADERS = [
    "GAME_DATE_EST", "GAME_SEQUENCE", "GAME_ID", "TEAM_ID", "TEAM_ABBREVIATION",
    "TEAM_CITY_NAME", "TEAM_NICKNAME", "TEAM_WINS_LOSSES",
    "PTS_QTR1", "PTS_QTR2", "PTS_QTR3", "PTS_QTR4",
    "PTS_OT1", "PTS_OT2", "PTS_OT3", "PTS_OT4", "PTS_OT5",
    "PTS_OT6", "PTS_OT7", "PTS_OT8", "PTS_OT9", "PTS_OT10", "PTS",
]


def make_row(
    abbr: Any = "LAL",
    city: Any = "Los Angeles",
    nickname: Any = "Lakers",
    quarters: List[Any] = (25, 30, 28, 22),
    overtimes: List[Any] = (0,) * 10,
    pts: Any = 105,
    date: Any = "2018-01-02T00:00:00",
) -> List[Any]:
    return [date, 1, "0021700807", 1610612747, abbr, city, nickname, "20-18",
            *quarters, *overtimes, pts]


def make_document(rows: List[List[Any]], name: str = "LineScore") -> dict:
    return {
        "resource": "boxscore",
        "parameters": {"GameID": "0021700807"},
        "resultSets": [
            {"name": "GameSummary", "headers": ["GAME_DATE_EST"], "rowSet": [["2018-01-02T00:00:00"]]},
            {"name": name, "headers": list(LINE_SCORE_HEADERS), "rowSet": rows},
        ],
    }


@pytest.fixture
def lakers_row() -> List[Any]:
    return make_row()


@pytest.fixture
def celtics_row() -> List[Any]:
    return make_row(
        abbr="BOS", city="Boston", nickname="Celtics",
        quarters=[27, 24, 20, 25], pts=96,
        date="2018-01-03T00:00:00",  # only the first row's date is used
    )


@pytest.fixture
def box_score_document(lakers_row, celtics_row) -> dict:
    return make_document([lakers_row, celtics_row])


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
def document_factory():
    return make_document


@pytest.fixture
def log_messages():
    """Collects loguru messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
