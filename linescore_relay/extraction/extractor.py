from datetime import datetime, timezone
from typing import Dict, List, Optional

from loguru import logger

from linescore_relay.errors import ParseError
from linescore_relay.models.cells import Cell, NullCell
from linescore_relay.models.enums import FieldKind, ResultSetName
from linescore_relay.models.line_score import LineScore, ScoreboardResponse
from linescore_relay.models.raw_table import RawTable, Row

from .columns import (
    DATE_COLUMN,
    DATE_FORMAT,
    DATE_PATTERN,
    LINE_SCORE_COLUMNS,
    Column,
    expected_headers,
)


def cell_at(row: Row, index: int) -> Cell:
    """Returns the cell at ``index``; a row too short for it yields a null cell."""
    if index < len(row):
        return row[index]
    return NullCell()


def parse_game_date(cell: Cell) -> datetime:
    """Parses the game date cell as a UTC timestamp.

    Raises:
        ParseError: if the cell is not text or does not match ``DATE_FORMAT``.
    """
    decoded = cell.as_text()
    if not decoded.ok:
        raise ParseError(f"Game date cell is not text: {decoded.problem}")
    if not DATE_PATTERN.fullmatch(decoded.value):
        raise ParseError(f"Game date '{decoded.value}' does not match {DATE_FORMAT}")
    try:
        parsed = datetime.strptime(decoded.value, DATE_FORMAT)
    except ValueError as e:
        raise ParseError(f"Game date '{decoded.value}' does not match {DATE_FORMAT}") from e
    return parsed.replace(tzinfo=timezone.utc)


class LineScoreExtractor:
    """Decodes the line-score result-set of a raw table into a ScoreboardResponse."""

    def __init__(
        self,
        columns: Dict[str, Column] = LINE_SCORE_COLUMNS,
        date_column: Column = DATE_COLUMN,
        row_set_name: str = ResultSetName.LINE_SCORE.value,
    ):
        self.columns = columns
        self.date_column = date_column
        self.row_set_name = row_set_name
        self._expected_headers = expected_headers(columns, date_column)

    def extract(self, table: RawTable) -> ScoreboardResponse:
        """Builds the response for one upstream fetch.

        The date is parsed from the first row only and shared by every record.
        An absent row-set produces an empty response, not an error.

        Raises:
            ParseError: if the first row's date cell cannot be parsed.
        """
        rows = table.rows(self.row_set_name)
        if not rows:
            logger.warning(
                f"Result-set '{self.row_set_name}' absent or empty. "
                f"Available: {table.names()}"
            )
            return ScoreboardResponse()

        self._check_headers(table.headers(self.row_set_name))

        game_date: Optional[datetime] = None
        line_scores: List[LineScore] = []
        for row_number, row in enumerate(rows):
            if game_date is None:
                game_date = parse_game_date(cell_at(row, self.date_column.index))
                logger.debug(f"Parsed game date {game_date.isoformat()}")
            line_scores.append(self.map_row(row, row_number))

        logger.info(
            f"Extracted {len(line_scores)} line score(s) for game date {game_date.date()}"
        )
        return ScoreboardResponse(date=game_date, line_scores=line_scores)

    def map_row(self, row: Row, row_number: int = 0) -> LineScore:
        """Decodes one row with the configured column offsets. Never raises."""
        values = {}
        for field_name, column in self.columns.items():
            cell = cell_at(row, column.index)
            if column.kind is FieldKind.TEXT:
                decoded = cell.as_text()
            else:
                decoded = cell.as_int()
            if not decoded.ok:
                logger.warning(
                    f"Row {row_number}, column {column.index} ({field_name}): "
                    f"{decoded.problem}; using {decoded.value!r}"
                )
            values[field_name] = decoded.value
        return LineScore(**values)

    def _check_headers(self, headers: tuple) -> None:
        if not headers:
            return
        drifted = [
            f"{index}: expected {name}, got {headers[index] if index < len(headers) else 'nothing'}"
            for index, name in self._expected_headers.items()
            if index >= len(headers) or headers[index] != name
        ]
        if drifted:
            logger.warning(
                f"Upstream headers for '{self.row_set_name}' differ from configured "
                f"columns ({'; '.join(drifted)}). Decoding by position anyway."
            )
