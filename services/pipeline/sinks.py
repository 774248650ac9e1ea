"""
Downstream sink adapters
Tracking-sheet rows and issue-tracker tickets
"""

import json
from pathlib import Path
from typing import Protocol, Union

import structlog

from shared.errors import SinkError
from shared.schemas.record import ClassifiedRecord, SheetRow
from shared.schemas.ticket import TicketSpec

from .projector import row_values

logger = structlog.get_logger()


class SheetSink(Protocol):
    name: str

    def append(self, row: SheetRow) -> None:
        """Append one row; raise SinkError on failure"""
        ...


class TicketSink(Protocol):
    name: str

    def create(self, ticket: TicketSpec, record: ClassifiedRecord) -> None:
        """Create one ticket; raise SinkError on failure"""
        ...


class LoggingSheetSink:
    """Logs the row instead of writing to a spreadsheet"""

    name = "sheet"

    def append(self, row: SheetRow) -> None:
        logger.info(
            "Sheet row prepared",
            **dict(zip(SheetRow.columns(), row_values(row))),
        )


class LoggingTicketSink:
    """Logs the ticket instead of calling an issue tracker"""

    name = "ticket"

    def create(self, ticket: TicketSpec, record: ClassifiedRecord) -> None:
        logger.info(
            "Ticket prepared",
            request_id=record.request_id,
            summary=ticket.summary,
            priority=ticket.priority,
            story_points=ticket.story_points,
        )


class _JsonlWriter:
    """Appends one JSON document per line"""

    name = "jsonl"

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _write(self, document: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(document, default=str) + "\n")
        except OSError as e:
            raise SinkError(f"failed to write {self.path.name}: {e.strerror}", sink=self.name) from e


class JsonlSheetSink(_JsonlWriter):
    name = "sheet"

    def append(self, row: SheetRow) -> None:
        self._write(row.model_dump(mode="json"))
        logger.info("Appended sheet row", path=str(self.path), request_id=row.request_id)


class JsonlTicketSink(_JsonlWriter):
    name = "ticket"

    def create(self, ticket: TicketSpec, record: ClassifiedRecord) -> None:
        self._write({
            "request_id": record.request_id,
            "feature_name": record.feature_name,
            "ticket": ticket.model_dump(mode="json", by_alias=True),
        })
        logger.info("Wrote ticket", path=str(self.path), request_id=record.request_id)
