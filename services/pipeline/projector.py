"""
Record projection to sink-specific shapes
"""

from shared.schemas.record import ClassifiedRecord, SheetRow

LIST_SEPARATOR = ", "
DEFAULT_MESSAGE = "Feature request processed"


def join_list_field(values: list[str]) -> str:
    return LIST_SEPARATOR.join(values)


def split_list_field(value: str) -> list[str]:
    """Inverse of join_list_field for elements without commas"""
    return [part.strip() for part in value.split(",") if part.strip()]


def project_row(record: ClassifiedRecord, success: bool = True, message: str = DEFAULT_MESSAGE) -> SheetRow:
    """Flatten a classified record into a tracking-sheet row"""
    return SheetRow(
        request_id=record.request_id,
        timestamp=record.timestamp,
        feature_name=record.feature_name,
        description=record.description,
        domain=str(getattr(record.domain, "value", record.domain)),
        niche=join_list_field(record.niche),
        keywords=join_list_field(record.keywords),
        frequency=record.frequency,
        user_id=record.user_id,
        success=success,
        message=message,
    )


def row_values(row: SheetRow) -> list[str]:
    """Cell values in sheet column order"""
    data = row.model_dump()
    return [data[column] for column in SheetRow.columns()]
