from services.classify.classifier import build_fallback_record
from services.pipeline.projector import project_row, row_values, split_list_field
from shared.schemas.record import ClassifiedRecord, SheetRow


def make_record(**overrides):
    data = dict(
        feature_name="Gift Card System",
        description="Sell prepaid gift cards online.",
        domain="Payments",
        niche=["Hair Salon", "Spa Services"],
        keywords=["Gift Card", "Voucher", "Holiday"],
        frequency="A few times a week",
        user_id="user_1a2b3c4d",
        timestamp="2026-01-15T10:30:00.123Z",
        request_id="req_20260115103000_ab12",
    )
    data.update(overrides)
    return ClassifiedRecord(**data)


def test_row_flattens_lists():
    row = project_row(make_record())

    assert row.niche == "Hair Salon, Spa Services"
    assert row.keywords == "Gift Card, Voucher, Holiday"
    assert row.domain == "Payments"
    assert row.success is True
    assert row.message == "Feature request processed"


def test_list_fields_round_trip():
    record = make_record()
    row = project_row(record)

    assert split_list_field(row.niche) == record.niche
    assert split_list_field(row.keywords) == record.keywords


def test_empty_keywords_round_trip():
    row = project_row(make_record(keywords=[]))
    assert row.keywords == ""
    assert split_list_field(row.keywords) == []


def test_row_values_in_column_order():
    row = project_row(make_record())
    values = row_values(row)

    assert len(values) == len(SheetRow.columns()) == 9
    assert values[0] == "req_20260115103000_ab12"
    assert values[4] == "Payments"
    assert values[-1] == "user_1a2b3c4d"


def test_fallback_record_projects(sanitized_fields):
    row = project_row(build_fallback_record(sanitized_fields), message="flagged")
    assert row.feature_name == "Feature Review Needed"
    assert row.domain == "Other"
    assert row.niche == "Hair, Nails"
    assert row.message == "flagged"
