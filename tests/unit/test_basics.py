import json
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

from rich.console import Console

from scripts import generate_sample
from wager_history import config
from wager_history.desk import Notice
from wager_history.domain.filtering import DEFAULT_BUCKETS
from wager_history.domain.groups import filter_groups
from wager_history.domain.models import HistoryRecord, TypeOption
from wager_history.domain.selection import SelectionSet
from wager_history.domain.validation import eligible_types, validate_number
from wager_history.reporter import build_table, format_time, render_notices


def test_settings_defaults(monkeypatch):
    for name in ("API_BASE_URL", "API_TOKEN", "API_TIMEOUT", "USER_ID", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = config.Settings(_env_file=None)
    assert settings.api_base_url == "http://localhost:3000/api"
    assert settings.api_token is None
    assert settings.api_timeout > 0
    assert settings.auth_check_path == "/auth/check"
    assert settings.log_level == "INFO"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("USER_ID", "42")
    monkeypatch.setenv("API_TOKEN", "secret")
    settings = config.Settings(_env_file=None)

    context = config.build_context(settings)

    assert context.user_id == 42
    assert context.token == "secret"


def test_generate_sample_records_obey_number_rules():
    records = generate_sample._generate_records(60, seed=123, business_date=date(2024, 5, 1))
    options = [TypeOption(id=b.type_id, label=b.label) for b in DEFAULT_BUCKETS]

    assert len(records) == 60
    for row in records:
        record = HistoryRecord.model_validate(row)
        assert validate_number(record.number) == ""
        allowed = {t.id for t in eligible_types(len(record.number), options)}
        assert record.type_id in allowed
        assert record.business_date == date(2024, 5, 1)


def test_generate_sample_is_deterministic(tmp_path: Path):
    first = generate_sample._generate_records(5, seed=7, business_date=date(2024, 5, 1))
    second = generate_sample._generate_records(5, seed=7, business_date=date(2024, 5, 1))
    assert first == second

    out = tmp_path / "nested" / "history.json"
    generate_sample._write_json(out, first)
    assert json.loads(out.read_text(encoding="utf-8")) == first


def test_format_time():
    assert format_time(None) == "N/A"
    assert format_time(datetime(2024, 5, 1, 0, 5)) == "12:05 AM"
    assert format_time(datetime(2024, 5, 1, 9, 30)) == "9:30 AM"
    assert format_time(datetime(2024, 5, 1, 21, 5)) == "9:05 PM"
    aware = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert format_time(aware).endswith(("AM", "PM"))


def test_build_table_marks_selected_rows(make_record):
    selection = SelectionSet()
    selection.mark(2, True)
    records = [make_record(1), make_record(2, amount=Decimal("1500"))]

    table = build_table(DEFAULT_BUCKETS[1], records, selection)

    assert table.title == "Open Pana"
    assert table.row_count == 2
    assert list(table.columns[0].cells) == ["", "x"]
    assert list(table.columns[3].cells) == ["100", "1,500"]


def test_empty_table_has_caption():
    table = build_table(DEFAULT_BUCKETS[0], [])
    assert table.row_count == 0
    assert "No records" in table.caption


def test_render_notices_prints_messages():
    console = Console(record=True, width=80)
    render_notices([Notice("success", "Record updated successfully")], console)
    assert "Record updated successfully" in console.export_text()


def test_filter_groups_is_case_insensitive(groups):
    assert [g.id for g in filter_groups(groups, "south")] == [2]
    assert [g.id for g in filter_groups(groups, "")] == [1, 2]
    assert filter_groups(groups, "west") == []
