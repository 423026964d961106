from datetime import date, datetime, timezone

import pytest

from services.exceptions import ValidationError
from services.filters import EPOCH_ISO, clue_query_params, parse_filters
from services.trivia_types import Filters

NOW = datetime(2026, 10, 18, 12, 30, 45, 123456, tzinfo=timezone.utc)


def test_any_value_omits_value_parameter():
    params = clue_query_params("21", Filters(), now=NOW)
    assert "value" not in params
    assert params["category"] == "21"


def test_fixed_value_included_literally():
    params = clue_query_params("21", Filters(value=600), now=NOW)
    assert params["value"] == 600


def test_date_defaults_are_now_and_epoch():
    params = clue_query_params("21", Filters(), now=NOW)
    assert params["max_date"] == "2026-10-18T12:30:45.123Z"
    assert params["min_date"] == EPOCH_ISO == "1970-01-01T00:00:00.000Z"


def test_explicit_dates_used():
    f = Filters(min_date=date(1990, 5, 1), max_date=date(2001, 1, 2))
    params = clue_query_params("21", f, now=NOW)
    assert params["min_date"] == "1990-05-01T00:00:00.000Z"
    assert params["max_date"] == "2001-01-02T23:59:59.999Z"


def test_max_date_includes_the_whole_day():
    params = clue_query_params("21", Filters(max_date=date(2001, 1, 2)), now=NOW)
    assert params["max_date"] >= "2001-01-02T12:00:00.000Z"
    assert params["max_date"] < "2001-01-03T00:00:00.000Z"


def test_parse_filters_reads_all_fields():
    f = parse_filters({"min_date": "1990-05-01", "max_date": "2001-01-02", "value": "800"})
    assert f == Filters(min_date=date(1990, 5, 1), max_date=date(2001, 1, 2), value=800)


def test_parse_filters_keeps_absent_fields_and_clears_blank_dates():
    current = Filters(min_date=date(1990, 5, 1), max_date=date(2001, 1, 2), value=200)
    assert parse_filters({"value": "any"}, current) == Filters(
        min_date=date(1990, 5, 1), max_date=date(2001, 1, 2), value="any"
    )
    assert parse_filters({"min_date": ""}, current).min_date is None


@pytest.mark.parametrize("form", [
    {"min_date": "05/01/1990"},
    {"value": "250"},
    {"value": "cheap"},
    {"min_date": "2001-01-02", "max_date": "1990-05-01"},
])
def test_parse_filters_rejects_bad_input(form):
    with pytest.raises(ValidationError):
        parse_filters(form)
