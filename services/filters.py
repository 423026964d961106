# services/filters.py - parse the filter form and encode filters into clue queries
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional

from services.exceptions import ValidationError
from services.trivia_types import ANY_VALUE, DIFFICULTIES, Filters

EPOCH_ISO = "1970-01-01T00:00:00.000Z"


def _iso_utc(moment: datetime) -> str:
    """Format like JavaScript's Date.toISOString(): millisecond precision, Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _iso_date(day: date, end_of_day: bool = False) -> str:
    if end_of_day:
        # last millisecond of the day keeps the upper bound inclusive
        return _iso_utc(datetime(day.year, day.month, day.day, 23, 59, 59, 999000, tzinfo=timezone.utc))
    return _iso_utc(datetime(day.year, day.month, day.day, tzinfo=timezone.utc))


def clue_query_params(
    category_id: str, filters: Filters, now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Build the /api/clues query for one category.
    Missing date bounds default to "now" and the epoch; the value parameter is
    left out entirely when the difficulty filter is "any".
    """
    if now is None:
        now = datetime.now(timezone.utc)
    params: Dict[str, Any] = {
        "max_date": _iso_date(filters.max_date, end_of_day=True) if filters.max_date else _iso_utc(now),
        "min_date": _iso_date(filters.min_date) if filters.min_date else EPOCH_ISO,
        "category": category_id,
    }
    if filters.value != ANY_VALUE:
        params["value"] = filters.value
    return params


def _parse_date(raw: str, label: str) -> Optional[date]:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise ValidationError(f"{label} must be a date in YYYY-MM-DD format") from e


def parse_value(raw: Any):
    raw = str(raw).strip()
    if raw == ANY_VALUE or raw == "":
        return ANY_VALUE
    if raw.isdigit() and int(raw) in DIFFICULTIES:
        return int(raw)
    raise ValidationError(f"Unknown difficulty value {raw!r}")


def parse_filters(form: Mapping[str, Any], current: Optional[Filters] = None) -> Filters:
    """
    Apply submitted filter fields on top of the current filters.
    Fields absent from the form keep their current value; a blank date clears the bound.
    """
    filters = current or Filters()
    if "min_date" in form:
        filters = replace(filters, min_date=_parse_date(form.get("min_date"), "From date"))
    if "max_date" in form:
        filters = replace(filters, max_date=_parse_date(form.get("max_date"), "To date"))
    if "value" in form:
        filters = replace(filters, value=parse_value(form.get("value")))
    if filters.min_date and filters.max_date and filters.min_date > filters.max_date:
        raise ValidationError("From date must not be after To date")
    return filters
