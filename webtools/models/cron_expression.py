"""
Five-field cron expressions: building, parsing, describing and scheduling.

Fields are ``minute hour day-of-month month day-of-week``. Each field accepts
``*``, ``*/n``, a number, a range ``a-b`` (optionally ``a-b/n``) or a comma
separated list of those. Day of week runs 0-6 with 0 as Sunday; 7 is also
accepted as Sunday.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel

from webtools.errors import InvalidCronExpressionError

logger = logging.getLogger(__name__)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

FIELD_BOUNDS: Tuple[Tuple[str, int, int], ...] = (
    ("minute", 0, 59),
    ("hour", 0, 23),
    ("day_of_month", 1, 31),
    ("month", 1, 12),
    ("day_of_week", 0, 7),
)

# Search horizon for next_runs; covers Feb 29 on a Sunday and similar rare combos
MAX_SEARCH_DAYS = 366 * 28


class CronFields(BaseModel):
    minute: str = "0"
    hour: str = "0"
    day_of_month: str = "*"
    month: str = "*"
    day_of_week: str = "*"

    def expression(self) -> str:
        return " ".join(
            [self.minute, self.hour, self.day_of_month, self.month, self.day_of_week]
        )


class CronPreset(BaseModel):
    name: str
    cron: str
    desc: str


class CronSummary(BaseModel):
    expression: str
    is_valid: bool
    description: str
    next_runs: List[datetime] = []
    error: Optional[str] = None


PRESETS: List[CronPreset] = [
    CronPreset(name="Every minute", cron="* * * * *", desc="Runs every minute"),
    CronPreset(name="Every 5 minutes", cron="*/5 * * * *", desc="Runs every 5 minutes"),
    CronPreset(name="Every 15 minutes", cron="*/15 * * * *", desc="Runs every 15 minutes"),
    CronPreset(name="Every 30 minutes", cron="*/30 * * * *", desc="Runs every 30 minutes"),
    CronPreset(name="Every hour", cron="0 * * * *", desc="Runs at the beginning of every hour"),
    CronPreset(name="Every 6 hours", cron="0 */6 * * *", desc="Runs every 6 hours"),
    CronPreset(name="Every 12 hours", cron="0 */12 * * *", desc="Runs every 12 hours"),
    CronPreset(name="Daily at midnight", cron="0 0 * * *", desc="Runs daily at 12:00 AM"),
    CronPreset(name="Daily at 6 AM", cron="0 6 * * *", desc="Runs daily at 6:00 AM"),
    CronPreset(name="Weekly on Sunday", cron="0 0 * * 0", desc="Runs every Sunday at midnight"),
    CronPreset(name="Monthly on 1st", cron="0 0 1 * *", desc="Runs on the 1st day of every month"),
    CronPreset(name="Yearly on Jan 1st", cron="0 0 1 1 *", desc="Runs on January 1st every year"),
]


def build_expression(
    fields: CronFields,
    selected_days: Sequence[int] = (),
    selected_months: Sequence[int] = (),
) -> str:
    """
    Assemble an expression from form fields.

    A partial weekday selection (1-6 of the 7 days) replaces the day-of-week
    field; a partial month selection (1-11 of 12) replaces the month field.
    """
    day_of_week = fields.day_of_week
    month = fields.month
    if 0 < len(set(selected_days)) < 7:
        day_of_week = ",".join(str(d) for d in sorted(set(selected_days)))
    if 0 < len(set(selected_months)) < 12:
        month = ",".join(str(m) for m in sorted(set(selected_months)))
    return fields.model_copy(update={"day_of_week": day_of_week, "month": month}).expression()


def _parse_number(text: str, name: str, low: int, high: int) -> int:
    if not text.isdigit():
        raise InvalidCronExpressionError(f"Invalid {name} value: {text!r}")
    value = int(text)
    if not low <= value <= high:
        raise InvalidCronExpressionError(f"{name} value {value} outside {low}-{high}")
    return value


def expand_field(text: str, name: str, low: int, high: int) -> Set[int]:
    """Expand one field to the set of values it matches."""
    values: Set[int] = set()
    for item in text.split(","):
        if not item:
            raise InvalidCronExpressionError(f"Empty list item in {name}")
        base, _, step_text = item.partition("/")
        step = 1
        if step_text:
            step = _parse_number(step_text, f"{name} step", 1, high - low + 1)
        if base == "*":
            start, end = low, high
        elif "-" in base:
            first, _, last = base.partition("-")
            start = _parse_number(first, name, low, high)
            end = _parse_number(last, name, low, high)
            if start > end:
                raise InvalidCronExpressionError(f"Descending range in {name}: {base}")
        else:
            start = _parse_number(base, name, low, high)
            end = high if step_text else start
        values.update(range(start, end + 1, step))
    return values


def parse_expression(expression: str) -> CronFields:
    """
    Split and validate an expression.

    Raises:
        InvalidCronExpressionError: If there are not exactly five fields or a
            field is malformed or out of range
    """
    parts = expression.split(" ")
    if len(parts) != 5:
        raise InvalidCronExpressionError(
            f"Expected 5 space-separated fields, got {len(parts)}"
        )
    for part, (name, low, high) in zip(parts, FIELD_BOUNDS):
        expand_field(part, name, low, high)
    return CronFields(
        minute=parts[0],
        hour=parts[1],
        day_of_month=parts[2],
        month=parts[3],
        day_of_week=parts[4],
    )


def _clock(hour: str, minute: str) -> str:
    return f"{hour.rjust(2, '0')}:{minute.rjust(2, '0')}"


def _day_label(item: str) -> str:
    if item.isdigit() and int(item) <= 7:
        return DAY_NAMES[int(item) % 7]
    return item


def describe(expression: str) -> str:
    """Human readable description of how often an expression fires."""
    try:
        fields = parse_expression(expression)
    except InvalidCronExpressionError:
        return "Invalid cron expression format"

    minute, hour = fields.minute, fields.hour
    dom, month, dow = fields.day_of_month, fields.month, fields.day_of_week

    if minute == "*" and hour == "*":
        detail = "every minute"
    elif minute.startswith("*/") and hour == "*":
        detail = f"every {minute[2:]} minutes"
    elif hour.startswith("*/") and minute == "0":
        detail = f"every {hour[2:]} hours"
    elif hour == "*":
        detail = f"at minute {minute} of every hour"
    elif dom == "*" and month == "*" and dow == "*":
        detail = f"daily at {_clock(hour, minute)}"
    elif dom == "*" and month == "*":
        days = ", ".join(_day_label(d) for d in dow.split(","))
        detail = f"weekly on {days} at {_clock(hour, minute)}"
    elif dom != "*" and month == "*":
        detail = f"monthly on day {dom} at {_clock(hour, minute)}"
    elif month != "*":
        detail = f"yearly in month {month} on day {dom} at {_clock(hour, minute)}"
    else:
        detail = (
            f"at {_clock(hour, minute)} when month is {month}, day of month is "
            f"{dom}, and day of week is {dow}"
        )
    return f"Runs {detail}"


def next_runs(expression: str, start: datetime, count: int = 5) -> List[datetime]:
    """
    The next ``count`` times strictly after ``start`` that match.

    When both day-of-month and day-of-week are restricted a day matches if
    either does, as in Vixie cron. A field starting with ``*`` (such as
    ``*/2``) is unrestricted.
    """
    fields = parse_expression(expression)
    minutes = sorted(expand_field(fields.minute, "minute", 0, 59))
    hours = sorted(expand_field(fields.hour, "hour", 0, 23))
    days = expand_field(fields.day_of_month, "day_of_month", 1, 31)
    months = expand_field(fields.month, "month", 1, 12)
    weekdays = {d % 7 for d in expand_field(fields.day_of_week, "day_of_week", 0, 7)}
    dom_restricted = not fields.day_of_month.startswith("*")
    dow_restricted = not fields.day_of_week.startswith("*")

    def day_matches(day: datetime) -> bool:
        if day.month not in months:
            return False
        # isoweekday: Monday=1 .. Sunday=7
        in_dom = day.day in days
        in_dow = day.isoweekday() % 7 in weekdays
        if dom_restricted and dow_restricted:
            return in_dom or in_dow
        return in_dom and in_dow

    runs: List[datetime] = []
    if count < 1:
        return runs
    day = start.replace(hour=0, minute=0, second=0, microsecond=0)
    for _ in range(MAX_SEARCH_DAYS):
        if day_matches(day):
            for hour in hours:
                for minute in minutes:
                    candidate = day.replace(hour=hour, minute=minute)
                    if candidate > start:
                        runs.append(candidate)
                        if len(runs) == count:
                            return runs
        day += timedelta(days=1)

    logger.warning(f"Only {len(runs)} runs found for {expression!r} within search window")
    return runs


def summarize(expression: str, start: Optional[datetime] = None, count: int = 5) -> CronSummary:
    """Validate, describe and schedule an expression without raising."""
    try:
        parse_expression(expression)
    except InvalidCronExpressionError as e:
        return CronSummary(
            expression=expression,
            is_valid=False,
            description="Invalid cron expression format",
            error=str(e),
        )
    return CronSummary(
        expression=expression,
        is_valid=True,
        description=describe(expression),
        next_runs=next_runs(expression, start or datetime.now(), count),
    )
