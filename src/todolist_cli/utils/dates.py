"""Current-date source and due-date parsing/formatting."""

from __future__ import annotations

from datetime import date, datetime, timedelta

DEFAULT_DATE_FORMAT = "%d/%m/%Y"
NOT_SET = "Not set"


def today() -> date:
    """Return the current local date.

    Everything that needs "today" (overdue checks, upcoming windows, task
    creation stamps) goes through this function.
    """
    return date.today()


def parse_due_date(text: str | None, date_format: str = DEFAULT_DATE_FORMAT) -> date | None:
    """Parse user input into a due date.

    Accepts the keywords ``today`` and ``tomorrow``, ISO dates
    (``YYYY-MM-DD``) and dates in *date_format*. Blank or malformed input
    returns None so callers can treat the due date as unset.
    """
    if text is None:
        return None
    value = text.strip()
    if not value:
        return None

    keyword = value.lower()
    if keyword == "today":
        return today()
    if keyword == "tomorrow":
        return today() + timedelta(days=1)

    for fmt in (date_format, "%Y-%m-%d"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def format_due_date(due_date: date | None, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a due date for display, or the unset marker."""
    if due_date is None:
        return NOT_SET
    return due_date.strftime(date_format)


def days_until(due_date: date, reference: date | None = None) -> int:
    """Number of days from *reference* (default today) to *due_date*."""
    return (due_date - (reference or today())).days


def format_relative_due(due_date: date | None, reference: date | None = None) -> str:
    """Describe a due date relative to today ("today", "in 3d", "2d ago")."""
    if due_date is None:
        return ""
    delta = days_until(due_date, reference)
    if delta == 0:
        return "today"
    if delta == 1:
        return "tomorrow"
    if delta == -1:
        return "yesterday"
    if delta > 0:
        return f"in {delta}d"
    return f"{-delta}d ago"
