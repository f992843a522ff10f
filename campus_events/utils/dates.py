"""Date parsing for event forms and formatting helpers for templates."""
from datetime import datetime

FORM_FORMAT = '%m/%d/%Y %I:%M %p'


def parse_datetime(value):
    """
    Parse an ISO 8601 string or the event form's ``MM/DD/YYYY HH:MM AM``.

    Raises ValueError when neither format matches.
    """
    if isinstance(value, datetime):
        return value
    value = value.strip()
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return datetime.strptime(value, FORM_FORMAT)


def datetime_str(value):
    if not value:
        return ''
    return value.strftime(FORM_FORMAT)


def pretty_datetime(value):
    """e.g. ``Mon Jan 5, 2026 3:04 PM``"""
    if not value:
        return ''
    hour = value.hour % 12 or 12
    return f"{value:%a %b} {value.day}, {value.year} {hour}:{value:%M %p}"


def same_date(first, second):
    if not first or not second:
        return False
    return first.date() == second.date()


def register_template_helpers(app):
    app.add_template_filter(datetime_str)
    app.add_template_filter(pretty_datetime)
    app.add_template_global(same_date)
