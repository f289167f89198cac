import re
from datetime import date, datetime, time, timedelta

from eventfeed import config

MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

CANONICAL_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def today():
    """Local calendar day used for every upcoming/past decision."""
    return datetime.now().date()


def format_date(value):
    """Format a date as the canonical DD/MM/YYYY string."""
    return f"{value.day:02d}/{value.month:02d}/{value.year}"


def parse_canonical(date_str):
    """Parse a DD/MM/YYYY string. Returns None if it is not a real date."""
    if not date_str:
        return None
    match = CANONICAL_RE.match(date_str.strip())
    if not match:
        return None
    day, month, year = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def to_iso_date(date_str):
    parsed = parse_canonical(date_str)
    return parsed.isoformat() if parsed else None


def parse_iso_datetime(value):
    """
    Parse an ISO 8601 timestamp into a local calendar day.
    Handles: "2024-03-15T18:00:00Z", "2024-03-15T18:00:00.000+02:00",
    "2024-03-15T18:00+02:00[Europe/Helsinki]", "2024-03-15"
    """
    if not value:
        return None

    value = re.sub(r"\[.*?\]$", "", value.strip())
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def parse_display_date(value):
    """
    Parse Meetup style display dates like "Thu, Mar 14, 2024".
    Anything after a middle dot (the time) is ignored.
    """
    if not value:
        return None

    text = " ".join(value.split("·")[0].split())
    match = re.match(r"^[A-Za-z]{3}\w*,?\s+([A-Za-z]{3})\w*\.?\s+(\d{1,2}),?\s+(\d{4})", text)
    if not match:
        return None

    month = MONTHS.get(match.group(1).lower())
    if not month:
        return None
    try:
        return date(int(match.group(3)), month, int(match.group(2)))
    except ValueError:
        return None


def month_number(month_name):
    if not month_name:
        return None
    return MONTHS.get(month_name.strip().lower()[:3])


def resolve_day_month(day, month_name, is_future, year=None):
    """
    Build a canonical date from a day number and month abbreviation.

    When the year is unknown it is taken from today, moved forward for
    upcoming events already behind us and back for previous events that
    would otherwise lie in the future.
    """
    month = month_number(month_name)
    if not month:
        return None
    try:
        day_num = int(str(day).strip())
    except ValueError:
        return None

    if year is None:
        current = today()
        year = current.year
        try:
            candidate = date(year, month, day_num)
        except ValueError:
            return None
        if is_future and candidate < current:
            year += 1
        elif not is_future and candidate > current:
            year -= 1

    try:
        return format_date(date(year, month, day_num))
    except ValueError:
        return None


def normalize_date(value):
    """Canonicalize any supported date representation, or return None."""
    if not value:
        return None
    value = str(value).strip()
    for parser in (parse_canonical, parse_iso_datetime, parse_display_date):
        parsed = parser(value)
        if parsed:
            return format_date(parsed)
    return None


def is_stale(date_str, now=None):
    """True when the event is more than a year older than now."""
    parsed = parse_canonical(date_str)
    if parsed is None:
        return False
    now = now or datetime.now()
    cutoff = now - timedelta(milliseconds=config.STALE_AFTER_MS)
    return datetime.combine(parsed, time.min) < cutoff
