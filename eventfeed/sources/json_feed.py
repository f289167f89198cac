import requests

from eventfeed import config
from eventfeed.models import ScrapedEvent, ScrapeResult
from eventfeed.utils.dates import normalize_date

JSON_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64)",
    "Accept": "application/json",
}


def parse_members(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def parse_payload(data):
    """
    Read a community JSON document:
    {"future": {"date": ..., "link": ...}, "past": {...}, "members": 120}
    """
    if not isinstance(data, dict):
        return ScrapeResult()

    raw = data.get("future") or data.get("past") or data.get("event")
    event = None
    if isinstance(raw, dict) and raw.get("link"):
        date = normalize_date(raw.get("date"))
        if date:
            event = ScrapedEvent(date=date, link=raw["link"], location=raw.get("location"))

    return ScrapeResult(event=event, members=parse_members(data.get("members")))


def scrape_json(url):
    """Scrape a community's own JSON endpoint."""
    try:
        resp = requests.get(url, headers=JSON_HEADERS, timeout=config.REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        return ScrapeResult(error=f"JSON: {e}")

    content_type = resp.headers.get("Content-Type", "")
    if "json" not in content_type.lower():
        return ScrapeResult(error=f"JSON: unexpected content type {content_type!r}")

    try:
        data = resp.json()
    except ValueError as e:
        return ScrapeResult(error=f"JSON: {e}")

    return parse_payload(data)
