import json
import re
from datetime import datetime, time

import requests
from bs4 import BeautifulSoup

from eventfeed import config
from eventfeed.models import ScrapedEvent, ScrapeResult
from eventfeed.utils.dates import format_date, parse_iso_datetime, today
from eventfeed.utils.text import meta_content

LUMA_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}

TITLE_SUFFIX_RE = re.compile(r"\s*(?:(?:[·|\-–]\s*)?Events Calendar|[·|\-–]\s*Luma)\s*$", re.IGNORECASE)
BACKGROUND_RE = re.compile(r"background-image:\s*url\(['\"]?([^'\")]+)['\"]?\)")


def load_next_data(soup):
    script = soup.select_one("script#__NEXT_DATA__")
    if not script or not script.string:
        return None
    try:
        return json.loads(script.string)
    except ValueError:
        return None


def page_data(next_data):
    """The calendar payload embedded in the page state."""
    try:
        return next_data["props"]["pageProps"]["initialData"]["data"] or {}
    except (KeyError, TypeError):
        return {}


def closest_event_date(start_ats, reference=None):
    """
    Pick the start date closest to today, past or future.

    A recent past event wins over an upcoming one further away, so this
    does not always return the next event.
    """
    reference = reference or today()
    midnight = datetime.combine(reference, time.min)

    best = None
    for start_at in start_ats:
        if not isinstance(start_at, str):
            continue
        event_day = parse_iso_datetime(start_at)
        if event_day is None:
            continue
        distance = abs(datetime.combine(event_day, time.min) - midnight)
        if best is None or distance < best[0]:
            best = (distance, event_day)

    return format_date(best[1]) if best else None


def find_name(soup):
    title = meta_content(soup, "og:title")
    if not title and soup.title:
        title = soup.title.get_text()
    if not title:
        return None
    # "Helsinki Python · Events Calendar · Luma" -> "Helsinki Python"
    previous = None
    while previous != title:
        previous = title
        title = TITLE_SUFFIX_RE.sub("", title).strip()
    return title or None


def find_logo(soup):
    for tag in soup.select("[style*='background-image']"):
        match = BACKGROUND_RE.search(tag.get("style", ""))
        if match:
            return match.group(1)
    return meta_content(soup, "og:image")


def find_location(soup, data):
    calendar = data.get("calendar") or {}
    parts = [calendar.get("geo_city"), calendar.get("geo_country")]
    if any(parts):
        return ", ".join(p for p in parts if p)

    for tag in soup.find_all("script", type="application/ld+json"):
        try:
            ld = json.loads(tag.string or "")
        except ValueError:
            continue
        for item in ld if isinstance(ld, list) else [ld]:
            if not isinstance(item, dict):
                continue
            location = item.get("location")
            if isinstance(location, list):
                location = location[0] if location else None
            address = location.get("address") if isinstance(location, dict) else None
            if isinstance(address, dict):
                country = address.get("addressCountry")
                if isinstance(country, dict):
                    country = country.get("name")
                parts = [address.get("addressLocality"), country]
                if any(parts):
                    return ", ".join(p for p in parts if p)
    return None


def parse_calendar_page(html, url):
    soup = BeautifulSoup(html, "html.parser")
    next_data = load_next_data(soup)
    data = page_data(next_data) if next_data else {}

    name = find_name(soup)
    logo = find_logo(soup)
    location = find_location(soup, data)

    start_ats = data.get("event_start_ats")
    date = closest_event_date(start_ats) if isinstance(start_ats, list) else None

    return ScrapeResult(
        event=ScrapedEvent(date=date, link=url, location=location) if date else None,
        name=name,
        logo=logo,
        location=location,
    )


def scrape_luma(url):
    """Scrape the event closest to today from a Luma calendar page."""
    try:
        resp = requests.get(url, headers=LUMA_HEADERS, timeout=config.REQUEST_TIMEOUT)
        resp.raise_for_status()
        return parse_calendar_page(resp.text, url)
    except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
        return ScrapeResult(error=f"Luma: {e}")
