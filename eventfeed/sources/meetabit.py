import re

import requests
from bs4 import BeautifulSoup

from eventfeed import config
from eventfeed.models import ScrapedEvent, ScrapeResult
from eventfeed.utils.dates import month_number, resolve_day_month
from eventfeed.utils.text import last_integer

MEETABIT_BASE = "https://www.meetabit.com"
MEETABIT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}

MONTH_LABELS = {
    1: ("january", "jan"), 2: ("february", "feb"), 3: ("march", "mar"),
    4: ("april", "apr"), 5: ("may",), 6: ("june", "jun"),
    7: ("july", "jul"), 8: ("august", "aug"), 9: ("september", "sept", "sep"),
    10: ("october", "oct"), 11: ("november", "nov"), 12: ("december", "dec"),
}


def first_listed_event(soup, heading):
    """First <li> of the list that follows the given section heading."""
    for h3 in soup.select(f'.col-sm-7 h3:-soup-contains("{heading}")'):
        sibling = h3.find_next_sibling()
        if sibling is not None and sibling.name == "ul":
            item = sibling.find("li")
            if item is not None:
                return item
    return None


def find_year(html, month_name):
    """
    Find a four-digit year written shortly after the month label
    on an event detail page, e.g. "March 15, 2024" or "Mar 15th 2024".
    """
    month = month_number(month_name)
    if not month or not html:
        return None

    text = " ".join(BeautifulSoup(html, "html.parser").get_text(" ").split())
    # Whole month names only, so "Marketing" or "Junior" never count
    label = "|".join(MONTH_LABELS[month])
    for match in re.finditer(rf"\b(?:{label})\b\.?", text, re.IGNORECASE):
        window = text[match.end():match.end() + 20]
        year = re.search(r"\b((?:19|20)\d{2})\b", window)
        if year:
            return int(year.group(1))
    return None


def fetch_event_year(link, month_name):
    try:
        resp = requests.get(link, headers=MEETABIT_HEADERS, timeout=config.REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        print(f"    Meetabit: could not load {link} for year lookup: {e}")
        return None
    return find_year(resp.text, month_name)


def parse_listed_event(item, is_future):
    anchor = item.find("a", href=True)
    if anchor is None:
        return None
    link = MEETABIT_BASE + anchor["href"] if anchor["href"].startswith("/") else anchor["href"]

    day_tag = item.select_one(".day-number")
    month_tag = item.select_one(".month-name")
    if day_tag is None or month_tag is None:
        return None
    day = day_tag.get_text(strip=True)
    month_name = month_tag.get_text(strip=True)

    year = fetch_event_year(link, month_name)
    date = resolve_day_month(day, month_name, is_future, year=year)
    if not date:
        return None
    return date, link


def parse_profile_page(html):
    soup = BeautifulSoup(html, "html.parser")

    heading = soup.select_one(".col-sm-7 h1")
    name = heading.get_text(strip=True) if heading else None
    location = None
    if heading:
        location_tag = heading.find_next_sibling("p")
        location = location_tag.get_text(strip=True) if location_tag else None

    logo_tag = soup.select_one(".col-sm-5 .img-thumbnail img")
    members_text = " ".join(p.get_text(" ", strip=True) for p in soup.select("h1 ~ p + p"))

    event = None
    parsed = None
    upcoming = first_listed_event(soup, "Upcoming Event")
    if upcoming is not None:
        parsed = parse_listed_event(upcoming, is_future=True)
    else:
        previous = first_listed_event(soup, "Previous Event")
        if previous is not None:
            parsed = parse_listed_event(previous, is_future=False)
    if parsed:
        event = ScrapedEvent(date=parsed[0], link=parsed[1], location=location or None)

    return ScrapeResult(
        event=event,
        members=last_integer(members_text),
        name=name or None,
        logo=logo_tag.get("src") if logo_tag else None,
        location=location or None,
    )


def scrape_meetabit(url):
    """Scrape the upcoming (or previous) event from a Meetabit community profile."""
    try:
        resp = requests.get(url, headers=MEETABIT_HEADERS, timeout=config.REQUEST_TIMEOUT)
        resp.raise_for_status()
        return parse_profile_page(resp.text)
    except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
        return ScrapeResult(error=f"Meetabit: {e}")
