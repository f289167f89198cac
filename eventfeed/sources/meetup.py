import requests
from bs4 import BeautifulSoup

from eventfeed import config
from eventfeed.models import ScrapedEvent, ScrapeResult
from eventfeed.utils.dates import format_date, parse_display_date, parse_iso_datetime
from eventfeed.utils.text import meta_content, parse_member_count

MEETUP_HEADERS = {
    "User-Agent": config.BROWSER_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def find_event_link(soup):
    """Nearest upcoming event link, falling back to the most recent past one."""
    for selector in (
        'a[href*="eventOrigin=group_upcoming_events"]',
        'a[href*="eventOrigin=group_past_events"]',
        "#upcoming-section a[href*='/events/']",
        "#past-section a[href*='/events/']",
    ):
        link = soup.select_one(selector)
        if link and link.get("href"):
            # Drop tracking parameters
            return link["href"].split("?")[0]
    return None


def find_event_date(soup):
    time_tag = soup.select_one("time[datetime]")
    if time_tag:
        parsed = parse_iso_datetime(time_tag["datetime"])
        if parsed is None:
            parsed = parse_display_date(time_tag.get_text(" ", strip=True))
        if parsed:
            return format_date(parsed)

    for time_tag in soup.select("time"):
        parsed = parse_display_date(time_tag.get_text(" ", strip=True))
        if parsed:
            return format_date(parsed)
    return None


def parse_group_page(html):
    soup = BeautifulSoup(html, "html.parser")

    date = find_event_date(soup)
    link = find_event_link(soup)

    name = meta_content(soup, "og:title")
    if not name and soup.title:
        name = soup.title.get_text().replace(" | Meetup", "").strip() or None

    members_tag = soup.select_one("#member-count-link")

    return ScrapeResult(
        event=ScrapedEvent(date=date, link=link) if date and link else None,
        members=parse_member_count(members_tag.get_text(" ", strip=True)) if members_tag else None,
        name=name,
        logo=meta_content(soup, "og:image"),
    )


def scrape_meetup(url):
    """Scrape the next (or latest) event and group details from a Meetup group page."""
    try:
        resp = requests.get(url, headers=MEETUP_HEADERS, timeout=config.REQUEST_TIMEOUT)
        resp.raise_for_status()
        return parse_group_page(resp.text)
    except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
        return ScrapeResult(error=f"Meetup: {e}")
