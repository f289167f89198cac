from eventfeed.sources.json_feed import scrape_json
from eventfeed.sources.luma import scrape_luma
from eventfeed.sources.meetabit import scrape_meetabit
from eventfeed.sources.meetup import scrape_meetup

# Checked in order; the first matching prefix wins
SOURCES = [
    ("https://www.meetup.com/", scrape_meetup),
    ("https://www.meetabit.com/", scrape_meetabit),
    ("https://lu.ma/", scrape_luma),
    ("https://luma.com/", scrape_luma),
]


def get_scraper(community):
    """
    Pick the adapter for a community based on its events URL.
    Returns (scraper, url) or None when nothing can handle it.
    """
    events_url = community.events or ""
    for prefix, scraper in SOURCES:
        if events_url.startswith(prefix):
            return scraper, events_url

    if community.url:
        return scrape_json, community.url

    return None
