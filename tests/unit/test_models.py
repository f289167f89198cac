import pytest

from eventfeed.models import CommunityConfig, NormalizedEvent, OutputFeed, ScrapedEvent, ScrapeResult
from eventfeed.registry import get_scraper
from eventfeed.sources.json_feed import scrape_json
from eventfeed.sources.luma import scrape_luma
from eventfeed.sources.meetabit import scrape_meetabit
from eventfeed.sources.meetup import scrape_meetup


def test_community_round_trips_unknown_keys():
    data = {
        "name": "Helsinki Python",
        "location": "Helsinki, Finland",
        "tags": ["Python"],
        "events": "https://www.meetup.com/helsinki-python/",
        "site": "https://helsinkipython.org",
        "featured": True,
    }
    community = CommunityConfig.from_dict(data)
    assert community.extra == {"featured": True}
    assert community.to_dict() == data


def test_community_with_single_tag_scalar():
    community = CommunityConfig.from_dict({
        "name": "Helsinki Python",
        "location": "Helsinki, Finland",
        "tags": "Python",
        "events": "https://www.meetup.com/helsinki-python/",
    })
    assert community.tags == ["Python"]
    assert CommunityConfig.from_dict({"name": "No Tags", "tags": None}).tags == []


def test_community_requires_name():
    with pytest.raises(ValueError):
        CommunityConfig.from_dict({"location": "Espoo"})


def test_normalized_event_to_dict():
    community = CommunityConfig(
        name="Tampere Devs",
        location="Tampere, Finland",
        tags=["Web"],
        events="https://www.meetabit.com/communities/tampere-devs",
        logo="tampere-devs.png",
    )
    result = ScrapeResult(
        event=ScrapedEvent(date="12/11/2026", link="https://www.meetabit.com/events/x", location="Tampere, Finland"),
        members=345,
    )
    event = NormalizedEvent.from_scrape(community, result)

    assert event.to_dict() == {
        "name": "Tampere Devs",
        "location": "Tampere, Finland",
        "tags": ["Web"],
        "events": "https://www.meetabit.com/communities/tampere-devs",
        "logo": "tampere-devs.png",
        "date": "12/11/2026",
        "isoDate": "2026-11-12",
        "event": "https://www.meetabit.com/events/x",
        "eventLocation": "Tampere, Finland",
        "members": 345,
    }

    feed = OutputFeed(updated="2026-10-19T12:00:00Z", events=[event], inactive=["Gone"])
    assert feed.to_dict()["events"][0]["isoDate"] == "2026-11-12"
    assert feed.to_dict()["inactive"] == ["Gone"]


def test_normalized_event_needs_event():
    community = CommunityConfig(name="Empty", location="")
    with pytest.raises(ValueError):
        NormalizedEvent.from_scrape(community, ScrapeResult())


@pytest.mark.parametrize(
    "events_url, url, expected",
    [
        ("https://www.meetup.com/helsinki-python/", None, scrape_meetup),
        ("https://www.meetabit.com/communities/tampere-devs", None, scrape_meetabit),
        ("https://lu.ma/helsinki-data", None, scrape_luma),
        ("https://www.meetup.com/x/", "https://example.com/events.json", scrape_meetup),
        ("https://example.com/calendar", "https://example.com/events.json", scrape_json),
    ],
)
def test_get_scraper_dispatch(events_url, url, expected):
    community = CommunityConfig(name="c", location="", events=events_url, url=url)
    scraper, target = get_scraper(community)
    assert scraper is expected
    assert target == (url if expected is scrape_json else events_url)


def test_get_scraper_unsupported():
    community = CommunityConfig(name="c", location="", events="https://example.com/calendar")
    assert get_scraper(community) is None
