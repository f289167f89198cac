import json
from pathlib import Path

import pytest
import yaml

responses = pytest.importorskip("responses")
requests = pytest.importorskip("requests")
freeze_time = pytest.importorskip("freezegun").freeze_time

from scrape import run
from eventfeed.models import CommunityConfig
from eventfeed.pipeline.orchestrate import scrape_all, scrape_community

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"

COMMUNITIES = [
    {
        "name": "Helsinki Python",
        "location": "Helsinki, Finland",
        "tags": ["Python"],
        "events": "https://www.meetup.com/helsinki-python/",
        "logo": "helsinki-python.png",
    },
    {
        "name": "Open Source Espoo",
        "location": "Espoo, Finland",
        "tags": ["Open Source"],
        "events": "https://example.com/calendar",
        "url": "https://example.com/events.json",
    },
    {
        "name": "Helsinki Data Science",
        "location": "Helsinki, Finland",
        "tags": ["Data"],
        "events": "https://lu.ma/helsinki-data-science",
    },
    {
        "name": "Unreachable Group",
        "location": "Vantaa, Finland",
        "tags": [],
        "events": "https://www.meetup.com/unreachable-group/",
    },
    {
        "name": "Broken Meetabit",
        "location": "Tampere, Finland",
        "tags": [],
        "events": "https://www.meetabit.com/communities/broken",
    },
]


def mock_sources(rsps):
    rsps.add(rsps.GET, "https://www.meetup.com/helsinki-python/", body=(FIXTURES / "meetup_group.html").read_text())
    rsps.add(
        rsps.GET,
        "https://example.com/events.json",
        json={"future": {"date": "05/11/2026", "link": "https://example.com/e/1"}, "members": 40},
    )
    rsps.add(rsps.GET, "https://lu.ma/helsinki-data-science", body=(FIXTURES / "luma_calendar.html").read_text())
    rsps.add(
        rsps.GET,
        "https://www.meetup.com/unreachable-group/",
        body=requests.ConnectionError("connection refused"),
    )
    rsps.add(rsps.GET, "https://www.meetabit.com/communities/broken", body="<html><body><h3>Upcoming Event</h3>")


def write_communities(tmp_path, communities):
    path = tmp_path / "communities.yml"
    path.write_text(yaml.safe_dump(communities, sort_keys=False))
    return path


def run_paths(tmp_path):
    out = tmp_path / "site" / "_data"
    return {
        "json_path": out / "output.json",
        "yaml_path": out / "output.yml",
        "status_path": out / "scrape-status.json",
        "log_path": out / "scrape-log.txt",
    }


@freeze_time("2026-10-19 12:00:00")
def test_run_isolates_failures_and_orders_feed(tmp_path):
    communities_path = write_communities(tmp_path, COMMUNITIES)
    paths = run_paths(tmp_path)

    with responses.RequestsMock() as rsps:
        mock_sources(rsps)
        feed = run(communities_path=communities_path, **paths)

    assert [e.name for e in feed.events] == [
        "Open Source Espoo",
        "Helsinki Python",
        "Helsinki Data Science",
    ]

    written = json.loads(paths["json_path"].read_text())
    assert written["updated"].startswith("2026-10-19T12:00:00")
    assert [e["date"] for e in written["events"]] == ["05/11/2026", "12/11/2026", "15/10/2026"]
    assert written["events"][1] == {
        "name": "Helsinki Python",
        "location": "Helsinki, Finland",
        "tags": ["Python"],
        "events": "https://www.meetup.com/helsinki-python/",
        "logo": "helsinki-python.png",
        "date": "12/11/2026",
        "isoDate": "2026-11-12",
        "event": "https://www.meetup.com/helsinki-python/events/301234567/",
        "members": 1234,
    }
    assert yaml.safe_load(paths["yaml_path"].read_text()) == written

    status = json.loads(paths["status_path"].read_text())
    assert status["communities"]["Helsinki Python"]["status"] == "ok"
    assert status["communities"]["Unreachable Group"]["status"] == "no_event"
    assert "connection refused" in status["communities"]["Unreachable Group"]["error"]
    assert status["communities"]["Broken Meetabit"]["status"] == "no_event"
    run_log = paths["log_path"].read_text()
    assert "COMMUNITY SUMMARY" in run_log
    assert "No event found for Unreachable Group: Meetup: connection refused" in run_log


@freeze_time("2026-10-19 12:00:00")
def test_run_drops_stale_events(tmp_path, capsys):
    communities = [
        {
            "name": "Sleepy Club",
            "location": "Lahti, Finland",
            "tags": [],
            "events": "https://example.com/sleepy",
            "url": "https://example.com/sleepy.json",
        },
        COMMUNITIES[1],
    ]
    communities_path = write_communities(tmp_path, communities)
    paths = run_paths(tmp_path)

    with responses.RequestsMock() as rsps:
        rsps.add(
            rsps.GET,
            "https://example.com/sleepy.json",
            json={"past": {"date": "01/09/2025", "link": "https://example.com/sleepy/1"}},
        )
        rsps.add(
            rsps.GET,
            "https://example.com/events.json",
            json={"future": {"date": "05/11/2026", "link": "https://example.com/e/1"}},
        )
        feed = run(communities_path=communities_path, **paths)

    assert [e.name for e in feed.events] == ["Open Source Espoo"]
    assert feed.inactive == ["Sleepy Club"]
    assert "Inactive: Sleepy Club (01/09/2025)" in capsys.readouterr().out
    assert json.loads(paths["json_path"].read_text())["inactive"] == ["Sleepy Club"]


def test_run_without_communities_file_fails(tmp_path):
    paths = run_paths(tmp_path)
    assert run(communities_path=tmp_path / "missing.yml", **paths) is None
    assert not paths["json_path"].exists()


def test_scrape_community_catches_adapter_exceptions(monkeypatch, capsys):
    def explode(url):
        raise RuntimeError("parser blew up")

    monkeypatch.setattr("eventfeed.pipeline.orchestrate.get_scraper", lambda community: (explode, community.events))
    community = CommunityConfig(name="Exploding", location="", events="https://example.com")

    outcome = scrape_community(community)

    assert outcome.status == "error"
    assert outcome.error == "parser blew up"
    assert 'Error scraping "Exploding": parser blew up' in capsys.readouterr().out


def test_scrape_all_keeps_configuration_order(monkeypatch):
    from eventfeed.models import ScrapedEvent, ScrapeResult

    dates = {"a": "03/01/2099", "b": "01/01/2099", "c": "02/01/2099"}

    def fake_scraper(url):
        return ScrapeResult(event=ScrapedEvent(date=dates[url], link=f"https://example.com/{url}"))

    monkeypatch.setattr("eventfeed.pipeline.orchestrate.get_scraper", lambda community: (fake_scraper, community.events))
    communities = [CommunityConfig(name=n, location="", events=n) for n in ["a", "b", "c"]]

    outcomes = scrape_all(communities)

    assert [o.name for o in outcomes] == ["a", "b", "c"]
    assert [o.event.date for o in outcomes] == ["03/01/2099", "01/01/2099", "02/01/2099"]


def test_scrape_community_unsupported_source():
    community = CommunityConfig(name="Nowhere", location="", events="https://example.com/calendar")
    assert scrape_community(community).status == "unsupported"
