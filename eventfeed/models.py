from dataclasses import dataclass, field
from typing import Optional

from eventfeed.utils.dates import to_iso_date

COMMUNITY_FIELDS = ("name", "location", "tags", "events", "site", "url", "logo")


def parse_tags(value):
    """A single YAML scalar (`tags: Python`) counts as one tag."""
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass
class CommunityConfig:
    """A community entry from the communities file."""
    name: str
    location: str
    tags: list = field(default_factory=list)
    events: str = ""
    site: Optional[str] = None
    url: Optional[str] = None
    logo: Optional[str] = None
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict) or not data.get("name"):
            raise ValueError(f"Invalid community entry: {data!r}")
        return cls(
            name=str(data["name"]),
            location=data.get("location") or "",
            tags=parse_tags(data.get("tags")),
            events=data.get("events") or "",
            site=data.get("site"),
            url=data.get("url"),
            logo=data.get("logo"),
            extra={k: v for k, v in data.items() if k not in COMMUNITY_FIELDS},
        )

    def to_dict(self):
        data = {
            "name": self.name,
            "location": self.location,
            "tags": list(self.tags),
            "events": self.events,
        }
        for key in ("site", "url", "logo"):
            value = getattr(self, key)
            if value:
                data[key] = value
        data.update(self.extra)
        return data


@dataclass(frozen=True)
class ScrapedEvent:
    date: str
    link: str
    location: Optional[str] = None


@dataclass(frozen=True)
class ScrapeResult:
    """
    Best-effort adapter output. Every field is optional since the
    markup it comes from is not under our control.
    """
    event: Optional[ScrapedEvent] = None
    members: Optional[int] = None
    name: Optional[str] = None
    logo: Optional[str] = None
    location: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class NormalizedEvent:
    name: str
    location: str
    tags: tuple
    events: str
    date: str
    iso_date: str
    event: str
    site: Optional[str] = None
    url: Optional[str] = None
    logo: Optional[str] = None
    event_location: Optional[str] = None
    members: Optional[int] = None

    @classmethod
    def from_scrape(cls, community, result):
        """Build a feed record from a community and its scraped event."""
        if result.event is None:
            raise ValueError(f"{community.name} has no event to normalize")
        return cls(
            name=community.name,
            location=community.location,
            tags=tuple(community.tags),
            events=community.events,
            date=result.event.date,
            iso_date=to_iso_date(result.event.date),
            event=result.event.link,
            site=community.site,
            url=community.url,
            logo=community.logo,
            event_location=result.event.location,
            members=result.members,
        )

    def to_dict(self):
        data = {
            "name": self.name,
            "location": self.location,
            "tags": list(self.tags),
            "events": self.events,
        }
        for key in ("site", "url", "logo"):
            value = getattr(self, key)
            if value:
                data[key] = value
        data["date"] = self.date
        data["isoDate"] = self.iso_date
        data["event"] = self.event
        if self.event_location:
            data["eventLocation"] = self.event_location
        if self.members is not None:
            data["members"] = self.members
        return data


@dataclass
class OutputFeed:
    updated: str
    events: list = field(default_factory=list)
    inactive: list = field(default_factory=list)

    def to_dict(self):
        return {
            "updated": self.updated,
            "events": [e.to_dict() for e in self.events],
            "inactive": list(self.inactive),
        }
