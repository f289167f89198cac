from dataclasses import dataclass, field
from typing import Optional

from eventfeed.models import NormalizedEvent


@dataclass
class CommunityOutcome:
    """What happened when scraping one community."""
    name: str
    status: str = "no_event"  # ok | no_event | inactive | unsupported | error
    event: Optional[NormalizedEvent] = None
    stale_date: Optional[str] = None
    error: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def success(self):
        return self.status != "error"


def format_summary(outcomes):
    """Summary table lines for the run log."""
    lines = [
        "=" * 72,
        "COMMUNITY SUMMARY",
        "=" * 72,
        f"{'Community':<36} {'Status':<12} {'Date':>10} {'Time':>10}",
        "-" * 72,
    ]
    for outcome in sorted(outcomes, key=lambda o: o.name.lower()):
        date = outcome.event.date if outcome.event else (outcome.stale_date or "-")
        time_str = f"{outcome.duration_ms:.0f}ms"
        lines.append(f"{outcome.name[:36]:<36} {outcome.status:<12} {date:>10} {time_str:>10}")
    lines.append("-" * 72)
    found = sum(1 for o in outcomes if o.status == "ok")
    errors = sum(1 for o in outcomes if o.status == "error")
    lines.append(f"{'TOTAL':<36} {found:>5} events {errors:>5} errors")
    lines.append("=" * 72)
    return lines
