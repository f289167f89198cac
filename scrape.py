#!/usr/bin/env python3
"""
Scrape the next (or latest) event of every configured community and save
the combined feed for the site.
Currently supports:
- Meetup groups (meetup.com)
- Luma calendars (lu.ma)
- Meetabit communities (meetabit.com)
- Communities publishing their own JSON endpoint
"""

import sys
from datetime import datetime
from pathlib import Path

from eventfeed import config
from eventfeed.models import OutputFeed
from eventfeed.pipeline.classify import sort_events
from eventfeed.pipeline.io import (
    load_communities,
    load_existing_status,
    write_feed,
    write_status,
)
from eventfeed.pipeline.metrics import format_summary
from eventfeed.pipeline.orchestrate import scrape_all
from eventfeed.pipeline.runlog import RunLog
from eventfeed.pipeline.validate import validate_event


def build_feed(outcomes, run_timestamp, log=print):
    """Collect scraped events into the ordered feed."""
    events = [o.event for o in outcomes if o.event is not None]
    valid_events = [e for e in events if validate_event(e)]

    invalid_count = len(events) - len(valid_events)
    if invalid_count > 0:
        log(f"  Filtered out {invalid_count} invalid events", "WARNING")

    return OutputFeed(
        updated=run_timestamp,
        events=sort_events(valid_events),
        inactive=[o.name for o in outcomes if o.status == "inactive"],
    )


def build_status(outcomes, run_timestamp, existing_status):
    """Per-community status, keeping the last success from earlier runs."""
    communities = {}
    for outcome in outcomes:
        status = {
            "last_run": run_timestamp,
            "status": outcome.status,
            "date": outcome.event.date if outcome.event else outcome.stale_date,
            "error": outcome.error,
        }

        existing = existing_status.get("communities", {}).get(outcome.name, {})
        if outcome.status == "ok":
            status["last_success"] = run_timestamp
        elif existing.get("last_success"):
            status["last_success"] = existing["last_success"]

        communities[outcome.name] = status

    return {
        "last_run": run_timestamp,
        "all_success": all(o.success for o in outcomes),
        "total_events": sum(1 for o in outcomes if o.status == "ok"),
        "communities": communities,
    }


def run(communities_path=config.COMMUNITIES_PATH, json_path=config.OUTPUT_JSON_PATH,
        yaml_path=config.OUTPUT_YAML_PATH, status_path=config.STATUS_PATH,
        log_path=config.LOG_PATH):
    log = RunLog()
    run_timestamp = datetime.utcnow().isoformat() + "Z"
    log(f"Starting scrape run at {run_timestamp}")

    try:
        communities = load_communities(communities_path)
    except (OSError, ValueError) as e:
        log(f"ERROR: Could not load communities from {communities_path}: {e}", "ERROR")
        return None

    log(f"Scraping {len(communities)} communities...")
    outcomes = scrape_all(communities, log=log)

    log("\nProcessing events...")
    feed = build_feed(outcomes, run_timestamp, log=log)

    log("")
    for line in format_summary(outcomes):
        log(line)
    log(f"\nTotal events: {len(feed.events)}")
    if feed.inactive:
        log(f"Inactive communities: {', '.join(feed.inactive)}", "WARNING")

    failed = [o.name for o in outcomes if not o.success]
    if failed:
        log(f"WARNING: Failed to scrape: {', '.join(failed)}", "ERROR")

    write_feed(feed, json_path, yaml_path)
    log(f"Events saved to {json_path} and {yaml_path}")

    status = build_status(outcomes, run_timestamp, load_existing_status(status_path))
    write_status(status_path, status)
    log(f"Status saved to {status_path}")

    log.save(log_path, retention_days=config.LOG_RETENTION_DAYS)
    return feed


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Scrape community events into the site feed")
    parser.add_argument("--communities", default=str(config.COMMUNITIES_PATH), help="Path to communities.yml")
    parser.add_argument("--output-dir", default=str(config.OUTPUT_DIR), help="Directory for output.json/output.yml")

    args = parser.parse_args()
    output_dir = Path(args.output_dir)
    feed = run(
        communities_path=Path(args.communities),
        json_path=output_dir / "output.json",
        yaml_path=output_dir / "output.yml",
        status_path=output_dir / "scrape-status.json",
        log_path=output_dir / "scrape-log.txt",
    )
    return 0 if feed is not None else 1


if __name__ == "__main__":
    sys.exit(main())
