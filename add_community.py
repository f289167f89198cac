#!/usr/bin/env python3
"""Add a Meetup group to the communities file."""

import sys
from pathlib import Path

import requests

from eventfeed import config
from eventfeed.logos import process_logo
from eventfeed.models import CommunityConfig
from eventfeed.pipeline.io import load_communities, save_communities
from eventfeed.sources.meetup import scrape_meetup
from eventfeed.utils.text import slugify


def parse_tags(tags_arg):
    if not tags_arg:
        return []
    return [tag.strip() for tag in tags_arg.split(",") if tag.strip()]


def add_community(url, tags_arg=None, communities_path=config.COMMUNITIES_PATH,
                  logos_dir=config.LOGOS_DIR):
    """
    Scrape a Meetup group and append it to the communities file.
    Returns the new community, or raises ValueError with a user facing message.
    """
    if "meetup.com" not in url:
        raise ValueError("Only Meetup.com URLs are supported")

    print(f"Scraping {url}...")
    data = scrape_meetup(url)
    if not data.name:
        reason = f" ({data.error})" if data.error else ""
        raise ValueError(f"Could not extract community name from URL{reason}")

    print(f"Found: {data.name}")
    print(f"Members: {data.members or 'unknown'}")

    communities = load_communities(communities_path)
    if any(c.name == data.name or c.events == url for c in communities):
        raise ValueError(f'Community "{data.name}" already exists')

    community = CommunityConfig(
        name=data.name,
        location=config.DEFAULT_LOCATION,
        tags=parse_tags(tags_arg),
        events=url,
        logo=data.logo,
    )

    if data.logo:
        slug = slugify(data.name)
        print("Downloading and processing logo...")
        try:
            process_logo(data.logo, Path(logos_dir) / f"{slug}.png")
            community.logo = f"{slug}.png"
            print(f"Logo saved as {slug}.png")
        except (requests.RequestException, OSError) as e:
            print(f"  Warning: Could not process logo {data.logo}: {e}")

    communities.append(community)
    communities.sort(key=lambda c: c.name.lower())
    save_communities(communities, communities_path)
    print(f"Added {data.name} to {communities_path.name}")

    return community


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Add a Meetup group to the communities file")
    parser.add_argument("url", help="Meetup group URL, e.g. https://www.meetup.com/example/")
    parser.add_argument("tags", nargs="?", default=None, help='Comma separated tags, e.g. "Python,Data Science"')
    parser.add_argument("--communities", default=str(config.COMMUNITIES_PATH), help="Path to communities.yml")

    args = parser.parse_args()
    try:
        community = add_community(args.url, args.tags, communities_path=Path(args.communities))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nSuccess! {community.name} has been added to the site.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
