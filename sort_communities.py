#!/usr/bin/env python3
"""Sort the communities file by name and report duplicate names."""

import sys
from pathlib import Path

from eventfeed import config
from eventfeed.pipeline.io import load_communities, save_communities
from eventfeed.pipeline.validate import find_duplicate_names


def sort_communities(communities_path=config.COMMUNITIES_PATH):
    communities = load_communities(communities_path)

    for name in find_duplicate_names(communities):
        print(f"Duplicate name found: {name}", file=sys.stderr)

    communities.sort(key=lambda c: c.name.lower())
    save_communities(communities, communities_path)
    return communities


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Sort communities.yml by name")
    parser.add_argument("--communities", default=str(config.COMMUNITIES_PATH), help="Path to communities.yml")

    args = parser.parse_args()
    sort_communities(Path(args.communities))
    return 0


if __name__ == "__main__":
    sys.exit(main())
