#!/usr/bin/env python3
"""Remove communities the last scrape run marked as inactive."""

import sys
from pathlib import Path

from eventfeed import config
from eventfeed.pipeline.io import load_communities, load_inactive, save_communities


def prune_communities(feed_path=config.OUTPUT_YAML_PATH, communities_path=config.COMMUNITIES_PATH,
                      logos_dir=config.LOGOS_DIR):
    """Drop inactive communities and their local logos. Returns the pruned ones."""
    inactive = set(load_inactive(feed_path))
    communities = load_communities(communities_path)

    active = [c for c in communities if c.name not in inactive]
    pruned = [c for c in communities if c.name in inactive]

    if not pruned:
        return []

    save_communities(active, communities_path)
    for community in pruned:
        print(f"Pruned: {community.name}")

        if community.logo and not community.logo.startswith("http"):
            logo_path = Path(logos_dir) / community.logo
            try:
                logo_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                print(f"  Warning: Failed to delete logo {logo_path}: {e}")

    return pruned


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Prune inactive communities")
    parser.add_argument("--feed", default=str(config.OUTPUT_YAML_PATH), help="Feed listing inactive communities")
    parser.add_argument("--communities", default=str(config.COMMUNITIES_PATH), help="Path to communities.yml")

    args = parser.parse_args()
    prune_communities(feed_path=Path(args.feed), communities_path=Path(args.communities))
    return 0


if __name__ == "__main__":
    sys.exit(main())
