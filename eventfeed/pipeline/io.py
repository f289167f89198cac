import json
import os
import re
import tempfile
from datetime import datetime, timedelta

import yaml

from eventfeed.models import CommunityConfig


def trim_log_by_time(log_path, retention_days=14):
    """
    Remove log entries older than retention_days.
    Returns list of lines to keep.
    """
    if not log_path.exists():
        return []

    cutoff = datetime.utcnow() - timedelta(days=retention_days)
    cutoff_str = cutoff.strftime("%Y-%m-%d %H:%M:%S")

    kept_lines = []
    current_entry_recent = False

    with open(log_path, "r") as f:
        for line in f:
            match = re.match(r"\[(\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})\]", line)
            if match:
                current_entry_recent = match.group(1) >= cutoff_str

            if current_entry_recent:
                kept_lines.append(line)

    return kept_lines


def load_communities(path):
    """
    Load the communities file. Raises if it is missing or malformed,
    since a run has nothing to do without it.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of communities")
    return [CommunityConfig.from_dict(entry) for entry in data]


def save_communities(communities, path):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            [c.to_dict() for c in communities],
            f,
            allow_unicode=True,
            sort_keys=False,
        )


def _replace(path, write):
    """Write through a temp file in the same directory, then swap it in."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            write(f)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


def write_feed(feed, json_path, yaml_path=None):
    """Write the feed as JSON and, optionally, the same document as YAML."""
    data = feed.to_dict()
    _replace(json_path, lambda f: json.dump(data, f, indent=2, ensure_ascii=False))
    if yaml_path is not None:
        _replace(yaml_path, lambda f: yaml.safe_dump(data, f, allow_unicode=True, sort_keys=False))


def load_feed(path):
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def load_inactive(path):
    """Names of communities the last run marked inactive."""
    return list(load_feed(path).get("inactive") or [])


def load_existing_status(path):
    """Load existing scrape status file if available."""
    try:
        if path.exists():
            with open(path, "r") as f:
                return json.load(f)
    except ValueError:
        pass
    return {"communities": {}}


def write_status(path, status):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(status, f, indent=2)
