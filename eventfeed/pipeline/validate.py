from eventfeed import config
from eventfeed.utils.dates import parse_canonical


def validate_event(event):
    """Check that a feed record has all required fields with valid data."""
    for field in config.REQUIRED_FIELDS:
        if not getattr(event, field, None):
            return False
    return parse_canonical(event.date) is not None


def find_duplicate_names(communities):
    seen = set()
    duplicates = []
    for community in communities:
        if community.name in seen and community.name not in duplicates:
            duplicates.append(community.name)
        seen.add(community.name)
    return duplicates
