from eventfeed.utils.dates import parse_canonical, today as local_today


def event_day(event):
    return parse_canonical(event.date)


def partition_events(events, today=None):
    """
    Split events into (upcoming, past).
    An event happening today still counts as upcoming.
    """
    today = today or local_today()
    upcoming = []
    past = []
    for event in events:
        if event_day(event) >= today:
            upcoming.append(event)
        else:
            past.append(event)
    return upcoming, past


def sort_events(events, today=None):
    """
    Upcoming events soonest first, then past events most recent first.
    Sorting is stable so events on the same day keep their input order.
    """
    upcoming, past = partition_events(events, today=today)
    upcoming.sort(key=event_day)
    past.sort(key=event_day, reverse=True)
    return upcoming + past
