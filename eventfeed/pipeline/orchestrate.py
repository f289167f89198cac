import time
from concurrent.futures import ThreadPoolExecutor

from eventfeed.models import NormalizedEvent
from eventfeed.pipeline.metrics import CommunityOutcome
from eventfeed.pipeline.runlog import RunLog
from eventfeed.registry import get_scraper
from eventfeed.utils.dates import is_stale


def scrape_community(community, log=None):
    """
    Scrape one community and normalize its event.
    Never raises: failures end up in the returned outcome and the log.
    """
    log = log or RunLog()
    outcome = CommunityOutcome(name=community.name)
    start_time = time.time()

    try:
        match = get_scraper(community)
        if match is None:
            outcome.status = "unsupported"
            log(f"  No scraper for {community.name} ({community.events})", "WARNING")
            return outcome

        scraper, url = match
        result = scraper(url)

        if result.event is None:
            outcome.status = "no_event"
            outcome.error = result.error
            reason = f": {result.error}" if result.error else ""
            log(f"  No event found for {community.name}{reason}", "WARNING")
        elif is_stale(result.event.date):
            outcome.status = "inactive"
            outcome.stale_date = result.event.date
            log(f"Inactive: {community.name} ({result.event.date})", "WARNING")
        else:
            outcome.event = NormalizedEvent.from_scrape(community, result)
            outcome.status = "ok"
    except Exception as e:
        outcome.status = "error"
        outcome.error = str(e)
        log(f'Error scraping "{community.name}": {e}', "WARNING")
    finally:
        outcome.duration_ms = (time.time() - start_time) * 1000

    return outcome


def scrape_all(communities, log=None):
    """
    Scrape every community at once, one worker each.
    Outcomes come back in configuration order regardless of which
    request finished first.
    """
    log = log or RunLog()
    if not communities:
        return []

    with ThreadPoolExecutor(max_workers=len(communities)) as executor:
        futures = [executor.submit(scrape_community, c, log) for c in communities]

        # scrape_community never raises, so joining in order is safe
        return [future.result() for future in futures]
