import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

REPO_ROOT = Path(__file__).resolve().parents[1]


def _path(name, default):
    value = os.environ.get(name)
    return Path(value) if value else REPO_ROOT / default


COMMUNITIES_PATH = _path("COMMUNITIES_PATH", "data/communities.yml")
OUTPUT_DIR = _path("OUTPUT_DIR", "site/_data")
OUTPUT_JSON_PATH = OUTPUT_DIR / "output.json"
OUTPUT_YAML_PATH = OUTPUT_DIR / "output.yml"
STATUS_PATH = OUTPUT_DIR / "scrape-status.json"
LOG_PATH = OUTPUT_DIR / "scrape-log.txt"
LOGOS_DIR = _path("LOGOS_DIR", "site/assets/logos")

DEFAULT_LOCATION = os.environ.get("DEFAULT_LOCATION", "Helsinki, Finland")

REQUEST_TIMEOUT = int(os.environ.get("REQUEST_TIMEOUT", "30"))
BROWSER_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"

# Events older than this are treated as a sign the community is inactive
STALE_AFTER_MS = 31536000000

LOG_RETENTION_DAYS = 14
LOGO_SIZE = 128

REQUIRED_FIELDS = ["name", "date", "event"]
