"""Settings module defining paths, parser thresholds and defaults."""

import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_DIR = REPO_ROOT / "auditlens"
DATA_DIR = PACKAGE_DIR / "data"
DEFAULT_DIALECT_FILE = Path(
    os.getenv("AUDITLENS_DIALECT_FILE", str(DATA_DIR / "dialects.yml"))
)
STORAGE_DIR = REPO_ROOT / "storage"
REPORTS_DIR = Path(os.getenv("AUDITLENS_REPORTS_DIR", str(STORAGE_DIR / "reports")))
FALLBACK_MIN_LENGTH = int(os.getenv("AUDITLENS_FALLBACK_MIN_LENGTH", "50"))
MAX_TITLE_LENGTH = 120
LOG_LEVEL = os.getenv("AUDITLENS_LOG_LEVEL", "INFO")
API_PREFIX = "/api/v1"
