"""Storage path module that manages the rendered report directories."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import REPORTS_DIR


def ensure_reports_dir(base_dir: Optional[Path] = None) -> Path:
    # Create the report output directory on first use and return it.
    path = Path(base_dir) if base_dir is not None else REPORTS_DIR
    path.mkdir(parents=True, exist_ok=True)
    return path
