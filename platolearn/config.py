"""
Runtime configuration for PLATO Learn.

Values come from module-level defaults, overridable through environment
variables (optionally loaded from a project-level .env file).
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent
load_dotenv(PROJECT_ROOT / ".env")


# -----------------------------------------------------------------------------
# Progression rules
# -----------------------------------------------------------------------------

UNLOCK_THRESHOLD = 60         # percent best score required to satisfy a prerequisite
XP_PER_CORRECT_ANSWER = 10


# -----------------------------------------------------------------------------
# Storage
# -----------------------------------------------------------------------------

STORAGE_KEY = "plato-learn-progress"

DEFAULT_PROGRESS_DIR = Path(os.environ.get("PLATOLEARN_HOME", Path.home() / ".platolearn"))
DEFAULT_PROGRESS_DB = Path(
    os.environ.get("PLATOLEARN_PROGRESS_DB", DEFAULT_PROGRESS_DIR / "progress.db")
)


# -----------------------------------------------------------------------------
# Content
# -----------------------------------------------------------------------------

CONTENT_DIR = Path(os.environ.get("PLATOLEARN_CONTENT_DIR", Path(__file__).parent / "content"))


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------

LOG_LEVEL = os.environ.get("PLATOLEARN_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None):
    """Configure root logging for applications embedding the engine."""
    level_value = getattr(logging, (level or LOG_LEVEL).upper(), None)
    logging.basicConfig(
        level=level_value if isinstance(level_value, int) else logging.INFO,
        format=LOG_FORMAT,
    )
