"""Deployment settings read from the environment (and an optional .env file)."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (dotenv auto-walks up from CWD)
load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_ROSTER_FILE = PACKAGE_DIR / "data" / "sample_roster.json"

HOST = os.getenv("CHAMPIONS315_HOST", "127.0.0.1")
PORT = int(os.getenv("CHAMPIONS315_PORT", "7122"))
ROSTER_FILE = os.getenv("CHAMPIONS315_ROSTER_FILE", str(DEFAULT_ROSTER_FILE))
HISTORY_FILE = os.getenv("CHAMPIONS315_HISTORY_FILE", os.path.join("data", "matches.json"))
LOG_LEVEL = os.getenv("CHAMPIONS315_LOG_LEVEL", "INFO").strip().upper()
