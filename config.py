# config.py - env driven settings (override via env if you prefer)
import os
from pathlib import Path
from typing import Optional

BASE_URL = os.environ.get("BASE_URL", "http://127.0.0.1:8000")

# Used for form encoding of args and for decoding response bodies
REQUEST_ENCODING = os.environ.get("REQUEST_ENCODING", "utf-8")


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


# seconds; unset -> whatever the transport defaults to
TIMEOUT = _optional_float(os.environ.get("TIMEOUT"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# repo root
HERE = Path(__file__).resolve().parent
REQUESTS_CSV = Path(os.environ.get("REQUESTS_CSV", str(HERE / "data" / "requests.csv")))
REPORTS_DIR = Path(os.environ.get("REPORTS_DIR", str(HERE / "reports")))
