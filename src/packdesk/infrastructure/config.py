"""Runtime settings, read from the environment (and a ``.env`` file if present)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    log_level: str = "INFO"
    log_file: Path | None = None
    actor_name: str | None = None
    actor_email: str | None = None
    wc_url: str | None = None
    wc_consumer_key: str | None = None
    wc_consumer_secret: str | None = None
    wc_timeout: float = 10.0


def load_settings() -> Settings:
    load_dotenv()
    log_file = os.getenv("PACKDESK_LOG_FILE")
    return Settings(
        data_dir=Path(os.getenv("PACKDESK_DATA_DIR") or _DEFAULT_DATA_DIR),
        log_level=os.getenv("PACKDESK_LOG_LEVEL", "INFO").upper(),
        log_file=Path(log_file) if log_file else None,
        actor_name=os.getenv("PACKDESK_ACTOR"),
        actor_email=os.getenv("PACKDESK_ACTOR_EMAIL"),
        wc_url=os.getenv("WC_URL"),
        wc_consumer_key=os.getenv("WC_CONSUMER_KEY"),
        wc_consumer_secret=os.getenv("WC_CONSUMER_SECRET"),
        wc_timeout=float(os.getenv("WC_TIMEOUT", "10")),
    )
