from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class RulesSettings:
    rules_path: Optional[Path]
    log_level: int


def get_rules_settings() -> RulesSettings:
    """
    Load rule engine settings from environment variables (.env supported).

    Reads:
      STOREFRONT_RULES_PATH       rule set file used by the CLI and API
      STOREFRONT_RULES_LOG_LEVEL  logging level name (default: WARNING)
    """
    raw_path = os.getenv("STOREFRONT_RULES_PATH", "").strip()
    return RulesSettings(
        rules_path=Path(raw_path) if raw_path else None,
        log_level=_log_level(os.getenv("STOREFRONT_RULES_LOG_LEVEL", "WARNING")),
    )


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"STOREFRONT_RULES_LOG_LEVEL must be a logging level name, got {name!r}.")
    return level
