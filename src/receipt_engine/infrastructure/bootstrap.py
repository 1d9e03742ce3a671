"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers,
and the only place that reads the environment.  Every other module
depends only on abstractions.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import timezone
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog

from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.settings import RenderSettings
from receipt_engine.infrastructure.persistence.builtin_design_repository import (
    BuiltinDesignRepository,
)
from receipt_engine.infrastructure.persistence.json_design_repository import (
    JsonDesignRepository,
)
from receipt_engine.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    return Path(os.environ.get("RECEIPT_DATA_DIR", _DEFAULT_DATA_DIR))


def design_repository() -> JsonDesignRepository:
    return JsonDesignRepository(data_dir() / "designs", fallback=BuiltinDesignRepository())


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(data_dir() / "orders.json")


def render_settings() -> RenderSettings:
    zone_name = os.environ.get("RECEIPT_TIMEZONE", "UTC")
    try:
        zone = timezone.utc if zone_name.upper() == "UTC" else ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"Unknown time zone in RECEIPT_TIMEZONE: '{zone_name}'") from exc
    return RenderSettings(
        currency_symbol=os.environ.get("RECEIPT_CURRENCY", "$"),
        tz=zone,
    )


def configure_logging(level: str | None = None, json_output: bool = False) -> None:
    """Configure structlog once per process; logs go to stderr."""
    level_name = (level or os.environ.get("RECEIPT_LOG_LEVEL", "WARNING")).upper()
    processors = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level_name, logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
