"""Render settings: the knobs a render pass reads but never changes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo


@dataclass(frozen=True)
class RenderSettings:
    currency_symbol: str = "$"
    tz: tzinfo = timezone.utc
    timestamp_format: str = "%m/%d/%Y %H:%M"

    def format_timestamp(self, moment: datetime) -> str:
        return moment.astimezone(self.tz).strftime(self.timestamp_format)


DEFAULT_SETTINGS = RenderSettings()
