"""Wall clock seam. The engine never calls datetime.now() directly."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Local wall time; calendar days follow the host's timezone."""

    def now(self) -> datetime:
        return datetime.now()
