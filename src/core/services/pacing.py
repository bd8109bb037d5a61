"""Rate-limit pacing for sequential API calls.

The delays are plain parameters so tests (and dry runs) can zero them without
touching the control flow of the services that await them.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from core.config import AppSettings

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class PacingPolicy:
    """Fixed waits inserted between API calls."""

    label_delay: float = 0.1
    issue_delay: float = 1.0
    batch_size: int | None = None
    batch_delay: float = 0.0
    sleep: Sleep = field(default=asyncio.sleep, repr=False, compare=False)

    @classmethod
    def none(cls, sleep: Sleep = asyncio.sleep) -> "PacingPolicy":
        return cls(label_delay=0.0, issue_delay=0.0, batch_size=None, batch_delay=0.0, sleep=sleep)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "PacingPolicy":
        return cls(
            label_delay=settings.label_delay_seconds,
            issue_delay=settings.issue_delay_seconds,
            batch_size=settings.batch_size,
            batch_delay=settings.batch_delay_seconds,
        )

    async def after_label(self) -> None:
        await self.sleep(self.label_delay)

    async def after_issue(self) -> None:
        await self.sleep(self.issue_delay)

    async def after_row(self, attempted: int, remaining: int) -> None:
        """Wait `batch_delay` once every `batch_size` attempted rows."""

        if not self.batch_size or remaining <= 0:
            return
        if attempted % self.batch_size == 0:
            await self.sleep(self.batch_delay)
