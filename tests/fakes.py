"""Test doubles shared by the budget test modules."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Sequence, Tuple

from measure import MeasureError, MeasureOptions, SizeReport


class FakeMeasurer:
    """Records every call and answers from a table keyed by the first file."""

    def __init__(
        self,
        sizes: Optional[Dict[str, SizeReport]] = None,
        *,
        default: SizeReport = SizeReport(parsed=100, gzip=40),
        delays: Optional[Dict[str, float]] = None,
        fail_on: Optional[str] = None,
    ) -> None:
        self.sizes = sizes or {}
        self.default = default
        self.delays = delays or {}
        self.fail_on = fail_on
        self.calls: List[Tuple[List[str], MeasureOptions]] = []
        self.cancelled: List[str] = []

    async def measure(self, files: Sequence[str], options: MeasureOptions) -> SizeReport:
        files = list(files)
        self.calls.append((files, options))
        key = files[0] if files else ""
        try:
            await asyncio.sleep(self.delays.get(key, 0))
        except asyncio.CancelledError:
            self.cancelled.append(key)
            raise
        if self.fail_on is not None and key == self.fail_on:
            raise MeasureError(f"boom: {key}")
        return self.sizes.get(key, self.default)
