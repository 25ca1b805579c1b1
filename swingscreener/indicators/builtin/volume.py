from __future__ import annotations

from typing import Sequence

from swingscreener.core.types import Bar, volumes
from swingscreener.indicators.base import Indicator
from swingscreener.indicators.series import analyze_volume


class VolumeRatio(Indicator):
    """Latest volume relative to its trailing average."""

    def __init__(self, period: int = 20, spike_threshold: float = 1.5) -> None:
        self.name = "VOLUME"
        self.period = period
        self.spike_threshold = spike_threshold
        self.warmup_period = period

    def calculate(self, bars: Sequence[Bar]) -> dict | None:
        if not self.is_ready(bars):
            return None
        analysis = analyze_volume(volumes(bars), self.period, self.spike_threshold)
        return {
            "avg_volume": analysis.avg_volume,
            "volume_ratio": analysis.volume_ratio,
            "is_spike": analysis.is_spike,
        }
