"""
Host load throttling for long directory walks.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

import psutil

from config import AppConfig


@dataclass
class ResourceMonitor:
    """Pause the caller while CPU or RAM usage is above the configured limits."""

    max_cpu_percent: float
    max_ram_percent: float
    sleep_seconds: float = 0.5
    max_throttle_seconds: float = 15.0
    min_check_interval_seconds: float = 0.5
    _last_check: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        psutil.cpu_percent(interval=None)

    @classmethod
    def from_config(cls, config: AppConfig) -> Optional["ResourceMonitor"]:
        """Build a monitor from ``resource_limits``; None when both limits are off."""
        max_cpu = float(config.get("resource_limits", "max_cpu_percent", default=0))
        max_ram = float(config.get("resource_limits", "max_ram_percent", default=0))
        if max_cpu <= 0 and max_ram <= 0:
            return None
        return cls(
            max_cpu_percent=max_cpu,
            max_ram_percent=max_ram,
            max_throttle_seconds=float(
                config.get("resource_limits", "max_throttle_seconds", default=15)
            ),
            min_check_interval_seconds=float(
                config.get("resource_limits", "min_check_interval_seconds", default=0.5)
            ),
        )

    def over_limit(self) -> bool:
        cpu = psutil.cpu_percent(interval=0.1)
        ram = psutil.virtual_memory().percent
        cpu_over = self.max_cpu_percent > 0 and cpu > self.max_cpu_percent
        ram_over = self.max_ram_percent > 0 and ram > self.max_ram_percent
        return cpu_over or ram_over

    def throttle(self) -> None:
        """Sleep while usage exceeds thresholds, for at most ``max_throttle_seconds``."""
        if self.max_cpu_percent <= 0 and self.max_ram_percent <= 0:
            return
        now = time.monotonic()
        if (now - self._last_check) < self.min_check_interval_seconds:
            return
        self._last_check = now
        start_time = time.monotonic()
        while self.over_limit():
            if (time.monotonic() - start_time) >= self.max_throttle_seconds:
                return
            time.sleep(self.sleep_seconds)
