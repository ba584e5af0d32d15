from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S", time.localtime())


# Gameplay events the game emits (anything else is still written as-is)
KNOWN_EVENTS = frozenset({
    "telemetry_init",
    "mode_change",
    "battle_start",
    "battle_end",
    "floor_cleared",
    "achievement_unlocked",
    "skill_rank_up",
    "save",
    "load",
    "tick",
})


@dataclass
class TelemetryLogger:
    """
    JSON-lines event sink for playtest analysis.

    One row per event: wall-clock time, seconds since start and the event
    fields. Tick snapshots are sampled every `sample_every_n_ticks` ticks.
    """
    path: Optional[Path] = None
    enabled: bool = True
    flush_each_write: bool = False
    sample_every_n_ticks: int = 60
    _tick_counter: int = 0
    _started_at: float = field(default_factory=time.time)

    def init(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Touch file (don't overwrite)
        self.path.touch(exist_ok=True)
        self.log("telemetry_init", file=str(self.path))

    def log(self, event: str, **fields: Any) -> None:
        if not self.enabled or self.path is None:
            return

        row: Dict[str, Any] = {
            "t": round(time.time() - self._started_at, 3),
            "ts": _now_iso(),
            "event": event,
            **fields,
        }
        if event not in KNOWN_EVENTS:
            row["unknown_event"] = True

        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(row, ensure_ascii=False, default=str) + "\n")
                if self.flush_each_write:
                    f.flush()
        except OSError:
            # Telemetry must never break the game.
            return

    def tick(self, **fields: Any) -> None:
        """Count one simulation tick and write a sampled snapshot row."""
        self._tick_counter += 1
        if self.sample_every_n_ticks > 0 and self._tick_counter % self.sample_every_n_ticks == 0:
            self.log("tick", n=self._tick_counter, **fields)


# global singleton (easy import everywhere)
telemetry = TelemetryLogger(enabled=False)
