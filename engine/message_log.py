from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from settings import BATTLE_LOG_MAX, COLOR_TEXT, COLOR_DAMAGE, COLOR_HEAL

# Type alias for RGB colors used in UI rendering
Color = Tuple[int, int, int]

# ---------------------------------------------------------------------------
# Entry kind → color helpers (used by the battle HUD to tint log lines)
# ---------------------------------------------------------------------------

_KIND_COLORS: dict[str, Color] = {
    "normal": COLOR_TEXT,
    "damage": COLOR_DAMAGE,
    "heal": COLOR_HEAL,
    "levelup": (255, 215, 0),
}


def get_kind_color(kind: str) -> Optional[Color]:
    """
    Map a log entry kind to an RGB color.

    Returns None if the kind is unknown, so callers can fall back
    to default text colors.
    """
    if not kind:
        return None
    return _KIND_COLORS.get(str(kind).lower())


@dataclass(frozen=True)
class LogEntry:
    text: str
    kind: str = "normal"

    @property
    def color(self) -> Color:
        return get_kind_color(self.kind) or COLOR_TEXT


class BattleLog:
    """
    Manages battle message history and the current last message.

    Features:
    - Stores message history as (text, kind) entries
    - Tracks the latest visible message (last_message)
    - Supports multi-line messages (each line becomes a log entry)
    - Automatically clamps log size to prevent memory bloat
    """

    def __init__(self, max_size: int = BATTLE_LOG_MAX) -> None:
        """
        Initialize a new battle log.

        Args:
            max_size: Maximum number of log entries to keep (default 50)
        """
        self.entries: List[LogEntry] = []
        self.max_size: int = max_size

    # ------------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------------

    def add_entry(self, value: str, kind: str = "normal") -> None:
        """
        Add a new battle message of the given kind.

        Multi-line messages (e.g. several level-ups from one kill) become
        one entry per non-empty line, all sharing the same kind.
        """
        raw = "" if value is None else str(value)

        # Normalise newlines and split into visible lines
        raw = raw.replace("\r\n", "\n").replace("\r", "\n")
        lines = [ln.strip() for ln in raw.split("\n") if ln.strip()]
        if not lines:
            return

        self.entries.extend(LogEntry(line, kind) for line in lines)

        # Clamp log size (keep most recent entries)
        max_len = max(1, int(self.max_size))
        if len(self.entries) > max_len:
            self.entries = self.entries[-max_len:]

    def add_message(self, value: str) -> None:
        """Plain-text alias used by error handling and other subsystems."""
        self.add_entry(value, "normal")

    @property
    def last_message(self) -> str:
        """Latest message, or an empty string if the log is empty."""
        return self.entries[-1].text if self.entries else ""

    def recent(self, count: int) -> List[LogEntry]:
        if count <= 0:
            return []
        return self.entries[-count:]

    def texts(self) -> List[str]:
        return [entry.text for entry in self.entries]

    def clear(self) -> None:
        """Clear all messages and reset the log."""
        self.entries = []
