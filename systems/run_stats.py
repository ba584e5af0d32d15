"""
Aggregate run statistics read by achievement conditions.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping


# camelCase keys from the legacy save format
_LEGACY_KEYS = {
    "enemiesKilled": "enemies_killed",
    "totalDamageTaken": "total_damage_taken",
    "totalSkillUses": "total_skill_uses",
}


@dataclass
class RunStats:
    """Monotonic counters. Persisted and merged field by field on load."""
    enemies_killed: int = 0
    total_damage_taken: int = 0
    total_skill_uses: int = 0

    def record_kill(self) -> None:
        self.enemies_killed += 1

    def record_damage_taken(self, amount: int) -> None:
        if amount > 0:
            self.total_damage_taken += amount

    def record_skill_use(self) -> None:
        self.total_skill_uses += 1

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def merge(self, data: Mapping[str, Any]) -> None:
        """
        Overlay saved values onto the current ones.

        Fields missing from `data` keep their current value, unknown keys are
        ignored, and non-numeric values are skipped.
        """
        known = {f.name for f in fields(self)}
        for key, value in data.items():
            name = _LEGACY_KEYS.get(key, key)
            if name not in known:
                continue
            try:
                setattr(self, name, int(value))
            except (TypeError, ValueError, OverflowError):
                continue
