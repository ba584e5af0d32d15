from dataclasses import dataclass, fields
from typing import Dict


@dataclass
class StatBlock:
    max_hp: int = 100
    max_mp: int = 50
    attack: int = 10
    defense: int = 5
    speed: float = 3.0

    def combined(self, other: "StatBlock") -> "StatBlock":
        """Field-wise sum of two blocks (base + modifiers -> effective)."""
        return StatBlock(**{
            f.name: getattr(self, f.name) + getattr(other, f.name)
            for f in fields(self)
        })

    def add_deltas(self, deltas: Dict[str, float]) -> None:
        # Unknown stat names are ignored so catalog typos can't crash a tick
        for name, value in deltas.items():
            if hasattr(self, name):
                setattr(self, name, getattr(self, name) + value)

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def empty_modifiers() -> StatBlock:
    """A zeroed block used for additive achievement modifiers."""
    return StatBlock(max_hp=0, max_mp=0, attack=0, defense=0, speed=0.0)
