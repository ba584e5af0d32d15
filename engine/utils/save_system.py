"""
Save/Load system for the game.

Handles serialization and deserialization of game state to/from a flat JSON
record, held in a key-value SaveStore (a directory of JSON files in the real
game, a dict in tests).

Restoring is two-phase: the raw record is first parsed and validated into a
SaveRecord, and only a fully valid record is applied to the game, so a
malformed save never leaves the game half-loaded.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any, List, Tuple, Mapping

from settings import SAVE_KEY, SAVE_VERSION, MAX_EQUIPPED_SKILLS
from engine.error_handler import SaveError, ValidationError, log_error

logger = logging.getLogger("dungeon_rpg.save")


# -----------------------------------------------------------------------------
# Stores
# -----------------------------------------------------------------------------

class SaveStore:
    """Key-value blob storage used for save records."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, blob: str) -> None:
        raise NotImplementedError


class MemorySaveStore(SaveStore):
    def __init__(self) -> None:
        self.blobs: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def set(self, key: str, blob: str) -> None:
        self.blobs[key] = blob


class FileSaveStore(SaveStore):
    """One JSON file per key inside `directory`."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise SaveError(f"Could not read {path}: {e}", "Could not read save file.") from e

    def set(self, key: str, blob: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # Write to a temporary file first, then rename (atomic write)
            temp_path = path.with_suffix(".tmp")
            temp_path.write_text(blob, encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            raise SaveError(f"Could not write {path}: {e}", "Could not write save file.") from e


# -----------------------------------------------------------------------------
# Save / load entry points
# -----------------------------------------------------------------------------

def save_game(game, store: SaveStore, key: str = SAVE_KEY) -> bool:
    """
    Save the current game state into `store`.

    Returns:
        True if save was successful, False otherwise
    """
    try:
        blob = json.dumps(serialize_game(game), indent=2, ensure_ascii=False)
        store.set(key, blob)
        logger.info("Game saved under %r", key)
        return True
    except (SaveError, TypeError, ValueError) as e:
        log_error(e, "save_game")
        return False


def load_game(game, store: SaveStore, key: str = SAVE_KEY) -> bool:
    """
    Load a save record from `store` into `game`.

    Returns:
        True if a record was found and applied. Absent or malformed data
        returns False and leaves the game untouched.
    """
    try:
        blob = store.get(key)
        if blob is None:
            logger.info("No save data under %r", key)
            return False
        record = parse_record(json.loads(blob))
    except (SaveError, ValidationError, ValueError) as e:
        log_error(e, "load_game")
        return False

    restore_game(game, record)
    logger.info("Game loaded from %r (version %s)", key, record.version)
    return True


# -----------------------------------------------------------------------------
# Serialization helpers
# -----------------------------------------------------------------------------

def serialize_game(game) -> Dict[str, Any]:
    """Convert a Game instance to a JSON-serializable dict."""
    return {
        "version": SAVE_VERSION,
        "player": _serialize_player(game.player),
        "skills": [
            {"id": s.id, "usage_count": s.usage_count, "rank": s.rank}
            for s in game.skill_master.all_skills()
        ],
        "achievements": [
            {"id": a.id, "unlocked": a.unlocked, "unlocked_at": a.unlocked_at}
            for a in game.achievement_master.all_achievements()
        ],
        "stats": game.run_stats.to_dict(),
        "loadout": list(game.loadout),
    }


def _serialize_player(player) -> Dict[str, Any]:
    """
    Position, pools and *base* stats. Achievement modifiers are never
    saved; they are rebuilt from the unlocked achievements on load.
    """
    stats = player.stats
    return {
        "x": float(player.x),
        "y": float(player.y),
        "hp": int(player.hp),
        "mp": float(player.mp),
        "max_hp": int(stats.base.max_hp),
        "max_mp": int(stats.base.max_mp),
        "attack": int(stats.base.attack),
        "defense": int(stats.base.defense),
        "speed": float(stats.base.speed),
        "level": int(stats.level),
        "exp": int(stats.exp),
        "exp_to_next": int(stats.exp_to_next),
    }


# -----------------------------------------------------------------------------
# Parsing (validation, legacy keys)
# -----------------------------------------------------------------------------

# field -> (accepted keys in priority order, cast)
_PLAYER_FIELDS: Dict[str, Tuple[Tuple[str, ...], type]] = {
    "x": (("x",), float),
    "y": (("y",), float),
    "hp": (("hp",), int),
    "mp": (("mp",), float),
    "max_hp": (("max_hp", "maxHp"), int),
    "max_mp": (("max_mp", "maxMp"), int),
    "attack": (("attack",), int),
    "defense": (("defense",), int),
    "speed": (("speed",), float),
    "level": (("level",), int),
    "exp": (("exp",), int),
    "exp_to_next": (("exp_to_next", "expToNext"), int),
}

# Lowest value a loaded player field may hold; exp_to_next 0 would never
# finish a level-up
_PLAYER_MINIMUMS: Dict[str, float] = {
    "max_hp": 1,
    "max_mp": 0,
    "attack": 0,
    "defense": 0,
    "speed": 0,
    "level": 1,
    "exp": 0,
    "exp_to_next": 1,
}


@dataclass
class SaveRecord:
    """A validated save record with legacy keys already normalised."""
    version: str = SAVE_VERSION
    player: Dict[str, Any] = field(default_factory=dict)
    skills: List[Tuple[str, int, Optional[int]]] = field(default_factory=list)
    achievements: List[Tuple[str, bool, Optional[float]]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)
    loadout: Optional[List[str]] = None


def _pick(data: Mapping[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _number(raw: Any, cast: type) -> Any:
    """Cast a decoded JSON value, refusing booleans, NaN and infinities."""
    if isinstance(raw, bool):
        raise ValueError(f"boolean value {raw!r}")
    try:
        value = float(raw)
    except OverflowError:
        value = math.inf
    if not math.isfinite(value):
        raise ValueError(f"non-finite value {raw!r}")
    return cast(value)


def _section(data: Mapping[str, Any], name: str, kind: type) -> Any:
    value = data.get(name)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise ValidationError(f"Save section {name!r} should be a {kind.__name__}")
    return value


def parse_record(data: Any) -> SaveRecord:
    """
    Validate a decoded save blob.

    Missing sections and fields are allowed (defaults are kept); wrong types,
    non-finite numbers or out-of-range values in the player block, and a
    non-object record, raise ValidationError. Bad skill, achievement and
    run stat entries are skipped with a warning, so restore_game never fails.
    """
    if not isinstance(data, dict):
        raise ValidationError("Save record is not an object")

    record = SaveRecord(version=str(data.get("version", "1.0")))

    player = _section(data, "player", dict)
    for name, (keys, cast) in _PLAYER_FIELDS.items():
        raw = _pick(player, keys)
        if raw is None:
            continue
        try:
            value = _number(raw, cast)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Player field {name!r} is not a number: {raw!r}") from e
        minimum = _PLAYER_MINIMUMS.get(name)
        if minimum is not None and value < minimum:
            raise ValidationError(f"Player field {name!r} is below {minimum}: {value!r}")
        record.player[name] = value

    for entry in _section(data, "skills", list):
        if not isinstance(entry, dict) or "id" not in entry:
            logger.warning("Skipping malformed skill entry: %r", entry)
            continue
        try:
            usage = _number(_pick(entry, ("usage_count", "usageCount")) or 0, int)
            rank = _pick(entry, ("rank",))
            record.skills.append((str(entry["id"]), usage, _number(rank, int) if rank is not None else None))
        except (TypeError, ValueError):
            logger.warning("Skipping skill entry with bad numbers: %r", entry)

    for entry in _section(data, "achievements", list):
        if not isinstance(entry, dict) or "id" not in entry:
            logger.warning("Skipping malformed achievement entry: %r", entry)
            continue
        unlocked_at = _pick(entry, ("unlocked_at", "unlockedAt"))
        try:
            unlocked_at = _number(unlocked_at, float) if unlocked_at is not None else None
        except (TypeError, ValueError):
            unlocked_at = None
        record.achievements.append((str(entry["id"]), bool(entry.get("unlocked", False)), unlocked_at))

    for key, value in _section(data, "stats", dict).items():
        try:
            record.stats[str(key)] = _number(value, int)
        except (TypeError, ValueError):
            logger.warning("Skipping run stat %r with bad value %r", key, value)

    if "loadout" in data and data["loadout"] is not None:
        loadout = _section(data, "loadout", list)
        record.loadout = [str(skill_id) for skill_id in loadout]

    return record


# -----------------------------------------------------------------------------
# Restore
# -----------------------------------------------------------------------------

def restore_game(game, record: SaveRecord) -> None:
    """
    Apply a validated SaveRecord to `game`.

    Passive effects are rebuilt on a fresh achievement set so they are
    applied exactly once. Current hp/mp are restored last, after the
    modifiers are back, so they clamp against the final maxima.
    """
    player = game.player
    stats = player.stats
    values = record.player

    game.reset_achievements()

    if "x" in values and "y" in values:
        player.move_to(values["x"], values["y"])
    for name in ("max_hp", "max_mp", "attack", "defense", "speed"):
        if name in values:
            setattr(stats.base, name, values[name])
    for name in ("level", "exp", "exp_to_next"):
        if name in values:
            setattr(stats, name, values[name])

    for skill_id, usage, saved_rank in record.skills:
        skill = game.skill_master.get_skill(skill_id)
        if skill is None:
            logger.debug("Ignoring unknown skill %r in save", skill_id)
            continue
        skill.restore(usage, saved_rank)

    for achievement_id, unlocked, unlocked_at in record.achievements:
        if not game.achievement_master.restore(achievement_id, unlocked, unlocked_at, player):
            logger.debug("Ignoring unknown achievement %r in save", achievement_id)

    player.hp = max(0, min(values.get("hp", player.hp), player.max_hp))
    player.mp = max(0.0, min(values.get("mp", player.mp), player.max_mp))

    game.run_stats.merge(record.stats)

    if record.loadout is not None:
        known = [s for s in record.loadout if game.skill_master.get_skill(s) is not None]
        game.loadout = list(dict.fromkeys(known))[:MAX_EQUIPPED_SKILLS]
