"""
Logging setup and error types shared by the whole game.

Every module logs through a child of the "dungeon_rpg" logger
(e.g. "dungeon_rpg.battle", "dungeon_rpg.save"). The root of that tree is
configured once, on first import:
- a daily log file under logs/ receives everything from DEBUG up
- the console only shows warnings and errors

Errors that reach the main loop go through handle_critical_error(), which
logs them and posts a short line into the battle log instead of crashing.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _configure_logger(log_dir: Path) -> logging.Logger:
    root = logging.getLogger("dungeon_rpg")
    root.setLevel(logging.DEBUG)

    # Re-imports (tests, reloads) must not stack handlers
    if root.handlers:
        return root

    log_dir.mkdir(exist_ok=True)
    log_file = log_dir / f"game_{datetime.now().strftime('%Y%m%d')}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    root.addHandler(file_handler)
    root.addHandler(console_handler)
    return root


logger = _configure_logger(LOG_DIR)


class GameError(Exception):
    """
    Base exception for game-specific errors.

    `user_message` is the short text shown in the battle log; the full
    message only goes to the log file.
    """
    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class SaveError(GameError):
    """A save store could not be read or written."""


class BattleError(GameError):
    """A battle was asked for something it cannot do, such as a missing floor."""


class ValidationError(GameError):
    """A save record (or other external data) failed validation."""


def log_error(error: Exception, context: str = "") -> None:
    """Log `error` with its traceback, tagged with where it happened."""
    logger.error(
        "Error in %s: %s: %s",
        context, type(error).__name__, error,
        exc_info=error,
    )


def handle_critical_error(
    error: Exception,
    context: str,
    game: Optional[object] = None,
    recovery_action: Optional[Callable[[], None]] = None,
) -> bool:
    """
    Last line of defence for errors inside the main loop.

    The error is always logged. A recovery action, if given, is tried
    first; otherwise the player gets a line in the battle log.

    Returns:
        True if the error was dealt with (recovered or reported), False if
        the caller should re-raise.
    """
    log_error(error, context)

    if recovery_action is not None:
        try:
            recovery_action()
            logger.info("Recovered from error in %s", context)
            return True
        except Exception as recovery_error:
            log_error(recovery_error, f"{context}_recovery")

    if game is not None and hasattr(game, "add_message"):
        user_msg = getattr(error, "user_message", None) or (
            f"Something went wrong ({context}). See the log for details."
        )
        game.add_message(user_msg)
        return True

    return False
