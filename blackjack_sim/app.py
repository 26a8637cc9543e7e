"""Application bootstrap for the blackjack simulator."""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .core.errors import BlackjackError
from .core.game import Game, GameOptions, load_options
from .core.strategy import BasicStrategy, ConsoleStrategy

LOGGER = logging.getLogger(__name__)

USAGE = "usage: blackjack-sim [-v] [--auto | --console] [options.json]"


def run(argv: Optional[list[str]] = None) -> int:
    """Run the simulator; returns a process exit code."""

    args = list(sys.argv[1:] if argv is None else argv)
    flags = {arg for arg in args if arg.startswith("-")}
    paths = [arg for arg in args if not arg.startswith("-")]
    unknown = flags - {"-v", "--auto", "--console"}
    if unknown or len(paths) > 1:
        print(USAGE, file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if "-v" in flags else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        options = load_options(Path(paths[0])) if paths else GameOptions()
    except BlackjackError as exc:
        LOGGER.error("%s", exc)
        return 1

    if "--auto" in flags:
        return _play(options, BasicStrategy())
    if "--console" not in flags:
        try:
            from .ui.qt_app import launch_qt
        except Exception as exc:  # pragma: no cover - Qt not available during tests
            LOGGER.warning("Falling back to the console due to PyQt6 load failure")
            LOGGER.debug("PyQt6 import error: %s", exc)
        else:
            return launch_qt(options, sys.argv[:1])
    return _play(options, ConsoleStrategy())


def _play(options: GameOptions, strategy) -> int:
    game = Game(options)
    try:
        bankroll = game.play(strategy)
    except BlackjackError as exc:
        LOGGER.error("Game aborted: %s", exc)
        return 1
    print(f"Final bankroll after {game.stats.rounds} hands: {bankroll:+d}")
    return 0


def main() -> None:
    raise SystemExit(run())


__all__ = ["run", "main"]
