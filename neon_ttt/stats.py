from PySide6.QtCore import QSettings

from . import config
from .game_logic import OutcomeKind

GAMES_PLAYED = "gamesPlayed"
WIN_KEYS = ("X", "O", "draws")
MODE_KEYS = ("pvp", "pvc")


class StatsStore:
    """
    cumulative win/draw/mode counters kept in QSettings.

    layout: gamesPlayed, wins/X, wins/O, wins/draws, gameMode/pvp, gameMode/pvc
    """
    def __init__(self, path=None):
        path = path if path is not None else config.STATS_FILE
        if path:
            self.settings = QSettings(str(path), QSettings.IniFormat)
        else:
            self.settings = QSettings(config.ORG_NAME, config.APP_NAME)

    def _get(self, key):
        # hand-edited or corrupt entries count as zero
        try:
            return int(self.settings.value(key, 0) or 0)
        except (TypeError, ValueError):
            return 0

    def _bump(self, key):
        self.settings.setValue(key, self._get(key) + 1)

    def record(self, outcome, mode):
        """
        count one finished game; ongoing outcomes are ignored
        """
        if not outcome.is_terminal:
            return
        self._bump(GAMES_PLAYED)
        self._bump(f"gameMode/{mode.value}")
        if outcome.kind is OutcomeKind.DRAW:
            self._bump("wins/draws")
        else:
            self._bump(f"wins/{outcome.mark.value}")
        self.settings.sync()

    def snapshot(self):
        return {
            GAMES_PLAYED: self._get(GAMES_PLAYED),
            "wins": {k: self._get(f"wins/{k}") for k in WIN_KEYS},
            "gameMode": {k: self._get(f"gameMode/{k}") for k in MODE_KEYS},
        }

    def clear(self):
        self.settings.clear()
        self.settings.sync()
