# neon_ttt/config.py
import os
from pathlib import Path

_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"


def _read_env_file() -> dict[str, str]:
    vals: dict[str, str] = {}
    if not _ENV_PATH.exists():
        return vals
    for line in _ENV_PATH.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, v = line.split("=", 1)
        vals[k.strip()] = v.strip().strip('"').strip("'")
    return vals


_ENV_FILE_VALUES = _read_env_file()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    if v is not None and str(v).strip() != "":
        return str(v)
    return _ENV_FILE_VALUES.get(name, default)


def _env_int(name: str, default: int) -> int:
    raw = _env(name, str(default)).strip()
    try:
        return max(0, int(raw))
    except ValueError:
        raise RuntimeError(f"{name} must be a non-negative integer, got {raw!r}") from None


# ================== TIMING ==================
# "thinking" pause before the computer plays, and pause before the result dialog
COMPUTER_DELAY_MS = _env_int("TTT_COMPUTER_DELAY_MS", 500)
RESULT_DELAY_MS = _env_int("TTT_RESULT_DELAY_MS", 1000)

# ================== LOGGING ==================
LOG_LEVEL = (_env("TTT_LOG_LEVEL", "INFO") or "INFO").upper()
LOG_FILE = _env("TTT_LOG_FILE", "").strip()   # empty: console only
LOG_MAX_MB = _env_int("TTT_LOG_MAX_MB", 5)
LOG_BACKUP_COUNT = _env_int("TTT_LOG_BACKUP_COUNT", 3)

# ================== STATS ==================
# empty: QSettings native location for ORG_NAME/APP_NAME
STATS_FILE = _env("TTT_STATS_FILE", "").strip()
ORG_NAME = "NeonTTT"
APP_NAME = "Neon Tic-Tac-Toe"
