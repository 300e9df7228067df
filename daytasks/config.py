from dataclasses import dataclass
import os
from pathlib import Path

from daytasks.constants import (
    DEFAULT_NOTIFICATION_DWELL,
    DEFAULT_WINDOW_AFTER,
    DEFAULT_WINDOW_BEFORE,
    MAX_WINDOW_SIDE,
    STORAGE_BACKENDS,
    STORAGE_SQLITE,
)
from daytasks.domain.common.errors import ConfigError

try:
    from dotenv import load_dotenv
    load_dotenv()
except Exception:
    pass


@dataclass(frozen=True)
class Settings:
    bot_token: str
    owner_telegram_id: int
    timezone: str
    storage_backend: str
    db_path: Path
    seed_on_empty: bool = True
    notification_dwell: float = DEFAULT_NOTIFICATION_DWELL
    system_alerts: bool = True
    window_before: int = DEFAULT_WINDOW_BEFORE
    window_after: int = DEFAULT_WINDOW_AFTER


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def load_settings(require_bot: bool = True) -> Settings:
    bot_token = os.getenv("BOT_TOKEN", "").strip()
    owner_id = _env_int("OWNER_TELEGRAM_ID", 0)
    tz = os.getenv("TZ", "Europe/Helsinki").strip() or "Europe/Helsinki"
    backend = os.getenv("DAYTASKS_STORAGE", STORAGE_SQLITE).strip().lower() or STORAGE_SQLITE
    db_raw = os.getenv("DB_PATH", "data/daytasks.db").strip() or "data/daytasks.db"

    if require_bot:
        if not bot_token:
            raise ConfigError("BOT_TOKEN missing in .env")
        if owner_id <= 0:
            raise ConfigError("OWNER_TELEGRAM_ID missing/invalid in .env")
    if backend not in STORAGE_BACKENDS:
        raise ConfigError(f"DAYTASKS_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}")

    dwell = _env_float("DAYTASKS_NOTIFICATION_DWELL", DEFAULT_NOTIFICATION_DWELL)
    if dwell <= 0:
        raise ConfigError("DAYTASKS_NOTIFICATION_DWELL must be > 0")

    before = _env_int("DAYTASKS_WINDOW_BEFORE", DEFAULT_WINDOW_BEFORE)
    after = _env_int("DAYTASKS_WINDOW_AFTER", DEFAULT_WINDOW_AFTER)
    if before < 0 or after < 0:
        raise ConfigError("DAYTASKS_WINDOW_BEFORE/AFTER must be >= 0")
    if before > MAX_WINDOW_SIDE or after > MAX_WINDOW_SIDE:
        # day strip plus task rows must stay under 100 buttons
        raise ConfigError(f"DAYTASKS_WINDOW_BEFORE/AFTER must be <= {MAX_WINDOW_SIDE}")

    # db_path stays relative here; the entry point anchors it
    return Settings(
        bot_token=bot_token,
        owner_telegram_id=owner_id,
        timezone=tz,
        storage_backend=backend,
        db_path=Path(db_raw),
        seed_on_empty=_env_bool("DAYTASKS_SEED_ON_EMPTY", True),
        notification_dwell=dwell,
        system_alerts=_env_bool("DAYTASKS_SYSTEM_ALERTS", True),
        window_before=before,
        window_after=after,
    )
