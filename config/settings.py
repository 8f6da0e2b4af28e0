"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from domain.errors import ConfigurationError

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name, '').strip()
    return value or None


class Settings:
    """
    ─── POLLING CADENCE ──────────────────────────────────────────────────
    OpenDota's free tier allows 60 req/min and 2000 req/day. One check
    costs 1 request when nothing changed and 5 when a new match shows up
    (list + match + heroes + item_ids + items). 15 minutes keeps a busy
    day far below the daily cap; the governor handles the rest.
    ──────────────────────────────────────────────────────────────────────
    """

    # ── Discord ────────────────────────────────────────────────────────────
    DISCORD_TOKEN:    str = os.getenv('DISCORD_TOKEN', '')
    CHANNEL_ID:       str = os.getenv('CHANNEL_ID', '')
    DISCORD_API_BASE: str = os.getenv('DISCORD_API_BASE', 'https://discord.com/api/v10')

    # ── Tracked player ─────────────────────────────────────────────────────
    PLAYER_ID:           str = os.getenv('PLAYER_ID', '')
    TRACKED_PLAYER_NAME: str = os.getenv('TRACKED_PLAYER_NAME', 'player')

    # ── Polling ────────────────────────────────────────────────────────────
    CHECK_INTERVAL: int = _int_env('CHECK_INTERVAL', 900_000)  # ms

    # ── HTTP ───────────────────────────────────────────────────────────────
    OPENDOTA_BASE_URL: str = os.getenv('OPENDOTA_BASE_URL', 'https://api.opendota.com/api')
    STEAM_CDN_BASE:    str = os.getenv('STEAM_CDN_BASE', 'https://cdn.cloudflare.steamstatic.com')
    FETCH_TIMEOUT_MS:  int = _int_env('FETCH_TIMEOUT_MS', 10_000)
    FETCH_RETRIES:     int = _int_env('FETCH_RETRIES', 3)
    FETCH_BACKOFF_MS:  int = _int_env('FETCH_BACKOFF_MS', 1_000)
    STATUS_TIMEOUT_MS: int = _int_env('STATUS_TIMEOUT_MS', 5_000)

    # ── Rate limits ────────────────────────────────────────────────────────
    DAILY_QUOTA_WARN_THRESHOLD: int = _int_env('DAILY_QUOTA_WARN_THRESHOLD', 100)

    # ── Low priority tracking ──────────────────────────────────────────────
    # game_mode 4 is Single Draft, the only mode open while in low priority
    LOW_PRIORITY_GAME_MODE: int = _int_env('LOW_PRIORITY_GAME_MODE', 4)

    # ── Manual verification ────────────────────────────────────────────────
    TEST_MATCH_ID:         Optional[str] = _optional_env('TEST_MATCH_ID')
    FORCE_SEND_TEST_MATCH: Optional[str] = _optional_env('FORCE_SEND_TEST_MATCH')

    # ── Status endpoint ────────────────────────────────────────────────────
    HEALTH_CHECK_PORT: int = _int_env('HEALTH_CHECK_PORT', 3001)

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR:   Path = Path(__file__).resolve().parent.parent
    DATA_DIR:   Path = BASE_DIR / 'data'
    LOG_DIR:    Path = Path(os.getenv('LOG_DIR', str(DATA_DIR / 'logs')))
    STATE_FILE: Path = Path(os.getenv('STATE_FILE', str(DATA_DIR / 'bot-state.json')))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def replay_match_id(cls) -> Optional[str]:
        return cls.TEST_MATCH_ID or cls.FORCE_SEND_TEST_MATCH

    @classmethod
    def validate(cls, *, require_discord: bool = True) -> None:
        missing = []
        if not cls.PLAYER_ID:
            missing.append('PLAYER_ID')
        if require_discord:
            if not cls.DISCORD_TOKEN:
                missing.append('DISCORD_TOKEN')
            if not cls.CHANNEL_ID:
                missing.append('CHANNEL_ID')
        if missing:
            raise ConfigurationError(f"{', '.join(missing)} must be set in config/.env")
        if cls.CHECK_INTERVAL <= 0:
            raise ConfigurationError("CHECK_INTERVAL must be a positive number of milliseconds")

    @classmethod
    def create_directories(cls) -> None:
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)
        cls.STATE_FILE.parent.mkdir(parents=True, exist_ok=True)


settings = Settings()
