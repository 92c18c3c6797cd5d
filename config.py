"""
Configuration Manager for Table Sheet Sync
Handles all environment variables and settings
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from core.errors import ConfigError

# Get script directory
SCRIPT_DIR = Path(__file__).parent.absolute()

# Load .env file
env_path = SCRIPT_DIR / '.env'
if env_path.exists():
    load_dotenv(env_path)

STRATEGY_CLEAR = "clear"
STRATEGY_SWAP = "swap"
STRATEGIES = (STRATEGY_CLEAR, STRATEGY_SWAP)
NO_DATA_PREFIX = "No new data - "
STAGING_SUFFIX = "_tmp"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def staging_name_for(target: str) -> str:
    return f"{target}{STAGING_SUFFIX}"


class Config:
    """Environment-backed defaults"""

    # Source table (PostgREST / Supabase)
    SOURCE_URL = os.getenv('SOURCE_URL', '').strip()
    SOURCE_API_KEY = os.getenv('SOURCE_API_KEY', '').strip()
    SOURCE_RESOURCE_PATH = os.getenv('SOURCE_RESOURCE_PATH', 'rest/v1').strip()
    SOURCE_TABLE = os.getenv('SOURCE_TABLE', '').strip()
    FETCH_TIMEOUT = int(os.getenv('FETCH_TIMEOUT', '60'))

    # Google Sheets
    GOOGLE_SHEET_URL = os.getenv('GOOGLE_SHEET_URL', '').strip()
    GOOGLE_CREDENTIALS_JSON = os.getenv('GOOGLE_CREDENTIALS_JSON', '').strip()
    GOOGLE_APPLICATION_CREDENTIALS = os.getenv('GOOGLE_APPLICATION_CREDENTIALS', 'credentials.json').strip()
    TARGET_SHEET = os.getenv('TARGET_SHEET', 'Data').strip()

    # Sync Settings
    SYNC_STRATEGY = os.getenv('SYNC_STRATEGY', STRATEGY_SWAP).strip().lower()
    CLEAR_BATCH_SIZE = int(os.getenv('CLEAR_BATCH_SIZE', '1000'))
    WRITE_BATCH_SIZE = int(os.getenv('WRITE_BATCH_SIZE', '1000'))
    SHEET_WRITE_DELAY = float(os.getenv('SHEET_WRITE_DELAY', '0'))
    RESIZE_SHEET = _env_bool('RESIZE_SHEET', 'true')
    FREEZE_HEADER = _env_bool('FREEZE_HEADER', 'true')

    SCRIPT_DIR = SCRIPT_DIR

    @classmethod
    def get_credentials_path(cls) -> Path:
        """Resolve the service account file relative to the project directory"""
        p = Path(cls.GOOGLE_APPLICATION_CREDENTIALS or 'credentials.json')
        if p.is_absolute():
            return p
        return cls.SCRIPT_DIR / p


@dataclass
class SyncConfig:
    """
    PURPOSE: Explicit settings for one refresh run. Built once by the caller
             and passed into the orchestrator; nothing reads globals after that.
    """

    source_url: str = ""
    api_key: str = ""
    table_name: str = ""
    sheet_name: str = "Data"
    resource_path: str = "rest/v1"
    spreadsheet: str = ""
    strategy: str = STRATEGY_SWAP
    clear_batch_size: int = 1000
    write_batch_size: int = 1000
    write_delay: float = 0.0
    fetch_timeout: int = 60
    resize_sheet: bool = True
    freeze_header: bool = True
    credentials_json: str = ""
    credentials_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "SyncConfig":
        """Build a config from the environment-backed ``Config`` defaults."""
        return cls(
            source_url=Config.SOURCE_URL,
            api_key=Config.SOURCE_API_KEY,
            table_name=Config.SOURCE_TABLE,
            sheet_name=Config.TARGET_SHEET,
            resource_path=Config.SOURCE_RESOURCE_PATH,
            spreadsheet=Config.GOOGLE_SHEET_URL,
            strategy=Config.SYNC_STRATEGY,
            clear_batch_size=Config.CLEAR_BATCH_SIZE,
            write_batch_size=Config.WRITE_BATCH_SIZE,
            write_delay=Config.SHEET_WRITE_DELAY,
            fetch_timeout=Config.FETCH_TIMEOUT,
            resize_sheet=Config.RESIZE_SHEET,
            freeze_header=Config.FREEZE_HEADER,
            credentials_json=Config.GOOGLE_CREDENTIALS_JSON,
            credentials_path=Config.get_credentials_path(),
        )

    @property
    def staging_sheet_name(self) -> str:
        return staging_name_for(self.sheet_name)

    def validate(self, require_google: bool = True) -> List[str]:
        """Return a list of human-readable problems (empty when valid)."""
        errors = []
        if not self.source_url:
            errors.append("SOURCE_URL is required")
        if not self.api_key:
            errors.append("SOURCE_API_KEY is required")
        if not self.table_name:
            errors.append("SOURCE_TABLE is required")
        if not self.sheet_name:
            errors.append("TARGET_SHEET is required")
        if self.strategy not in STRATEGIES:
            errors.append(f"SYNC_STRATEGY must be one of {', '.join(STRATEGIES)} (got '{self.strategy}')")
        if self.clear_batch_size < 1:
            errors.append("CLEAR_BATCH_SIZE must be at least 1")
        if self.write_batch_size < 1:
            errors.append("WRITE_BATCH_SIZE must be at least 1")

        if require_google:
            if not self.spreadsheet:
                errors.append("GOOGLE_SHEET_URL is required")
            has_file = bool(self.credentials_path and Path(self.credentials_path).exists())
            if not self.credentials_json and not has_file:
                errors.append("Google credentials required (either JSON or file)")
        return errors

    def summary(self) -> dict:
        """Masked view of the settings for the run header."""
        masked = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in ("api_key", "credentials_json"):
                value = (value[:4] + "***") if value else "(missing)"
            masked[f.name] = value
        return masked


def validate_config(config: SyncConfig, require_google: bool = True) -> bool:
    """
    PURPOSE: Print the configuration check and fail loudly on problems.

    RAISES:
      ConfigError: listing every problem found
    """
    errors = config.validate(require_google=require_google)

    print("=" * 70)
    print("CONFIGURATION VALIDATION")
    print("=" * 70)
    print(f"📍 Script Directory: {SCRIPT_DIR}")
    if config.credentials_path:
        print(f"📍 Credentials Path: {config.credentials_path}")

    if errors:
        print("❌ VALIDATION FAILED")
        print("=" * 70)
        for error in errors:
            print(f"❌ {error}")
        print("=" * 70)
        raise ConfigError("; ".join(errors))

    print(f"✅ Source table: {config.table_name}")
    print(f"✅ Target sheet: {config.sheet_name} (strategy: {config.strategy})")
    print("✅ VALIDATION PASSED")
    print("=" * 70)
    return True

