from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Conference Ticketing'
    VERSION: str = '0.1.0'
    DEBUG: bool = False
    LOG_TO_FILE: bool = False

    # Ledger snapshot (JSON document, replaced atomically on every save)
    LEDGER_SNAPSHOT_PATH: Path = Path('data/bookings.json')

    # CSV export target when the caller does not pass a path
    EXPORT_CSV_PATH: Path = Path('bookings.csv')

    # Used when no snapshot exists yet
    DEFAULT_CONFERENCE_NAME: str = 'Python Conference'
    DEFAULT_TOTAL_TICKETS: int = 100

    # Delay before the booking confirmation goes out (0 = send inline)
    CONFIRMATION_DELAY_SECONDS: float = 2.0

    @field_validator('DEFAULT_TOTAL_TICKETS')
    @classmethod
    def check_total_tickets(cls, v: int) -> int:
        if v <= 0:
            raise ValueError('DEFAULT_TOTAL_TICKETS must be positive')
        return v

    @field_validator('CONFIRMATION_DELAY_SECONDS')
    @classmethod
    def check_confirmation_delay(cls, v: float) -> float:
        return max(v, 0.0)


settings = Settings()  # type: ignore
