from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Load .env into os.environ before Settings reads env vars
load_dotenv(_PROJECT_ROOT / ".env", override=True)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TRAVEL_QUEST_", extra="ignore")

    # Paths
    data_dir: Path = Path.home() / ".local" / "share" / "travel-quest"
    trips_filename: str = "trips.json"
    user_filename: str = "user.json"

    # Discovery
    discovery_count: int = 20
    discovery_seed: int | None = None

    log_level: str = "WARNING"

    @property
    def trips_path(self) -> Path:
        return self.data_dir / self.trips_filename

    @property
    def user_path(self) -> Path:
        return self.data_dir / self.user_filename


settings = Settings()
