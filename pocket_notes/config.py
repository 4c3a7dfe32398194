"""Configuration management for Pocket Notes."""

import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent
load_dotenv(_project_root / ".env")

DEFAULT_HOME = Path.home() / ".pocket-notes"
DEFAULT_STORAGE_KEY = "pocket-notes:v1"


@dataclass
class Config:
    """Application configuration."""

    # Storage
    data_dir: Path
    storage_key: str

    # Editor / display
    suggestion_limit: int = 10
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        home = os.getenv("POCKET_NOTES_HOME")

        try:
            suggestion_limit = int(os.getenv("POCKET_NOTES_SUGGESTIONS", "10"))
        except ValueError:
            suggestion_limit = 10

        return cls(
            data_dir=Path(home).expanduser() if home else DEFAULT_HOME,
            storage_key=os.getenv("POCKET_NOTES_STORAGE_KEY", DEFAULT_STORAGE_KEY),
            suggestion_limit=max(suggestion_limit, 0),
            log_level=os.getenv("POCKET_NOTES_LOG_LEVEL", "WARNING").upper(),
        )


# Global config instance
config = Config.from_env()
