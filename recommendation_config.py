from pathlib import Path
import structlog
import os
import json
from typing import Dict, Any, Optional
from dotenv import load_dotenv

logger = structlog.get_logger()
load_dotenv()

REDIS_HOST = os.getenv("REDIS_DB_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_DB_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_DB_PASSWORD")
LOG_LEVEL = os.getenv("RECOMMENDER_LOG_LEVEL", "INFO")

ROOT_DIR = Path(__file__).resolve().parent
CONFIG_PATH = ROOT_DIR / "config" / "recommendation_config.json"

DEFAULT_CONFIG = {
    "data_dir": str(ROOT_DIR / "data"),
    "top_n": 5,
    "min_common_items": 2,
    "profile_store": "file",
    "profile_path": None,
    "redis_host": REDIS_HOST,
    "redis_port": REDIS_PORT,
    "redis_password": REDIS_PASSWORD,
    "redis_key": "recommendationAppUserState",
    "log_level": LOG_LEVEL
}

class RecommendationConfig:
    """Manages configuration for the recommendation demo."""

    def __init__(self, config_path: Path = CONFIG_PATH, overrides: Optional[Dict[str, Any]] = None) -> None:
        self.config_path = Path(config_path)
        self.config: Dict[str, Any] = {}
        self._load_or_initialize()
        if overrides:
            self.config.update(overrides)
            self._apply_config()

    def _load_or_initialize(self) -> None:
        """Load config from file or initialize with defaults if file doesn't exist."""
        try:
            if self.config_path.exists():
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("configuration root must be a JSON object")
                # Keys missing from older files fall back to defaults
                self.config = {**DEFAULT_CONFIG, **loaded}
                logger.info("Configuration loaded", config_path=str(self.config_path))
            else:
                logger.warning("Config file not found. Initializing with defaults.",
                               config_path=str(self.config_path))
                self.config = DEFAULT_CONFIG.copy()
                self.save_config(self.config)

            self._apply_config()

        except (OSError, ValueError) as e:
            logger.error(f"Failed to load or initialize config: {e}")
            self.config = DEFAULT_CONFIG.copy()
            self._apply_config()

    def _apply_config(self) -> None:
        """Assign config values to instance attributes."""
        self.data_dir = Path(self.config["data_dir"])
        self.top_n = int(self.config["top_n"])
        self.min_common_items = int(self.config["min_common_items"])
        self.profile_store = self.config["profile_store"]
        # Without an explicit path the profile lives in the data directory
        profile_path = self.config.get("profile_path")
        self.profile_path = Path(profile_path) if profile_path else self.data_dir / "user_profile.json"
        self.redis_host = self.config["redis_host"]
        self.redis_port = int(self.config["redis_port"])
        self.redis_password = self.config["redis_password"]
        self.redis_key = self.config["redis_key"]
        self.log_level = self.config["log_level"]

        if self.top_n <= 0:
            logger.warning(f"Invalid top_n value: {self.top_n}, using default of 5")
            self.top_n = 5
            self.config["top_n"] = 5

    def get(self, key: str, default: Any = None) -> Any:
        """Return a single configuration value."""
        return self.config.get(key, default)

    def save_config(self, config_dict: Dict[str, Any]) -> None:
        """Save the given configuration dictionary to the config file."""
        try:
            os.makedirs(self.config_path.parent, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=4)
            logger.info("Configuration saved", config_path=str(self.config_path))
        except OSError as e:
            logger.error(f"Error saving configuration: {e}")

    def get_config_dict(self) -> Dict[str, Any]:
        """Return the current configuration as a dictionary."""
        return self.config.copy()
