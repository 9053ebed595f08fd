"""Configuration management for Flashdeck."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os
import yaml

from .exceptions import ConfigError

# Backend enforces 1..100 cards per generation request
MIN_CARDS = 1
MAX_CARDS = 100
DEFAULT_MAX_CARDS = 20

DEFAULT_API_URL = "http://localhost:8080"
API_URL_ENV = "FLASHDECK_API_URL"
API_TOKEN_ENV = "FLASHDECK_API_TOKEN"


@dataclass
class ApiConfig:
    """Connection settings for the flashcard backend."""
    base_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    timeout: float = 60.0

    def get_token(self) -> Optional[str]:
        """Token from config, falling back to the environment."""
        return self.token or os.environ.get(API_TOKEN_ENV)


@dataclass
class GenerationConfig:
    """Settings for AI card generation."""
    max_cards: int = DEFAULT_MAX_CARDS


@dataclass
class RecordingConfig:
    """Settings for live microphone capture."""
    timeout: float = 10.0               # Wait for speech to start
    phrase_time_limit: float = 60.0     # Stop recording after this long
    device_index: Optional[int] = None


@dataclass
class StorageConfig:
    """Where the client keeps its provisional preview state."""
    session_dir: str = str(Path.home() / ".cache" / "flashdeck")


@dataclass
class Config:
    """Main configuration for Flashdeck."""
    api: ApiConfig = field(default_factory=ApiConfig)
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    recording: RecordingConfig = field(default_factory=RecordingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    # Logging
    log_level: str = "INFO"
    verbose: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        config = cls()

        if "api" in data:
            api_data = data["api"] or {}
            config.api = ApiConfig(
                base_url=api_data.get("base_url", DEFAULT_API_URL),
                token=api_data.get("token"),
                timeout=float(api_data.get("timeout", 60.0)),
            )

        if "generation" in data:
            gen_data = data["generation"] or {}
            config.generation = GenerationConfig(
                max_cards=int(gen_data.get("max_cards", DEFAULT_MAX_CARDS)),
            )

        if "recording" in data:
            rec_data = data["recording"] or {}
            config.recording = RecordingConfig(
                timeout=float(rec_data.get("timeout", 10.0)),
                phrase_time_limit=float(rec_data.get("phrase_time_limit", 60.0)),
                device_index=rec_data.get("device_index"),
            )

        if "storage" in data:
            storage_data = data["storage"] or {}
            config.storage = StorageConfig(
                session_dir=os.path.expanduser(
                    storage_data.get("session_dir", StorageConfig().session_dir)
                ),
            )

        config.log_level = data.get("log_level", "INFO")
        config.verbose = data.get("verbose", False)

        config.apply_env()
        config.validate()
        return config

    def apply_env(self) -> None:
        """Environment overrides for values usually injected by a deploy."""
        env_url = os.environ.get(API_URL_ENV)
        if env_url:
            self.api.base_url = env_url

    def validate(self) -> None:
        """Raise ConfigError for out-of-range values."""
        if not MIN_CARDS <= self.generation.max_cards <= MAX_CARDS:
            raise ConfigError(
                f"generation.max_cards must be between {MIN_CARDS} and {MAX_CARDS}",
                config_key="generation.max_cards",
            )
        if self.api.timeout <= 0:
            raise ConfigError("api.timeout must be positive", config_key="api.timeout")
        if self.recording.timeout <= 0 or self.recording.phrase_time_limit <= 0:
            raise ConfigError(
                "recording timeouts must be positive", config_key="recording"
            )

    def to_dict(self) -> dict:
        """Convert config to dictionary (the token is never written out)."""
        return {
            "api": {
                "base_url": self.api.base_url,
                "timeout": self.api.timeout,
            },
            "generation": {
                "max_cards": self.generation.max_cards,
            },
            "recording": {
                "timeout": self.recording.timeout,
                "phrase_time_limit": self.recording.phrase_time_limit,
                "device_index": self.recording.device_index,
            },
            "storage": {
                "session_dir": self.storage.session_dir,
            },
            "log_level": self.log_level,
        }


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from YAML file or use defaults.

    Searches for config in:
    1. Provided path
    2. ./flashdeck.yaml
    3. ~/.config/flashdeck/config.yaml
    4. Falls back to defaults
    """
    search_paths = []

    if config_path:
        search_paths.append(Path(config_path))

    search_paths.extend([
        Path("./flashdeck.yaml"),
        Path.home() / ".config" / "flashdeck" / "config.yaml",
    ])

    for path in search_paths:
        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in config file: {e}")
            except OSError as e:
                raise ConfigError(f"Error loading config from {path}: {e}")
            try:
                return Config.from_dict(data or {})
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid value in {path}: {e}")

    config = Config()
    config.apply_env()
    return config


def save_config(config: Config, path: str) -> None:
    """Save configuration to YAML file."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False)
