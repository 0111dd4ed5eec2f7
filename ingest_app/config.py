"""Configuration helpers for the wardrobe ingestion app."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

from logic.filtering import DEFAULT_CONFIDENCE_THRESHOLD
from tools.inference_provider import DEFAULT_GEMINI_MODEL
from tools.wardrobe_tools import WARDROBE_COLLECTION


def _as_float(key: str, raw: Optional[str], default: float) -> float:
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Configuration value {key}={raw!r} is not a number") from exc


def _as_bool(raw: Optional[str], default: bool = False) -> bool:
    if raw is None or str(raw).strip() == "":
        return default
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class IngestConfig:
    """Configuration values for one ingestion app instance."""

    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    inference_timeout: Optional[float] = 60.0
    commit_timeout: Optional[float] = 30.0
    image_fetch_timeout: float = 10.0
    wardrobe_db_path: str = "data/wardrobe.db"
    collection: str = WARDROBE_COLLECTION
    exemplar_dir: Optional[str] = "assets"
    allow_local_images: bool = False
    environment: str | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError("confidence_threshold must be within [0, 1]")
        for name in ("inference_timeout", "commit_timeout"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive when set")

    @classmethod
    def from_env(cls) -> "IngestConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default; environment variables take precedence over file values so
        secrets can be injected by the runtime.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("INGEST_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        return cls(
            api_key=get_value("google_api_key"),
            model=str(get_value("model", DEFAULT_GEMINI_MODEL) or DEFAULT_GEMINI_MODEL),
            confidence_threshold=_as_float(
                "confidence_threshold",
                get_value("confidence_threshold"),
                DEFAULT_CONFIDENCE_THRESHOLD,
            ),
            inference_timeout=_as_float("inference_timeout", get_value("inference_timeout"), 60.0),
            commit_timeout=_as_float("commit_timeout", get_value("commit_timeout"), 30.0),
            image_fetch_timeout=_as_float(
                "image_fetch_timeout", get_value("image_fetch_timeout"), 10.0
            ),
            wardrobe_db_path=str(get_value("wardrobe_db_path", "data/wardrobe.db")),
            collection=str(get_value("wardrobe_collection", WARDROBE_COLLECTION)),
            exemplar_dir=get_value("exemplar_dir", "assets"),
            allow_local_images=_as_bool(get_value("allow_local_images")),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal ``key: value`` YAML file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
