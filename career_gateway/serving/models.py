"""
Model candidate configuration.

Loads the ordered model list and API version namespaces from YAML, falling
back to the built-in ordering when no config file is present.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from .gemini import DEFAULT_API_BASE, DEFAULT_API_VERSIONS

logger = logging.getLogger(__name__)

DEFAULT_MODEL_CANDIDATES = (
    "gemini-2.0-flash-exp",
    "gemini-2.0-flash",
    "gemini-1.5-pro",
    "gemini-1.5-flash",
)


@dataclass
class ApiConfig:
    base_url: str
    versions: tuple[str, ...]


class ModelRegistry:
    """Loads model candidates + API endpoint config from models.yaml."""

    def __init__(self, config_path: str = "configs/models.yaml"):
        raw = {}
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            logger.info("No model config at %s, using built-in model list", config_path)

        models = [str(m).strip() for m in raw.get("models") or [] if str(m).strip()]
        self.models: tuple[str, ...] = tuple(models) or DEFAULT_MODEL_CANDIDATES

        api = raw.get("api") or {}
        self.api = ApiConfig(
            base_url=api.get("base_url", DEFAULT_API_BASE),
            versions=tuple(api.get("versions") or DEFAULT_API_VERSIONS),
        )

    @property
    def available_models(self) -> list[str]:
        return list(self.models)
