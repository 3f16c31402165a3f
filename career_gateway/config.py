"""
Runtime configuration.

Everything is read from the environment (and an optional .env file) once,
into a Settings value that gets passed to the app and orchestrator. Nothing
downstream reads os.environ.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .router.fallback import MAX_RETRIES
from .serving.models import ModelRegistry


@dataclass(frozen=True)
class Settings:
    api_key: str | None
    model_candidates: tuple[str, ...]
    api_base: str
    api_versions: tuple[str, ...]
    max_retries: int = MAX_RETRIES
    timeout_s: float = 60.0
    static_dir: str = "public"
    index_page: str = "career-step3.html"
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


def parse_model_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated model list, dropping blank entries."""
    if not value:
        return ()
    return tuple(m.strip() for m in value.split(",") if m.strip())


def load_settings(env: dict | None = None) -> Settings:
    if env is None:
        load_dotenv()
        env = os.environ

    registry = ModelRegistry(env.get("CONFIG_PATH", "configs/models.yaml"))
    models = parse_model_list(env.get("GEMINI_MODELS")) or registry.models

    return Settings(
        api_key=env.get("GEMINI_API_KEY") or None,
        model_candidates=models,
        api_base=env.get("GEMINI_API_BASE", registry.api.base_url),
        api_versions=registry.api.versions,
        max_retries=int(env.get("MAX_RETRIES", MAX_RETRIES)),
        timeout_s=float(env.get("GEMINI_TIMEOUT", "60")),
        static_dir=env.get("STATIC_DIR", "public"),
        index_page=env.get("INDEX_PAGE", "career-step3.html"),
        cors_origins=tuple(o.strip() for o in env.get("CORS_ORIGINS", "*").split(",") if o.strip()),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        host=env.get("HOST", "0.0.0.0"),
        port=int(env.get("PORT", "3000")),
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    # httpx logs every request URL at INFO, and the Gemini key is a query param
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
