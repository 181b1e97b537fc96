"""Configuration for the FRD Wizard service.

Values are resolved per key from, in order of precedence:

1. environment variables (e.g. `GEMINI_API_KEY`);
2. one-value text files under `config/` (e.g. `config/gemini.api_key`);
3. `frd_config.json` at the working directory (dotted paths, e.g. `gemini.model`);
4. development defaults.

The merged values are validated by the pydantic models below; invalid
configuration is logged and raised so the app refuses to start.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from frd_wizard.db.base import DEFAULT_DSN


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("frd_config.json")
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash-exp"
logger = logging.getLogger(__name__)


def _require_http(value: str, name: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"{name} must be an http(s) URL")
    return value.rstrip("/")


class DatabaseConfig(BaseModel):
    dsn: str

    @field_validator("dsn")
    @classmethod
    def dsn_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class GenerationParams(BaseModel):
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    top_k: int = Field(default=40, gt=0)
    top_p: float = Field(default=0.95, gt=0.0, le=1.0)
    max_output_tokens: int = Field(default=8192, gt=0)


class GeminiConfig(BaseModel):
    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    base_url: str = DEFAULT_GEMINI_BASE_URL
    timeout_seconds: float = Field(default=120.0, gt=0)
    params: GenerationParams = Field(default_factory=GenerationParams)

    @field_validator("base_url")
    @classmethod
    def base_url_is_http(cls, v: str) -> str:
        return _require_http(v, "gemini.base_url")


class CorsConfig(BaseModel):
    origins: List[str] = Field(default_factory=lambda: ["*"])


class AppConfig(BaseModel):
    database: DatabaseConfig
    gemini: GeminiConfig
    cors: CorsConfig = Field(default_factory=CorsConfig)
    # When set, generation goes over HTTP to this deployment instead of in-process
    generation_url: Optional[str] = None

    @field_validator("generation_url")
    @classmethod
    def generation_url_is_http(cls, v: Optional[str]) -> Optional[str]:
        return _require_http(v, "generation_url") if v is not None else None


class _Sources:
    """Layered lookup over environment, `config/` files and the JSON base."""

    def __init__(self, config_dir: Path = CONFIG_DIR, root_config: Path = ROOT_CONFIG) -> None:
        self.config_dir = config_dir
        self.base = self._load_json(root_config)

    @staticmethod
    def _load_json(path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error("config_json_unreadable path=%s error=%s", path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _file(self, name: str) -> Optional[str]:
        path = self.config_dir / name
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8").strip() or None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("config_override_unreadable path=%s error=%s", path, e)
            return None

    def _json(self, dotted: str) -> Optional[str]:
        node: Any = self.base
        for part in dotted.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return None if node is None else str(node)

    def get(self, env_key: str, key: str, default: Optional[str] = None) -> Optional[str]:
        """Resolve `key` (also the `config/` file name and JSON path)."""
        return os.environ.get(env_key) or self._file(key) or self._json(key) or default


def load_config() -> AppConfig:
    """Load and validate the application configuration."""
    src = _Sources()
    dsn = os.environ.get("TEST_DATABASE_URL") or src.get("DATABASE_URL", "database.dsn", DEFAULT_DSN)
    origins = src.get("CORS_ORIGINS", "cors.origins", "*") or "*"

    try:
        params = GenerationParams(
            temperature=float(src.get("GEMINI_TEMPERATURE", "gemini.temperature", "0.7")),
            top_k=int(src.get("GEMINI_TOP_K", "gemini.top_k", "40")),
            top_p=float(src.get("GEMINI_TOP_P", "gemini.top_p", "0.95")),
            max_output_tokens=int(src.get("GEMINI_MAX_OUTPUT_TOKENS", "gemini.max_output_tokens", "8192")),
        )
        gemini = GeminiConfig(
            api_key=src.get("GEMINI_API_KEY", "gemini.api_key"),
            model=src.get("GEMINI_MODEL", "gemini.model", DEFAULT_GEMINI_MODEL),
            base_url=src.get("GEMINI_BASE_URL", "gemini.base_url", DEFAULT_GEMINI_BASE_URL),
            timeout_seconds=float(src.get("GEMINI_TIMEOUT_SECONDS", "gemini.timeout_seconds", "120")),
            params=params,
        )
        config = AppConfig(
            database=DatabaseConfig(dsn=dsn),
            gemini=gemini,
            cors=CorsConfig(origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"]),
            generation_url=src.get("FRD_GENERATION_URL", "generation_url"),
        )
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise

    logger.info(
        "config_loaded model=%s api_key_set=%s remote_generation=%s",
        config.gemini.model,
        bool(config.gemini.api_key),
        bool(config.generation_url),
    )
    return config


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "GeminiConfig",
    "GenerationParams",
    "CorsConfig",
    "DEFAULT_GEMINI_BASE_URL",
    "DEFAULT_GEMINI_MODEL",
    "load_config",
]
