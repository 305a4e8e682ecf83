"""
Configuration management for the Leanpub client
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .leanpub_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT

DEFAULT_API_KEY_ENV = "LEANPUB_API_KEY"
DEFAULT_CONFIG_PATH = "config/config.yaml"


class Config:
    """Configuration loaded from explicit arguments, env files, environment and optional YAML"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        config_path: Optional[str] = None,
    ) -> None:
        self.logger = logging.getLogger(__name__)
        self.config_path = config_path or os.getenv("LEANPUB_CONFIG", DEFAULT_CONFIG_PATH)
        self._overrides = {"api_key": api_key, "base_url": base_url, "timeout": timeout}
        self._load_config()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from env files, environment variables and YAML"""

        # Existing environment variables take precedence over file values
        if os.path.exists("secrets.env"):
            load_dotenv("secrets.env")
            self.logger.debug("Loaded secrets from secrets.env")

        if os.path.exists(".env"):
            load_dotenv(".env")
            self.logger.debug("Loaded additional configuration from .env")

        file_config = self._load_yaml()

        self.API_KEY_ENV = file_config.get("api_key_env") or DEFAULT_API_KEY_ENV

        api_key = self._overrides["api_key"]
        if api_key is None:
            api_key = os.getenv(self.API_KEY_ENV, "")
        self.API_KEY = api_key

        base_url = self._overrides["base_url"] or os.getenv(
            "LEANPUB_BASE_URL", file_config.get("base_url", DEFAULT_BASE_URL)
        )
        self.BASE_URL = str(base_url).rstrip("/")

        timeout = self._overrides["timeout"]
        if timeout is None:
            timeout = os.getenv("LEANPUB_TIMEOUT", file_config.get("timeout", DEFAULT_TIMEOUT))
        self._raw_timeout = timeout

        self.LOG_LEVEL = str(os.getenv("LOG_LEVEL", file_config.get("log_level", "ERROR"))).upper()
        self.LOG_FILE = os.getenv("LOG_FILE", file_config.get("log_file") or "") or None

    def _load_yaml(self) -> Dict[str, Any]:
        if not os.path.exists(self.config_path):
            return {}
        with open(self.config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {self.config_path} must contain a mapping")
        self.logger.debug(f"Loaded configuration from {self.config_path}")
        return data

    def _validate_config(self) -> None:
        """Validate that required configuration is present"""
        errors = []

        if not self.API_KEY or not self.API_KEY.strip():
            errors.append(
                f"{self.API_KEY_ENV} env var must be set with your Leanpub API key"
            )

        if not self.BASE_URL.startswith(("http://", "https://")):
            errors.append(f"Invalid base URL: {self.BASE_URL}")

        try:
            self.TIMEOUT = float(self._raw_timeout)
            if self.TIMEOUT <= 0:
                errors.append(f"Timeout must be positive, got {self._raw_timeout}")
        except (TypeError, ValueError):
            errors.append(f"Invalid timeout: {self._raw_timeout!r}")

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(
                f"- {error}" for error in errors
            )
            raise ValueError(error_msg)

        self.logger.debug("Configuration validation passed")

    def get_client_config(self) -> dict:
        """Get client configuration as dictionary"""
        return {"base_url": self.BASE_URL, "api_key": self.API_KEY, "timeout": self.TIMEOUT}

    def __str__(self) -> str:
        """String representation of config (without sensitive data)"""
        return f"""Configuration:
  Base URL: {self.BASE_URL}
  API Key ({self.API_KEY_ENV}): {'[SET]' if self.API_KEY else '[NOT SET]'}
  Timeout: {self.TIMEOUT} seconds
  Log Level: {self.LOG_LEVEL}
  Log File: {self.LOG_FILE or '[NONE]'}"""
