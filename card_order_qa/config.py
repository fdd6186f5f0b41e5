import logging
import os
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from card_order_qa.actions.locators import LocatorContract
from card_order_qa.browser.config import DEFAULT_CONFIG
from card_order_qa.exceptions import ConfigError

DEFAULT_BASE_URL = "http://localhost:9999"

ENV_BASE_URL = "CARD_ORDER_BASE_URL"
ENV_HEADLESS = "CARD_ORDER_HEADLESS"


class HarnessConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    browser_config: Dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_CONFIG))
    poll_interval_ms: int = 200
    wait_timeout_ms: int = 8000
    max_concurrent_sessions: int = 2
    report_dir: str = "./reports"
    log: Dict[str, Any] = Field(default_factory=lambda: {"level": "info"})
    locators: LocatorContract = Field(default_factory=LocatorContract)

    @model_validator(mode="after")
    def check_limits(self):
        if self.poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")
        if self.wait_timeout_ms < self.poll_interval_ms:
            raise ValueError("wait_timeout_ms must not be shorter than poll_interval_ms")
        if self.max_concurrent_sessions < 1:
            raise ValueError("max_concurrent_sessions must be at least 1")
        return self

    @property
    def log_level(self) -> int:
        return getattr(logging, str(self.log.get("level", "info")).upper(), logging.INFO)


def find_config_file(args_config: Optional[str] = None) -> Optional[str]:
    """Locate the YAML config: an explicit path wins, then the default locations."""
    if args_config:
        if os.path.isfile(args_config):
            return args_config
        raise FileNotFoundError(f"Specified config file not found: {args_config}")

    current_dir = os.getcwd()
    default_paths: List[str] = [
        os.path.join(current_dir, "config", "config.yaml"),
        os.path.join(current_dir, "config.yaml"),
        "/app/config/config.yaml",
    ]
    for path in default_paths:
        if os.path.isfile(path):
            return path
    return None


def load_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read YAML config {path}: {e}") from e


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def build_config(raw: Optional[Dict[str, Any]] = None, **overrides) -> HarnessConfig:
    """Build a HarnessConfig from a raw mapping, environment variables and overrides.

    Priority: explicit overrides > environment > raw mapping > defaults.
    """
    load_dotenv()
    data = dict(raw or {})

    browser_config = {**DEFAULT_CONFIG, **(data.get("browser_config") or {})}

    if os.getenv(ENV_BASE_URL):
        data["base_url"] = os.environ[ENV_BASE_URL]
    if os.getenv(ENV_HEADLESS):
        browser_config["headless"] = _env_flag(os.environ[ENV_HEADLESS])

    for key, value in overrides.items():
        if value is None:
            continue
        if key == "headless":
            browser_config["headless"] = value
        else:
            data[key] = value

    if os.getenv("DOCKER_ENV") == "true" and not browser_config.get("headless", True):
        logging.warning("Docker environment detected, forcing headless mode")
        browser_config["headless"] = True

    data["browser_config"] = browser_config

    try:
        if isinstance(data.get("locators"), dict):
            data["locators"] = LocatorContract.from_overrides(data["locators"])
        return HarnessConfig(**data)
    except (ValidationError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_config(path: Optional[str] = None, **overrides) -> HarnessConfig:
    config_path = find_config_file(path)
    raw = load_yaml(config_path) if config_path else {}
    if config_path:
        logging.info(f"Using config file: {config_path}")
    return build_config(raw, **overrides)
