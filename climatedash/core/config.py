#!/usr/bin/env python3
"""
climatedash Configuration Management

YAML first, then environment overrides:
- CLIMATEDASH_DATA_URL          replaces data_url
- CLIMATEDASH_REFRESH_INTERVAL  replaces refresh_interval (seconds)

A .env file in the working directory is honoured via python-dotenv.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..api.sheet_client import DEFAULT_DATA_URL

logger = logging.getLogger("climatedash.server")


class DashboardConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    # Data source
    data_url: str = DEFAULT_DATA_URL
    refresh_interval: int = Field(10, ge=1)
    request_timeout: int = Field(30, ge=1)
    # Presentation
    page_title: str = "Conceptmachine Live Data"


def apply_env_overrides(cfg: DashboardConfig) -> DashboardConfig:
    """Return a copy of cfg with environment overrides applied."""
    load_dotenv()
    updates = {}

    env_url = os.getenv("CLIMATEDASH_DATA_URL")
    if env_url:
        updates["data_url"] = env_url

    env_interval = os.getenv("CLIMATEDASH_REFRESH_INTERVAL")
    if env_interval:
        try:
            interval = int(env_interval)
            if interval < 1:
                raise ValueError(env_interval)
            updates["refresh_interval"] = interval
            logger.info(f"using refresh interval from env: {interval}s")
        except ValueError:
            logger.warning(f"invalid CLIMATEDASH_REFRESH_INTERVAL '{env_interval}', using {cfg.refresh_interval}s")

    return cfg.model_copy(update=updates) if updates else cfg


def load_config_from(path: Optional[Union[str, Path]] = None) -> DashboardConfig:
    """Load configuration from YAML file; a missing file means defaults."""
    if path is None or not Path(path).exists():
        logger.debug(f"Config file not found: {path}, using defaults")
        cfg = DashboardConfig()
    else:
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        cfg = DashboardConfig(**data)
    return apply_env_overrides(cfg)
