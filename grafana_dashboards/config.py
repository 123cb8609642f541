# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for the Grafana dashboards client

Settings come from environment variables, optionally loaded from a ``.env``
file in the working directory.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .exceptions import ConfigurationError

DEFAULT_TIMEOUT = 30.0

_TRUE_VALUES = ("true", "1", "yes", "on")


def _env_flag(value: Optional[str], default: bool = False) -> bool:
    if value is None or value == "":
        return default
    return value.lower() in _TRUE_VALUES


class GrafanaSettings(BaseModel):
    """Connection settings for a Grafana instance."""
    url: str
    api_key: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    # GF_LOG (any non-empty value): log raw dashboard bodies on fetch
    log_responses: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GrafanaSettings":
        """Build settings from the environment.

        Raises:
            ConfigurationError: GRAFANA_URL is unset, no credentials are set,
                or GRAFANA_TIMEOUT is not a number
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        url = environ.get("GRAFANA_URL")
        if not url:
            raise ConfigurationError("GRAFANA_URL environment variable is required")

        api_key = environ.get("GRAFANA_API_KEY") or None
        username = environ.get("GRAFANA_USERNAME") or None
        password = environ.get("GRAFANA_PASSWORD") or None
        if not api_key and not (username and password):
            raise ConfigurationError(
                "GRAFANA_API_KEY or GRAFANA_USERNAME/GRAFANA_PASSWORD environment variables are required"
            )

        raw_timeout = environ.get("GRAFANA_TIMEOUT")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"GRAFANA_TIMEOUT must be a number, got '{raw_timeout}'") from e

        return cls(
            url=url.rstrip("/"),
            api_key=api_key,
            username=username,
            password=password,
            timeout=timeout,
            verify_ssl=_env_flag(environ.get("GRAFANA_VERIFY_SSL"), default=True),
            log_responses=bool(environ.get("GF_LOG")),
        )
