# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""HTTP request executor for the Grafana API.

The executor owns transport concerns (base URL, authentication, timeout, TLS).
Callers pass a path relative to the Grafana root and get the raw
``httpx.Response`` back; status handling is left to the caller.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .config import GrafanaSettings

logger = logging.getLogger(__name__)


class RequestExecutor(Protocol):
    """Anything that can send a request to Grafana and hand back the response."""

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> httpx.Response:
        ...


class GrafanaRequestExecutor:
    """Request executor backed by ``httpx.Client``."""

    def __init__(self, client: httpx.Client):
        self.client = client

    @classmethod
    def from_settings(
        cls,
        settings: GrafanaSettings,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "GrafanaRequestExecutor":
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        auth = None
        if settings.api_key:
            headers["Authorization"] = f"Bearer {settings.api_key}"
        elif settings.username and settings.password:
            auth = httpx.BasicAuth(settings.username, settings.password)

        client = httpx.Client(
            base_url=settings.url.rstrip("/"),
            headers=headers,
            auth=auth,
            timeout=settings.timeout,
            verify=settings.verify_ssl,
            transport=transport,
        )
        return cls(client)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.client.close()

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> httpx.Response:
        # DO NOT log headers, they carry the API token
        logger.debug(f"{method} {path} params={params}")
        response = self.client.request(method, path, params=params, json=json)
        logger.debug(f"{method} {path} -> {response.status_code}")
        return response
