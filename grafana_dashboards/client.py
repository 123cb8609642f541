# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""
Grafana dashboards API client.
"""

import json
import logging
import warnings
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import GrafanaSettings
from .exceptions import DashboardDecodeError, GrafanaAPIError
from .executor import GrafanaRequestExecutor, RequestExecutor
from .models.dashboard import (
    Dashboard,
    DashboardDeleteResponse,
    DashboardSaveResponse,
    DashboardSearchResult,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

_search_results = TypeAdapter(List[DashboardSearchResult])


class DashboardClient:
    """Client for the Grafana dashboards API.

    Each method performs exactly one request and either returns a fully
    decoded result or raises. Only status 200 counts as success.

    Args:
        executor: sends requests to Grafana (base URL and auth are its concern)
        logger: logger for request diagnostics, defaults to the module logger
        log_responses: log raw dashboard bodies returned by fetch calls
    """

    def __init__(
        self,
        executor: RequestExecutor,
        logger: Optional[logging.Logger] = None,
        log_responses: bool = False,
    ):
        self.executor = executor
        self.logger = logger or logging.getLogger(__name__)
        self.log_responses = log_responses
        self._owns_executor = False

    @classmethod
    def from_settings(
        cls,
        settings: GrafanaSettings,
        logger: Optional[logging.Logger] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "DashboardClient":
        client = cls(
            GrafanaRequestExecutor.from_settings(settings, transport=transport),
            logger=logger,
            log_responses=settings.log_responses,
        )
        client._owns_executor = True
        return client

    @classmethod
    def from_env(cls, logger: Optional[logging.Logger] = None) -> "DashboardClient":
        """Build a client from GRAFANA_* environment variables."""
        return cls.from_settings(GrafanaSettings.from_env(), logger=logger)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        """Close the executor if this client created it."""
        if self._owns_executor:
            self.executor.close()

    # Dashboard methods
    def new_dashboard(self, dashboard: Dashboard) -> DashboardSaveResponse:
        """Create or import a dashboard.

        ``dashboard.model`` is the body, ``dashboard.folder`` the target folder
        and ``dashboard.overwrite`` whether an existing dashboard with the same
        uid or title may be replaced.
        """
        return self._post_dashboard("/api/dashboards/import", dashboard.to_payload())

    def save_dashboard(self, model: Mapping[str, Any], overwrite: bool) -> DashboardSaveResponse:
        """Save a raw dashboard body through the legacy endpoint.

        Deprecated: use new_dashboard instead.
        """
        warnings.warn(
            "save_dashboard is deprecated, use new_dashboard instead",
            DeprecationWarning,
            stacklevel=2,
        )
        payload = {"dashboard": dict(model), "overwrite": overwrite}
        return self._post_dashboard("/api/dashboards/db", payload, include_body=True)

    def get_dashboard(self, uid: str) -> Dashboard:
        """Get a dashboard by UID."""
        result = self._fetch_dashboard(f"/api/dashboards/uid/{quote(uid, safe='')}")
        # the dashboard uid is not a part of the response
        result.meta.uid = uid
        return result

    def dashboard(self, slug: str) -> Dashboard:
        """Get a dashboard by slug.

        Deprecated: use get_dashboard instead.
        """
        warnings.warn(
            "dashboard is deprecated, use get_dashboard instead",
            DeprecationWarning,
            stacklevel=2,
        )
        return self._fetch_dashboard(f"/api/dashboards/db/{quote(slug, safe='')}")

    def search_dashboard(
        self,
        query: str = "",
        folder_id: Optional[Union[int, str]] = None,
    ) -> List[DashboardSearchResult]:
        """Search dashboards by title, optionally restricted to one folder.

        Returns an empty list when nothing matches.
        """
        params: Dict[str, Any] = {"type": "dash-db", "query": query}
        if folder_id is not None and folder_id != "":
            params["folderIds"] = str(folder_id)

        response = self._send("GET", "/api/search", params=params)
        data = self._decode_json(response)
        if data is None:
            return []
        try:
            return _search_results.validate_python(data)
        except ValidationError as e:
            self.logger.error(f"Unexpected search response shape: {e}")
            raise DashboardDecodeError(f"could not decode search results: {e}") from e

    def delete_dashboard(self, uid: str) -> str:
        """Delete a dashboard by UID and return its title."""
        response = self._send("DELETE", f"/api/dashboards/uid/{quote(uid, safe='')}")
        deleted = self._decode(response, DashboardDeleteResponse)
        return deleted.title

    # Internal helpers
    def _post_dashboard(
        self,
        path: str,
        payload: Dict[str, Any],
        include_body: bool = False,
    ) -> DashboardSaveResponse:
        response = self._send("POST", path, json=payload, include_body=include_body)
        return self._decode(response, DashboardSaveResponse)

    def _fetch_dashboard(self, path: str) -> Dashboard:
        response = self._send("GET", path)
        if self.log_responses:
            self.logger.info(f"got back dashboard response {response.text}")
        result = self._decode(response, Dashboard)
        result.folder = result.meta.folder
        return result

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        include_body: bool = False,
    ) -> httpx.Response:
        try:
            response = self.executor.request(method, path, params=params, json=json)
        except httpx.TransportError as e:
            self.logger.error(
                f"Grafana API {method} error for {path}: {e}",
                extra={"method": method, "path": path},
            )
            raise

        if response.status_code != 200:
            body = response.text if include_body else None
            error = GrafanaAPIError(response.status_code, response.reason_phrase, body=body)
            self.logger.error(
                f"Grafana API {method} error for {path}: {error}",
                extra={"method": method, "path": path, "status": response.status_code},
            )
            raise error
        return response

    def _decode_json(self, response: httpx.Response) -> Any:
        try:
            return json.loads(response.content)
        except ValueError as e:
            self.logger.error(f"Response body is not valid JSON: {response.text[:200]}")
            raise DashboardDecodeError(f"response body is not valid JSON: {e}") from e

    def _decode(self, response: httpx.Response, model: Type[ModelT]) -> ModelT:
        data = self._decode_json(response)
        try:
            return model.model_validate(data if data is not None else {})
        except ValidationError as e:
            self.logger.error(f"Unexpected {model.__name__} shape: {e}")
            raise DashboardDecodeError(f"could not decode {model.__name__}: {e}") from e


def get_client() -> DashboardClient:
    """Get a Grafana dashboards client configured from the environment."""
    return DashboardClient.from_env()
