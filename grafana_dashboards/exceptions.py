# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised by the Grafana dashboards client.

Transport failures are not wrapped: ``httpx.TransportError`` reaches the
caller unchanged.
"""

from typing import Optional


class GrafanaError(Exception):
    """Base class for client errors."""


class ConfigurationError(GrafanaError):
    """Required settings are missing or invalid."""


class GrafanaAPIError(GrafanaError):
    """The server answered with a status other than 200."""

    def __init__(self, status_code: int, reason: str = "", body: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        if body is not None:
            message = f"status: {status_code}, body: {body}"
        else:
            message = f"{status_code} {reason}".strip()
        super().__init__(message)


class DashboardDecodeError(GrafanaError):
    """The response body is not JSON or does not match the expected shape."""


class PanelNotFoundError(GrafanaError, LookupError):
    """No panel with the requested id exists in the dashboard."""

    def __init__(self, dashboard_uid: str, panel_id: int):
        self.dashboard_uid = dashboard_uid
        self.panel_id = panel_id
        super().__init__(f"panel {panel_id} not found in dashboard '{dashboard_uid}'")
