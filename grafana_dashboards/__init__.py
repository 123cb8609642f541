# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Client for the Grafana dashboards HTTP API."""

from .client import DashboardClient, get_client
from .config import GrafanaSettings
from .exceptions import (
    ConfigurationError,
    DashboardDecodeError,
    GrafanaAPIError,
    GrafanaError,
    PanelNotFoundError,
)
from .executor import GrafanaRequestExecutor, RequestExecutor
from .models import (
    Dashboard,
    DashboardDeleteResponse,
    DashboardMeta,
    DashboardModel,
    DashboardPanel,
    DashboardSaveResponse,
    DashboardSearchResult,
)

__all__ = [
    "ConfigurationError",
    "Dashboard",
    "DashboardClient",
    "DashboardDecodeError",
    "DashboardDeleteResponse",
    "DashboardMeta",
    "DashboardModel",
    "DashboardPanel",
    "DashboardSaveResponse",
    "DashboardSearchResult",
    "GrafanaAPIError",
    "GrafanaError",
    "GrafanaRequestExecutor",
    "GrafanaSettings",
    "PanelNotFoundError",
    "RequestExecutor",
    "get_client",
]
