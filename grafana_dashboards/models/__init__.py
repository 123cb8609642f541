# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Grafana dashboard data models."""

from .dashboard import (
    Dashboard,
    DashboardAnnotation,
    DashboardDeleteResponse,
    DashboardMeta,
    DashboardModel,
    DashboardPanel,
    DashboardSaveResponse,
    DashboardSearchResult,
    Link,
    TemplateVariable,
    TimeRange,
)

__all__ = [
    "Dashboard",
    "DashboardAnnotation",
    "DashboardDeleteResponse",
    "DashboardMeta",
    "DashboardModel",
    "DashboardPanel",
    "DashboardSaveResponse",
    "DashboardSearchResult",
    "Link",
    "TemplateVariable",
    "TimeRange",
]
