# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared pytest fixtures for the Grafana dashboards client tests."""

import json

import httpx
import pytest

from grafana_dashboards.client import DashboardClient
from grafana_dashboards.config import GrafanaSettings


@pytest.fixture(autouse=True)
def clean_grafana_env(monkeypatch):
    """Keep the developer's GRAFANA_* variables out of the tests."""
    for name in (
        "GRAFANA_URL",
        "GRAFANA_API_KEY",
        "GRAFANA_USERNAME",
        "GRAFANA_PASSWORD",
        "GRAFANA_TIMEOUT",
        "GRAFANA_VERIFY_SSL",
        "GF_LOG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return GrafanaSettings(url="https://grafana.example.test", api_key="test-token")


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code=200, body=None, content=None):
        self.status_code = status_code
        self.body = body
        self.content = content
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def make_client(settings):
    """Build a client whose requests are answered by the given handler."""
    clients = []

    def factory(handler, **kwargs):
        client = DashboardClient.from_settings(
            settings, transport=httpx.MockTransport(handler), **kwargs
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def dashboard_payload():
    """Dashboard response as returned by GET /api/dashboards/uid/:uid."""
    return {
        "meta": {
            "type": "db",
            "canSave": True,
            "slug": "service-overview",
            "url": "/d/svc01/service-overview",
            "isStarred": True,
            "folderId": 7,
            "folderUid": "ops",
            "folderTitle": "Operations",
            "created": "2024-03-01T10:00:00Z",
        },
        "dashboard": {
            "annotations": {
                "list": [
                    {
                        "builtIn": 1,
                        "datasource": "-- Grafana --",
                        "enable": True,
                        "hide": True,
                        "iconColor": "rgba(0, 211, 255, 1)",
                        "name": "Annotations & Alerts",
                        "type": "dashboard",
                    }
                ]
            },
            "editable": True,
            "gnetId": None,
            "graphTooltip": 1,
            "id": 42,
            "iteration": 1700000000000,
            "links": [{"title": "Runbook", "url": "https://runbooks.example.test/svc"}],
            "panels": [
                {
                    "id": 1,
                    "type": "timeseries",
                    "title": "Request rate",
                    "datasource": {"type": "prometheus", "uid": "prom"},
                    "gridPos": {"h": 8, "w": 12, "x": 0, "y": 0},
                    "targets": [{"expr": "sum(rate(http_requests_total[5m]))", "refId": "A"}],
                    "fieldConfig": {"defaults": {"unit": "reqps"}},
                },
                {
                    "id": 2,
                    "type": "stat",
                    "title": "Error ratio",
                },
            ],
            "refresh": "30s",
            "schemaVersion": 36,
            "style": "dark",
            "tags": ["service", 2024],
            "templating": {
                "list": [
                    {
                        "allValue": None,
                        "current": {"text": "prod", "value": "prod"},
                        "hide": 0,
                        "includeAll": False,
                        "label": "Environment",
                        "multi": False,
                        "name": "env",
                        "options": [
                            {"selected": True, "text": "prod", "value": "prod"},
                            {"selected": False, "text": "staging", "value": "staging"},
                        ],
                        "query": "label_values(env)",
                        "skipUrlSync": False,
                        "type": "query",
                    }
                ]
            },
            "time": {"from": "now-6h", "to": "now"},
            "timepicker": {"refresh_intervals": ["10s", "30s", "1m"]},
            "timezone": "browser",
            "title": "Service overview",
            "uid": "svc01",
            "version": 5,
        },
    }
