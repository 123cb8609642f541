# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""
Command line access to the Grafana dashboards API.

Connection settings come from GRAFANA_URL, GRAFANA_API_KEY and friends.
Results are printed as JSON.
"""

import json
import logging
import warnings
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TypeVar

import httpx
import typer
from pydantic import ValidationError

from .client import DashboardClient, get_client
from .exceptions import GrafanaError
from .models.dashboard import Dashboard, DashboardModel
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

app = typer.Typer(help="Manage Grafana dashboards.", no_args_is_help=True)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(code=1)


def _call(operation: Callable[[DashboardClient], T]) -> T:
    """Run one client operation, turning API and transport failures into an exit code."""
    try:
        with get_client() as client:
            return operation(client)
    except (GrafanaError, httpx.TransportError) as e:
        _fail(e)


def _parse_vars(values: List[str]) -> Dict[str, List[str]]:
    dashboard_vars: Dict[str, List[str]] = {}
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected name=value, got '{item}'", param_hint="--var")
        dashboard_vars.setdefault(name, []).append(value)
    return dashboard_vars


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests at DEBUG level."),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON."),
):
    """Run commands against the Grafana instance at GRAFANA_URL."""
    setup_logging(level=logging.DEBUG if verbose else logging.WARNING, json_format=json_logs)


@app.command()
def get(uid: str = typer.Argument(..., help="Dashboard UID")):
    """Get a dashboard by UID."""
    dashboard = _call(lambda client: client.get_dashboard(uid))
    _echo_json(dashboard.to_payload())


@app.command("get-by-slug")
def get_by_slug(slug: str = typer.Argument(..., help="Dashboard slug")):
    """Get a dashboard by slug (legacy endpoint)."""
    def fetch(client: DashboardClient) -> Dashboard:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DeprecationWarning)
            return client.dashboard(slug)

    dashboard = _call(fetch)
    _echo_json(dashboard.to_payload())


@app.command()
def search(
    query: str = typer.Option("", "--query", "-q", help="Search query (matches titles)"),
    folder_id: Optional[int] = typer.Option(None, "--folder-id", help="Restrict to one folder"),
):
    """Search for dashboards."""
    results = _call(lambda client: client.search_dashboard(query=query, folder_id=folder_id))
    _echo_json([result.model_dump(by_alias=True) for result in results])


@app.command()
def delete(uid: str = typer.Argument(..., help="Dashboard UID")):
    """Delete a dashboard by UID."""
    title = _call(lambda client: client.delete_dashboard(uid))
    _echo_json({"uid": uid, "title": title})


@app.command("import")
def import_dashboard(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Dashboard JSON file"),
    folder_id: int = typer.Option(0, "--folder-id", help="Target folder id"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing dashboard"),
):
    """Import a dashboard from a JSON file.

    The file may hold a bare dashboard body or an export with a top-level
    "dashboard" key.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        _fail(e)
    if isinstance(data, dict) and "dashboard" in data:
        data = data["dashboard"]

    try:
        model = DashboardModel.model_validate(data)
    except ValidationError as e:
        _fail(e)
    dashboard = Dashboard(model=model, folder=folder_id, overwrite=overwrite)
    logger.debug(f"Importing dashboard '{dashboard.model.title}' into folder {folder_id}")
    saved = _call(lambda client: client.new_dashboard(dashboard))
    _echo_json(saved.model_dump())


@app.command()
def url(
    uid: str = typer.Argument(..., help="Dashboard UID"),
    var: List[str] = typer.Option([], "--var", help="Variable filter as name=value, repeatable"),
):
    """Print the frontend path of a dashboard with variables preselected."""
    dashboard = Dashboard.model_validate({"meta": {"uid": uid}})
    typer.echo(dashboard.frontend_url(_parse_vars(var)))


if __name__ == "__main__":
    app()
