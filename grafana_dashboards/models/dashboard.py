# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dashboard data models.

Field names follow Python conventions; the Grafana JSON names are kept as
aliases so payloads decode and encode unchanged. Unknown keys are ignored and
declared keys sent as ``null`` fall back to the field default.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import urlencode

from pydantic import BaseModel, Field, model_validator

from ..exceptions import PanelNotFoundError


class GrafanaModel(BaseModel):
    """Base model for Grafana API payloads."""

    class Config:
        populate_by_name = True

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        # only declared fields fall back to defaults; undeclared keys pass through as sent
        if isinstance(data, dict):
            declared = set(cls.model_fields)
            declared.update(field.alias for field in cls.model_fields.values() if field.alias)
            return {
                key: value
                for key, value in data.items()
                if value is not None or key not in declared
            }
        return data


class DashboardMeta(GrafanaModel):
    """Server-side metadata returned alongside a dashboard body."""
    uid: str = ""
    title: str = ""
    is_starred: bool = Field(default=False, alias="isStarred")
    slug: str = ""
    folder: int = Field(default=0, alias="folderId")
    folder_title: str = Field(default="", alias="folderTitle")
    folder_uid: str = Field(default="", alias="folderUid")
    url: str = ""


class DashboardSaveResponse(GrafanaModel):
    """Identity assigned by the server after a create or save."""
    slug: str = ""
    id: int = 0
    uid: str = ""
    url: str = ""
    status: str = ""
    version: int = 0


class DashboardSearchResult(GrafanaModel):
    """One row of the search API. Fetch by uid to get the full dashboard."""
    id: int = 0
    uid: str = ""
    title: str = ""
    uri: str = ""
    url: str = ""
    slug: str = ""
    type: str = ""
    tags: List[Any] = Field(default_factory=list)
    is_starred: bool = Field(default=False, alias="isStarred")
    folder_id: int = Field(default=0, alias="folderId")
    folder_uid: str = Field(default="", alias="folderUid")
    folder_title: str = Field(default="", alias="folderTitle")


class DashboardDeleteResponse(GrafanaModel):
    """Delete API response."""
    title: str = ""


class Link(GrafanaModel):
    title: str = ""
    url: str = ""


class TimeRange(GrafanaModel):
    """Dashboard time range. Values are passed through as sent (``now-6h``, epoch ms, ...)."""
    from_: Any = Field(default="", alias="from")
    to: Any = ""


class Timepicker(GrafanaModel):
    refresh_intervals: List[str] = Field(default_factory=list)


class DashboardAnnotation(GrafanaModel):
    """A named overlay source drawn on top of panels."""
    built_in: int = Field(default=0, alias="builtIn")
    datasource: Union[str, Dict[str, Any]] = ""
    enable: bool = False
    hide: bool = False
    icon_color: str = Field(default="", alias="iconColor")
    name: str = ""
    type: str = ""


class DashboardAnnotations(GrafanaModel):
    items: List[DashboardAnnotation] = Field(default_factory=list, alias="list")


class DashboardPanel(GrafanaModel):
    """One visualization unit.

    Only the fields the client reads are typed; every other key the server
    sends is kept so the panel round-trips unchanged.
    """

    class Config:
        populate_by_name = True
        extra = "allow"

    id: int = 0
    type: str = ""
    title: str = ""
    datasource: Any = None
    grid_pos: Dict[str, Any] = Field(default_factory=dict, alias="gridPos")
    targets: List[Dict[str, Any]] = Field(default_factory=list)


class TemplateVariableCurrent(GrafanaModel):
    # multi-value variables send lists here
    text: Any = ""
    value: Any = ""


class TemplateVariableOption(GrafanaModel):
    selected: bool = False
    text: str = ""
    value: str = ""


class TemplateVariable(GrafanaModel):
    """A templating variable. Carried as-is, never interpreted by the client.

    ``hide``: 0 shows the selector, 1 hides its label, 2 hides it entirely.
    """
    all_value: Any = Field(default=None, alias="allValue")
    current: TemplateVariableCurrent = Field(default_factory=TemplateVariableCurrent)
    hide: int = 0
    include_all: bool = Field(default=False, alias="includeAll")
    label: Any = None
    multi: bool = False
    name: str = ""
    options: List[TemplateVariableOption] = Field(default_factory=list)
    query: Any = ""
    skip_url_sync: bool = Field(default=False, alias="skipUrlSync")
    type: str = ""


class Templating(GrafanaModel):
    items: List[TemplateVariable] = Field(default_factory=list, alias="list")


class DashboardModel(GrafanaModel):
    """The dashboard body (the ``dashboard`` key of API payloads)."""
    annotations: DashboardAnnotations = Field(default_factory=DashboardAnnotations)
    editable: bool = False
    gnet_id: Any = Field(default=None, alias="gnetId")
    graph_tooltip: int = Field(default=0, alias="graphTooltip")
    id: int = 0
    iteration: int = 0
    links: List[Link] = Field(default_factory=list)
    panels: List[DashboardPanel] = Field(default_factory=list)
    refresh: Union[bool, str] = False
    schema_version: int = Field(default=0, alias="schemaVersion")
    style: str = ""
    tags: List[Any] = Field(default_factory=list)
    templating: Templating = Field(default_factory=Templating)
    time: TimeRange = Field(default_factory=TimeRange)
    timepicker: Timepicker = Field(default_factory=Timepicker)
    timezone: str = ""
    title: str = ""
    uid: str = ""
    version: int = 0


class Dashboard(GrafanaModel):
    """A dashboard as exchanged with the dashboards API.

    ``overwrite`` only matters when writing; ``folder`` is copied from
    ``meta.folder`` whenever a dashboard is fetched.
    """
    meta: DashboardMeta = Field(default_factory=DashboardMeta)
    model: DashboardModel = Field(default_factory=DashboardModel, alias="dashboard")
    folder: int = Field(default=0, alias="folderId")
    overwrite: bool = False

    def get_panel_from_dashboard(self, panel_id: int) -> DashboardPanel:
        """Return the first panel whose id is ``panel_id``.

        Raises:
            PanelNotFoundError: no panel in the model has that id
        """
        for panel in self.model.panels:
            if panel.id == panel_id:
                return panel
        raise PanelNotFoundError(self.meta.uid, panel_id)

    def frontend_url(self, dashboard_vars: Optional[Mapping[str, Sequence[str]]] = None) -> str:
        """Build the UI path for this dashboard with variables preselected.

        Each value becomes its own ``var-<name>=<value>`` pair, e.g.
        ``{"env": ["prod", "staging"]}`` gives ``var-env=prod&var-env=staging``.
        """
        url = f"/d/{self.meta.uid}"
        query = dashboard_vars_to_query_string(dashboard_vars or {})
        if query:
            url += "?" + query
        return url

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def dashboard_vars_to_query_string(dashboard_vars: Mapping[str, Sequence[str]]) -> str:
    pairs = []
    for name, values in dashboard_vars.items():
        if isinstance(values, str):
            values = [values]
        for value in values:
            pairs.append((f"var-{name}", value))
    return urlencode(pairs)
