"""Resource types for the maintenanceoperator.io v1alpha1 API group."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def api_version(self) -> str:
        """Return the ``apiVersion`` string used on the wire."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


GROUP_VERSION = GroupVersion(
    group="maintenanceoperator.io.maintenanceoperator.io", version="v1alpha1"
)

WINDOW_KIND = "MaintenanceWindow"
WINDOW_LIST_KIND = "MaintenanceWindowList"


class MaintenanceWindowState(str, Enum):
    """Observed state of a maintenance window."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"


@dataclass
class ObjectMeta:
    """Identifying metadata of a resource."""

    name: str = ""
    namespace: str = ""


@dataclass
class MaintenanceWindowSpec:
    """Desired state: the window's start and end as RFC 3339 strings."""

    start_time: str = ""
    end_time: str = ""


@dataclass
class MaintenanceWindowStatus:
    """Observed state of a maintenance window."""

    state: MaintenanceWindowState | None = None


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
    return value


def _require_mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ValueError(f"field {key!r} must be an object, got {type(value).__name__}")
    return value


def _meta_to_dict(meta: ObjectMeta) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if meta.name:
        out["name"] = meta.name
    if meta.namespace:
        out["namespace"] = meta.namespace
    return out


def _check_header(data: Mapping[str, Any], kind: str) -> None:
    found_kind = data.get("kind")
    if found_kind not in (None, "", kind):
        raise ValueError(f"expected kind {kind!r}, got {found_kind!r}")
    found_version = data.get("apiVersion")
    if found_version not in (None, "", GROUP_VERSION.api_version()):
        raise ValueError(
            f"expected apiVersion {GROUP_VERSION.api_version()!r}, got {found_version!r}"
        )


@dataclass
class MaintenanceWindow:
    """A maintenance window resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: MaintenanceWindowSpec = field(default_factory=MaintenanceWindowSpec)
    status: MaintenanceWindowStatus = field(default_factory=MaintenanceWindowStatus)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON shape of the resource."""
        spec: dict[str, Any] = {}
        if self.spec.start_time:
            spec["startTime"] = self.spec.start_time
        if self.spec.end_time:
            spec["endTime"] = self.spec.end_time
        status: dict[str, Any] = {}
        if self.status.state is not None:
            status["state"] = self.status.state.value
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": WINDOW_KIND,
            "metadata": _meta_to_dict(self.metadata),
            "spec": spec,
            "status": status,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MaintenanceWindow:
        """Build a window from its JSON shape."""
        _check_header(data, WINDOW_KIND)
        meta = _require_mapping(data, "metadata")
        spec = _require_mapping(data, "spec")
        status = _require_mapping(data, "status")
        raw_state = _require_str(status, "state")
        try:
            state = MaintenanceWindowState(raw_state) if raw_state else None
        except ValueError:
            raise ValueError(f"unknown maintenance window state {raw_state!r}") from None
        return cls(
            metadata=ObjectMeta(
                name=_require_str(meta, "name"),
                namespace=_require_str(meta, "namespace"),
            ),
            spec=MaintenanceWindowSpec(
                start_time=_require_str(spec, "startTime"),
                end_time=_require_str(spec, "endTime"),
            ),
            status=MaintenanceWindowStatus(state=state),
        )


@dataclass
class MaintenanceWindowList:
    """A list of maintenance windows."""

    items: list[MaintenanceWindow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON shape of the list."""
        return {
            "apiVersion": GROUP_VERSION.api_version(),
            "kind": WINDOW_LIST_KIND,
            "metadata": {},
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MaintenanceWindowList:
        """Build a list from its JSON shape."""
        _check_header(data, WINDOW_LIST_KIND)
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ValueError("field 'items' must be a list")
        return cls(items=[MaintenanceWindow.from_dict(item) for item in items])