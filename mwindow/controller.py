"""Reconciler that keeps a maintenance window's state in line with the clock."""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Mapping

from .api import MaintenanceWindow, MaintenanceWindowList, MaintenanceWindowState

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """Raised when a requested object does not exist."""


@dataclass(frozen=True, order=True)
class NamespacedName:
    """The namespace and name that identify an object."""

    namespace: str = ""
    name: str = ""

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


@dataclass(frozen=True)
class Request:
    """A request to reconcile one object."""

    namespaced_name: NamespacedName


@dataclass(frozen=True)
class Result:
    """Outcome of a reconcile pass."""

    requeue: bool = False
    requeue_after: timedelta = timedelta(0)


def _key(obj: MaintenanceWindow) -> NamespacedName:
    return NamespacedName(namespace=obj.metadata.namespace, name=obj.metadata.name)


def _state_field(window: MaintenanceWindow) -> str:
    return window.status.state.value if window.status.state is not None else ""


_FIELD_GETTERS: dict[str, Callable[[MaintenanceWindow], str]] = {
    "metadata.name": lambda w: w.metadata.name,
    "metadata.namespace": lambda w: w.metadata.namespace,
    "status.state": _state_field,
}


class InMemoryClient:
    """A store of maintenance windows with the operations the operator uses."""

    def __init__(self) -> None:
        self._objects: dict[NamespacedName, MaintenanceWindow] = {}

    def create(self, obj: MaintenanceWindow) -> None:
        """Store a new window; raise ValueError if it has no name or already exists."""
        if not obj.metadata.name:
            raise ValueError("object has no name")
        key = _key(obj)
        if key in self._objects:
            raise ValueError(f"maintenance window {str(key)!r} already exists")
        self._objects[key] = copy.deepcopy(obj)

    def get(self, name: NamespacedName) -> MaintenanceWindow:
        """Return a copy of the stored window, or raise NotFoundError."""
        try:
            return copy.deepcopy(self._objects[name])
        except KeyError:
            raise NotFoundError(f"maintenance window {str(name)!r} not found") from None

    def list(self, field_selector: Mapping[str, str] | None = None) -> MaintenanceWindowList:
        """Return copies of the stored windows matching every selector field."""
        selector = dict(field_selector or {})
        unknown = set(selector) - set(_FIELD_GETTERS)
        if unknown:
            raise ValueError(f"unsupported field selector: {', '.join(sorted(unknown))}")
        items = [
            copy.deepcopy(window)
            for key, window in sorted(self._objects.items())
            if all(_FIELD_GETTERS[f](window) == v for f, v in selector.items())
        ]
        return MaintenanceWindowList(items=items)

    def update_status(self, obj: MaintenanceWindow) -> None:
        """Replace the stored window's status with the one given."""
        key = _key(obj)
        try:
            stored = self._objects[key]
        except KeyError:
            raise NotFoundError(f"maintenance window {str(key)!r} not found") from None
        stored.status = copy.deepcopy(obj.status)

    def delete(self, obj: MaintenanceWindow) -> None:
        """Remove the window, or raise NotFoundError."""
        key = _key(obj)
        try:
            del self._objects[key]
        except KeyError:
            raise NotFoundError(f"maintenance window {str(key)!r} not found") from None


_RFC3339 = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})"
    r"(?:\.([0-9]+))?(Z|[+-][0-9]{2}:[0-9]{2})\Z"
)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime; raise ValueError if invalid."""
    match = _RFC3339.match(value)
    if match is None:
        raise ValueError(f"cannot parse {value!r} as an RFC 3339 time")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = match.group(7) or ""
    microsecond = int((fraction + "000000")[:6])
    zone = match.group(8)
    if zone == "Z":
        tz = timezone.utc
    else:
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"cannot parse {value!r} as an RFC 3339 time: bad offset")
        offset = timedelta(hours=hours, minutes=minutes)
        tz = timezone(offset if zone[0] == "+" else -offset)
    try:
        return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)
    except ValueError as exc:
        raise ValueError(f"cannot parse {value!r} as an RFC 3339 time: {exc}") from exc


def compute_state(
    start: datetime, end: datetime, now: datetime
) -> MaintenanceWindowState | None:
    """Return the state a window should take at ``now``, or None to leave it as it is."""
    if now != start and now < end:
        return MaintenanceWindowState.ACTIVE
    if not now < end and now != end:
        return MaintenanceWindowState.EXPIRED
    if now < start:
        return MaintenanceWindowState.INACTIVE
    return None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MaintenanceWindowReconciler:
    """Sets each window's status state from its start and end times."""

    client: InMemoryClient
    clock: Callable[[], datetime] = field(default=_utc_now)

    def reconcile(self, request: Request) -> Result:
        """Reconcile one window; a missing window is not an error."""
        try:
            window = self.client.get(request.namespaced_name)
        except NotFoundError:
            return Result()

        try:
            start = parse_rfc3339(window.spec.start_time)
        except ValueError:
            logger.exception("unable to parse start time")
            raise
        try:
            end = parse_rfc3339(window.spec.end_time)
        except ValueError:
            logger.exception("unable to parse end time")
            raise

        state = compute_state(start, end, self.clock())
        if state is not None:
            window.status.state = state

        try:
            self.client.update_status(window)
        except Exception:
            logger.exception("unable to update the mw object")
        return Result()