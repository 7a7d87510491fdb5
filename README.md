# mwindow

Maintenance windows for deployment pipelines. A maintenance window has a
start and an end time written as RFC 3339 strings. A reconciler sets each
window's state (`active`, `inactive` or `expired`) from those times and the
current clock, and a validator refuses new Deployments while any window is
active.

## Install

```
pip install mwindow
```

The package has no dependencies beyond the standard library.

## Resource types: `mwindow.api`

- `MaintenanceWindow` holds `metadata` (`ObjectMeta`: `name`, `namespace`),
  `spec` (`MaintenanceWindowSpec`: `start_time`, `end_time`) and `status`
  (`MaintenanceWindowStatus`: `state`, a `MaintenanceWindowState` or `None`).
- `MaintenanceWindowState` is a string enum: `ACTIVE` (`"active"`),
  `INACTIVE` (`"inactive"`) and `EXPIRED` (`"expired"`).
- `MaintenanceWindowList` holds a list of windows in `items`.
- `GroupVersion` names an API group and version; `api_version()` returns
  `"group/version"`, or just the version when the group is empty.
  `GROUP_VERSION` is the one these resources use:
  `maintenanceoperator.io.maintenanceoperator.io/v1alpha1`.

`MaintenanceWindow` and `MaintenanceWindowList` convert to and from plain
dictionaries with `to_dict()` and `from_dict()`. The dictionaries carry
`apiVersion`, `kind`, `metadata`, and either `spec`/`status` (with the
camel-case keys `startTime`, `endTime`, `state`) or `items`. Empty fields are
left out on output. `from_dict()` raises `ValueError` on a wrong `kind` or
`apiVersion`, on fields of the wrong type, and on an unknown state.

## Reconciling: `mwindow.controller`

```python
from mwindow.api import MaintenanceWindow, MaintenanceWindowSpec, ObjectMeta
from mwindow.controller import (
    InMemoryClient, MaintenanceWindowReconciler, NamespacedName, Request,
)

client = InMemoryClient()
client.create(MaintenanceWindow(
    metadata=ObjectMeta(name="nightly", namespace="ops"),
    spec=MaintenanceWindowSpec(start_time="2025-06-19T01:00:00Z",
                               end_time="2025-06-25T03:00:00Z"),
))

reconciler = MaintenanceWindowReconciler(client)
reconciler.reconcile(Request(NamespacedName(namespace="ops", name="nightly")))
print(client.get(NamespacedName(namespace="ops", name="nightly")).status.state)
```

`InMemoryClient` stores windows keyed by `NamespacedName` and hands out
copies:

- `create(obj)` raises `ValueError` if the window has no name or already
  exists.
- `get(name)`, `update_status(obj)` and `delete(obj)` raise `NotFoundError`
  (a `LookupError`) for a missing window. `update_status` replaces only the
  stored status.
- `list(field_selector=None)` returns a `MaintenanceWindowList` sorted by
  namespace and name. The selector is a mapping whose keys may be
  `metadata.name`, `metadata.namespace` and `status.state`. Other keys raise
  `ValueError`.

`MaintenanceWindowReconciler(client, clock=...)` takes an optional `clock`
that returns an aware `datetime`. By default the clock gives the current UTC
time. `reconcile(request)` returns a `Result` and does the following:

- a window that does not exist is ignored;
- a start or end time that cannot be parsed raises `ValueError`;
- a failure to write the status back is logged, not raised.

`parse_rfc3339(value)` parses a timestamp such as `2025-06-19T01:00:00Z` or
`2025-06-19T01:00:00.5+02:00` into an aware `datetime`, raising `ValueError`
otherwise.

`compute_state(start, end, now)` applies these rules in order:

1. `now` before `end` and not equal to `start` gives active.
2. `now` after `end` gives expired.
3. `now` before `start` gives inactive.
4. Otherwise it returns `None` and the reconciler leaves the state as it was.

As a result, a window is reported active at any time before its end except
the exact start instant, including times before it has started.

## Admission checks: `mwindow.webhook`

`DeploymentCustomValidator(client)` checks a `Deployment` (`name`,
`namespace`) against the windows that the client's `list()` returns:

- `validate_create(obj)` raises `AdmissionDenied` when any window is active.
  The message has the form `blocked by maintenance window "<name>" until <end>`,
  and the same text is in the exception's `warnings`. If listing fails it
  raises `RuntimeError`. Otherwise it returns an empty `ValidationResult`.
- `validate_update(old_obj, new_obj)` and `validate_delete(obj)` accept
  everything.
- All three raise `TypeError` when the object given (for updates, `new_obj`)
  is not a `Deployment`.
- `handle()` asks the client for windows whose `status.state` is `active` and
  returns an `AdmissionResponse`:
  - with no active window, it allows the request with the message
    `no maintenance window active`;
  - with an active window, it denies the request with code 403 and names the
    first active window;
  - if listing fails, it denies the request with code 500.

## What this package does not do

It does not connect to a cluster, serve admission requests over HTTP, watch
for changes, or keep windows anywhere but in memory. There is no command to
run. To use the reconciler and validator, your own code calls them, with an
`InMemoryClient` or any object that offers the same methods.

## Tests

```
pip install -e ".[test]"
pytest
```