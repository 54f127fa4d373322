# cozeapi

A small, synchronous client for the Coze open API, built on `httpx`.
It covers file upload and retrieval, the current user, template
duplication, and workflow runs: plain runs, streamed workflow events,
resuming interrupted runs and looking up run histories.

## Setting up

Every service class wraps a `cozeapi.request.Core`, which holds an
`httpx.Client` and the base URL that request paths are appended to.
The package sends no credentials of its own; give the HTTP client the
headers your account needs:

```python
import httpx

from cozeapi.request import Core

http = httpx.Client(headers={"Authorization": "Bearer token"}, timeout=5.0)
core = Core(http, "https://api.example.com")
```

Passing `None` instead of a client makes `Core` create an `httpx.Client`
with a five-second timeout. Every request carries a `User-Agent` and an
`X-Coze-Client-User-Agent` header (see `cozeapi.user_agent`).

## Users and files

```python
from cozeapi.files import Files, UploadFile
from cozeapi.users import Users

me = Users(core).me()
print(me.user_id, me.user_name, me.nick_name)

files = Files(core)
with open("report.txt", "rb") as fh:
    info = files.upload(UploadFile(fh, "report.txt"))

same = files.retrieve(info.id)
print(same.file_name, same.bytes, same.created_at)
```

The returned `User` and `FileInfo` objects keep the server's log id in
`log_id`, the value to quote when asking about a failed call.

## Templates

```python
from cozeapi.templates import Templates

result = Templates(core).duplicate("template-id", "workspace-id", name="My copy")
print(result.entity_id, result.entity_type)
```

`name` is optional; without it the request body holds only the workspace.

## Workflows

`WorkflowRuns` (also reachable as `Workflows(core).runs`) runs a published
workflow and waits for its result:

```python
from cozeapi.workflows_runs import WorkflowRuns

runs = WorkflowRuns(core)
result = runs.create("workflow-id", {"city": "Paris"})
print(result.data, result.execute_id, result.token, result.cost)
```

`bot_id`, `ext`, `is_async` and `app_id` are optional keyword arguments;
only values that are set are sent.

`stream` returns a `StreamReader`, which is an iterator and a context
manager. `recv()` returns one event at a time and `None` once the stream
is exhausted.

```python
from cozeapi.workflows_runs import WorkflowEventType

with runs.stream("workflow-id", {"city": "Paris"}) as events:
    for event in events:
        if event.event == WorkflowEventType.MESSAGE:
            print(event.message.content, end="")
        elif event.event == WorkflowEventType.INTERRUPT:
            data = event.interrupt.interrupt_data
            print("paused at", event.interrupt.node_title)
        elif event.event == WorkflowEventType.ERROR:
            print("failed:", event.error.error_code, event.error.error_message)
        elif event.is_done():
            print("done")
```

An interrupted run continues with `resume`, passing back the event id and
interrupt type of the interrupt event:

```python
with runs.resume("workflow-id", data.event_id, "my answer", data.type) as events:
    for event in events:
        ...
```

The event bodies can also be decoded on their own with
`parse_workflow_event_error` and `parse_workflow_event_interrupt`.

Past runs are looked up by execute id, through
`WorkflowRunsHistories(core)` or `runs.histories`:

```python
histories = runs.histories.retrieve("workflow-id", "execute-id")
for history in histories.histories:
    print(history.execute_status, history.run_mode, history.output)
```

## Errors

Both error classes live in `cozeapi.request`.

- `CozeError` is raised when the API answers with a non-zero business
  `code`; it carries `code`, `message` and `log_id`. It is also raised
  for a non-200 status whose body is not a JSON object, with the HTTP
  status as `code` and the body text as `message`.
- `AuthError` is raised for a non-200 status with a JSON error body; it
  carries `code`, `error_message`, `http_code` and `log_id`.

A 200 response whose body is not valid JSON raises `ValueError`; network
failures surface as the `httpx` exceptions.

## Logging

`cozeapi.logger` holds a package-wide `LevelLogger` that writes
timestamped lines to standard error at `LogLevel.INFO` and above. Change
the threshold with `set_level`, swap the underlying logger (any object
with a `log(level, message, *args)` method) with `set_logger`, and get
it with `get_logger`.

## Helpers

`cozeapi.utils` has `generate_random_string`, `bytes_to_hex`,
`must_to_json`, and the `auth_context()` context manager with its
companion `is_auth_context()`.

## What it does not do

There is no single client object that bundles the services, no helper
for obtaining or refreshing access tokens, no chat or conversation
endpoints, no workspace listing or paging, and no async interface.