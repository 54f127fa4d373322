"""Running workflows, synchronously or as an event stream."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping

from .request import Core
from .stream_reader import StreamReader
from .workflows_runs_histories import WorkflowRunsHistories

_INT_RE = re.compile(r"[+-]?\d+")


class WorkflowEventType(str, Enum):
    """Kind of event in a streamed workflow run."""

    MESSAGE = "Message"
    ERROR = "Error"
    DONE = "Done"
    INTERRUPT = "Interrupt"


@dataclass
class WorkflowEventMessage:
    """Output message of a workflow node."""

    content: str = ""
    node_title: str = ""
    node_seq_id: str = ""
    node_is_finish: bool = False
    ext: dict[str, Any] | None = None


@dataclass
class WorkflowEventError:
    """An error reported while a workflow runs."""

    error_code: int = 0
    error_message: str = ""


@dataclass
class WorkflowEventInterruptData:
    """Identifies an interruption; passed back to resume the workflow."""

    event_id: str = ""
    type: int = 0


@dataclass
class WorkflowEventInterrupt:
    """The workflow stopped and waits to be resumed."""

    interrupt_data: WorkflowEventInterruptData | None = None
    node_title: str = ""


@dataclass
class WorkflowEvent:
    """One event of a streamed workflow run."""

    id: int = 0
    event: WorkflowEventType = WorkflowEventType.MESSAGE
    message: WorkflowEventMessage | None = None
    interrupt: WorkflowEventInterrupt | None = None
    error: WorkflowEventError | None = None

    def is_done(self) -> bool:
        return self.event == WorkflowEventType.DONE


@dataclass
class RunWorkflowsResult:
    """Result of a non-streamed workflow run."""

    execute_id: str = ""
    data: str = ""
    debug_url: str = ""
    token: int = 0
    cost: str = ""
    log_id: str = field(default="", compare=False)


def _load_object(data: str) -> Mapping[str, Any]:
    payload = json.loads(data)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got: {data}")
    return payload


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _message(data: str) -> WorkflowEventMessage:
    payload = _load_object(data)
    ext = payload.get("ext")
    return WorkflowEventMessage(
        content=_text(payload.get("content")),
        node_title=_text(payload.get("node_title")),
        node_seq_id=_text(payload.get("node_seq_id")),
        node_is_finish=bool(payload.get("node_is_finish")),
        ext=dict(ext) if isinstance(ext, dict) else None,
    )


def parse_workflow_event_error(data: str) -> WorkflowEventError:
    """Decode the JSON body of an Error event."""
    payload = _load_object(data)
    return WorkflowEventError(
        error_code=int(payload.get("error_code") or 0),
        error_message=_text(payload.get("error_message")),
    )


def parse_workflow_event_interrupt(data: str) -> WorkflowEventInterrupt:
    """Decode the JSON body of an Interrupt event."""
    payload = _load_object(data)
    raw = payload.get("interrupt_data")
    interrupt_data = None
    if isinstance(raw, dict):
        interrupt_data = WorkflowEventInterruptData(
            event_id=_text(raw.get("event_id")),
            type=int(raw.get("type") or 0),
        )
    return WorkflowEventInterrupt(
        interrupt_data=interrupt_data,
        node_title=_text(payload.get("node_title")),
    )


def _build_event(event_id: int, kind: str, data: str) -> WorkflowEvent:
    if kind == WorkflowEventType.INTERRUPT.value:
        return WorkflowEvent(
            id=event_id,
            event=WorkflowEventType.INTERRUPT,
            interrupt=parse_workflow_event_interrupt(data),
        )
    if kind == WorkflowEventType.ERROR.value:
        return WorkflowEvent(
            id=event_id,
            event=WorkflowEventType.ERROR,
            error=parse_workflow_event_error(data),
        )
    if kind == WorkflowEventType.DONE.value:
        return WorkflowEvent(id=event_id, event=WorkflowEventType.DONE)
    return WorkflowEvent(id=event_id, event=WorkflowEventType.MESSAGE, message=_message(data))


def _next_line(lines: Iterator[str]) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise EOFError("event stream ended inside an event") from None


def parse_workflow_event(
    line: str, lines: Iterator[str]
) -> tuple[WorkflowEvent | None, bool]:
    """Parse an event starting at an "id:" line, reading its event and data lines.

    Lines that do not start an event yield (None, False).
    """
    if not line.startswith("id:"):
        return None, False
    raw_id = line[3:].strip()
    kind = _next_line(lines)[6:].strip()
    data = _next_line(lines)[5:].strip()
    event_id = int(raw_id) if _INT_RE.fullmatch(raw_id) else 0
    event = _build_event(event_id, kind, data)
    return event, event.is_done()


def _run_body(
    workflow_id: str,
    parameters: Mapping[str, Any] | None,
    bot_id: str,
    ext: Mapping[str, str] | None,
    is_async: bool,
    app_id: str,
) -> dict[str, Any]:
    body: dict[str, Any] = {"workflow_id": workflow_id}
    if parameters:
        body["parameters"] = dict(parameters)
    if bot_id:
        body["bot_id"] = bot_id
    if ext:
        body["ext"] = dict(ext)
    if is_async:
        body["is_async"] = True
    if app_id:
        body["app_id"] = app_id
    return body


class WorkflowRuns:
    """The workflow run endpoints."""

    def __init__(self, core: Core) -> None:
        self._core = core
        self.histories = WorkflowRunsHistories(core)

    def create(
        self,
        workflow_id: str,
        parameters: Mapping[str, Any] | None = None,
        bot_id: str = "",
        ext: Mapping[str, str] | None = None,
        is_async: bool = False,
        app_id: str = "",
    ) -> RunWorkflowsResult:
        """Run a published workflow and return its result."""
        payload, response = self._core.request(
            "POST",
            "/v1/workflow/run",
            _run_body(workflow_id, parameters, bot_id, ext, is_async, app_id),
        )
        return RunWorkflowsResult(
            execute_id=_text(payload.get("execute_id")),
            data=_text(payload.get("data")),
            debug_url=_text(payload.get("debug_url")),
            token=int(payload.get("token") or 0),
            cost=_text(payload.get("cost")),
            log_id=response.log_id(),
        )

    def stream(
        self,
        workflow_id: str,
        parameters: Mapping[str, Any] | None = None,
        bot_id: str = "",
        ext: Mapping[str, str] | None = None,
        is_async: bool = False,
        app_id: str = "",
    ) -> StreamReader[WorkflowEvent]:
        """Run a published workflow and stream its events."""
        response = self._core.stream_request(
            "POST",
            "/v1/workflow/stream_run",
            _run_body(workflow_id, parameters, bot_id, ext, is_async, app_id),
        )
        return StreamReader(response, parse_workflow_event)

    def resume(
        self, workflow_id: str, event_id: str, resume_data: str, interrupt_type: int
    ) -> StreamReader[WorkflowEvent]:
        """Resume an interrupted workflow and stream its further events."""
        response = self._core.stream_request(
            "POST",
            "/v1/workflow/stream_resume",
            {
                "workflow_id": workflow_id,
                "event_id": event_id,
                "resume_data": resume_data,
                "interrupt_type": interrupt_type,
            },
        )
        return StreamReader(response, parse_workflow_event)


class Workflows:
    """Entry point to the workflow endpoints."""

    def __init__(self, core: Core) -> None:
        self.runs = WorkflowRuns(core)