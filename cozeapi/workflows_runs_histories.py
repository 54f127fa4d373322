"""History records of workflow runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Mapping

from .request import Core


class WorkflowRunMode(IntEnum):
    """How a workflow was run."""

    SYNCHRONOUS = 0
    STREAMING = 1
    ASYNCHRONOUS = 2


class WorkflowExecuteStatus(str, Enum):
    """Execution status of a workflow run."""

    SUCCESS = "Success"
    RUNNING = "Running"
    FAIL = "Fail"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _run_mode(value: Any) -> WorkflowRunMode | int:
    number = int(value or 0)
    try:
        return WorkflowRunMode(number)
    except ValueError:
        return number


def _status(value: Any) -> WorkflowExecuteStatus | str:
    text = _text(value)
    try:
        return WorkflowExecuteStatus(text)
    except ValueError:
        return text


@dataclass
class WorkflowRunHistory:
    """One recorded execution of a workflow."""

    execute_id: str = ""
    execute_status: WorkflowExecuteStatus | str = ""
    bot_id: str = ""
    connector_id: str = ""
    connector_uid: str = ""
    run_mode: WorkflowRunMode | int = WorkflowRunMode.SYNCHRONOUS
    log_id: str = ""
    create_time: int = 0
    update_time: int = 0
    output: str = ""
    error_code: str = ""
    error_message: str = ""
    debug_url: str = ""

    @classmethod
    def _from_payload(cls, data: Mapping[str, Any]) -> WorkflowRunHistory:
        return cls(
            execute_id=_text(data.get("execute_id")),
            execute_status=_status(data.get("execute_status")),
            bot_id=_text(data.get("bot_id")),
            connector_id=_text(data.get("connector_id")),
            connector_uid=_text(data.get("connector_uid")),
            run_mode=_run_mode(data.get("run_mode")),
            log_id=_text(data.get("logid")),
            create_time=int(data.get("create_time") or 0),
            update_time=int(data.get("update_time") or 0),
            output=_text(data.get("output")),
            error_code=_text(data.get("error_code")),
            error_message=_text(data.get("error_message")),
            debug_url=_text(data.get("debug_url")),
        )


@dataclass
class WorkflowRunHistories:
    """The history records returned for one execution."""

    histories: list[WorkflowRunHistory] = field(default_factory=list)
    log_id: str = field(default="", compare=False)


class WorkflowRunsHistories:
    """The run_histories endpoint of workflows."""

    def __init__(self, core: Core) -> None:
        self._core = core

    def retrieve(self, workflow_id: str, execute_id: str) -> WorkflowRunHistories:
        """Return the history of the execution execute_id of workflow_id."""
        payload, response = self._core.request(
            "GET", f"/v1/workflows/{workflow_id}/run_histories/{execute_id}"
        )
        items = payload.get("data") or []
        return WorkflowRunHistories(
            histories=[WorkflowRunHistory._from_payload(item) for item in items if item],
            log_id=response.log_id(),
        )