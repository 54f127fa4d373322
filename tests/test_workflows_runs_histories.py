import httpx
import pytest

from cozeapi.request import AuthError, Core
from cozeapi.workflows_runs_histories import (
    WorkflowExecuteStatus,
    WorkflowRunHistory,
    WorkflowRunMode,
    WorkflowRunsHistories,
)

BASE_URL = "https://api.coze.com"


def _histories(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return WorkflowRunsHistories(Core(client, BASE_URL))


def _json_response(status, payload):
    return httpx.Response(status, json=payload, headers={"X-Tt-Logid": "test_log_id"})


def test_retrieve_success():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        return _json_response(
            200,
            {
                "code": 0,
                "msg": "",
                "data": [
                    {
                        "execute_id": "exec1",
                        "execute_status": "Success",
                        "bot_id": "bot1",
                        "connector_id": "1024",
                        "connector_uid": "user1",
                        "run_mode": 1,
                        "logid": "log1",
                        "create_time": 1234567890,
                        "update_time": 1234567891,
                        "output": '{"result": "success"}',
                        "error_code": "0",
                        "error_message": "",
                        "debug_url": "https://debug.example.com",
                    }
                ],
            },
        )

    resp = _histories(handler).retrieve("workflow1", "exec1")

    assert seen == {"method": "GET", "path": "/v1/workflows/workflow1/run_histories/exec1"}
    assert resp.log_id == "test_log_id"
    assert len(resp.histories) == 1
    history = resp.histories[0]
    assert history.execute_id == "exec1"
    assert history.execute_status is WorkflowExecuteStatus.SUCCESS
    assert history.bot_id == "bot1"
    assert history.connector_id == "1024"
    assert history.connector_uid == "user1"
    assert history.run_mode is WorkflowRunMode.STREAMING
    assert history.log_id == "log1"
    assert history.create_time == 1234567890
    assert history.update_time == 1234567891
    assert history.output == '{"result": "success"}'
    assert history.error_code == "0"
    assert history.error_message == ""
    assert history.debug_url == "https://debug.example.com"


def test_retrieve_error():
    histories = _histories(lambda request: _json_response(400, {"code": 0, "msg": ""}))
    with pytest.raises(AuthError) as info:
        histories.retrieve("invalid_workflow", "invalid_exec")
    assert info.value.http_code == 400


def test_retrieve_without_data():
    resp = _histories(lambda request: _json_response(200, {"code": 0})).retrieve("w", "e")
    assert resp.histories == []


def test_retrieve_defaults_for_missing_fields():
    def handler(request):
        return _json_response(200, {"code": 0, "data": [{"execute_id": "exec2"}]})

    resp = _histories(handler).retrieve("w", "exec2")
    assert resp.histories == [WorkflowRunHistory(execute_id="exec2")]


def test_run_mode_values():
    assert WorkflowRunMode(0) is WorkflowRunMode.SYNCHRONOUS
    assert WorkflowRunMode(1) is WorkflowRunMode.STREAMING
    assert WorkflowRunMode(2) is WorkflowRunMode.ASYNCHRONOUS


def test_execute_status_values():
    assert WorkflowExecuteStatus("Success") is WorkflowExecuteStatus.SUCCESS
    assert WorkflowExecuteStatus("Running") is WorkflowExecuteStatus.RUNNING
    assert WorkflowExecuteStatus("Fail") is WorkflowExecuteStatus.FAIL