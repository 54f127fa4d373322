import io
import json

import httpx
import pytest

from cozeapi.request import (
    AuthError,
    Core,
    CozeError,
    HTTPResponse,
    check_http_response,
    pack_response,
)
from cozeapi.user_agent import client_user_agent, user_agent

BASE_URL = "https://api.test.com"


def make_core(handler):
    return Core(httpx.Client(transport=httpx.MockTransport(handler)), BASE_URL)


def json_response(payload, status=200, log_id="test-log-id", **extra):
    return httpx.Response(status, json=payload, headers={"X-Tt-Logid": log_id, **extra})


def test_request_success():
    seen = {}

    def handler(request):
        seen["request"] = request
        return json_response({"code": 0, "msg": "", "data": {"name": "test"}})

    core = make_core(handler)
    payload, http_response = core.request(
        "GET", "/test", {"test": "test", "data": "data"}, params={"test": "data"}
    )
    assert payload["code"] == 0
    assert payload["data"]["name"] == "test"
    assert http_response.log_id() == "test-log-id"

    request = seen["request"]
    assert request.method == "GET"
    assert request.url.path == "/test"
    assert request.url.params["test"] == "data"
    assert json.loads(request.content) == {"test": "test", "data": "data"}
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["User-Agent"] == user_agent()
    assert request.headers["X-Coze-Client-User-Agent"] == client_user_agent()


def test_request_http_error():
    def handler(request):
        raise httpx.ConnectError("network error", request=request)

    with pytest.raises(httpx.ConnectError, match="network error"):
        make_core(handler).request("GET", "/test")


def test_request_business_error():
    def handler(request):
        return json_response({"code": 1001, "msg": "business error", "data": {"name": ""}})

    with pytest.raises(CozeError) as info:
        make_core(handler).request("GET", "/test")
    assert info.value.code == 1001
    assert info.value.message == "business error"
    assert info.value.log_id == "test-log-id"


def test_request_auth_error():
    def handler(request):
        return json_response(
            {"error_code": "invalid_token", "error_message": "Token is invalid"}, status=401
        )

    with pytest.raises(AuthError) as info:
        make_core(handler).request("GET", "/test")
    assert info.value.code == "invalid_token"
    assert info.value.error_message == "Token is invalid"
    assert info.value.http_code == 401
    assert info.value.log_id == "test-log-id"


def test_request_non_json_error_body():
    def handler(request):
        return httpx.Response(502, text="bad gateway", headers={"X-Tt-Logid": "lid"})

    with pytest.raises(CozeError) as info:
        make_core(handler).request("GET", "/test")
    assert info.value.code == 502
    assert "bad gateway" in info.value.message
    assert info.value.log_id == "lid"


def test_upload_file_success():
    seen = {}

    def handler(request):
        seen["request"] = request
        return json_response({"code": 0, "data": {"name": "uploaded.txt"}})

    core = make_core(handler)
    payload, http_response = core.upload_file(
        "/upload",
        io.BytesIO(b"test file content"),
        "test.txt",
        {"field1": "value1", "field2": "value2"},
        headers={"test": "header-value"},
    )
    assert payload["code"] == 0
    assert payload["data"]["name"] == "uploaded.txt"
    assert http_response.log_id() == "test-log-id"

    request = seen["request"]
    assert request.method == "POST"
    assert request.url.path == "/upload"
    assert request.headers["test"] == "header-value"
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    body = request.content
    assert b"test file content" in body
    assert b'filename="test.txt"' in body
    assert b'name="field1"' in body and b"value1" in body
    assert b'name="field2"' in body and b"value2" in body


def test_upload_file_transport_error():
    def handler(request):
        raise httpx.ConnectError("upload failed", request=request)

    with pytest.raises(httpx.ConnectError, match="upload failed"):
        make_core(handler).upload_file("/upload", b"test", "test.txt", None)


def test_upload_file_business_error():
    def handler(request):
        return json_response({"code": 1002, "msg": "upload business error"})

    with pytest.raises(CozeError) as info:
        make_core(handler).upload_file("/upload", io.BytesIO(b"test"), "test.txt", None)
    assert info.value.code == 1002
    assert info.value.message == "upload business error"


def test_headers_and_params_options():
    seen = {}

    def handler(request):
        seen["request"] = request
        return json_response({"code": 0, "data": "ok"})

    payload, http_response = make_core(handler).request(
        "GET", "/test", headers={"X-Test": "test-value"}, params={"param": "value"}
    )
    assert payload == {"code": 0, "data": "ok"}
    assert http_response.log_id() == "test-log-id"
    assert seen["request"].headers["X-Test"] == "test-value"
    assert seen["request"].url.params["param"] == "value"
    assert seen["request"].content == b""


def test_core_keeps_custom_client():
    client = httpx.Client()
    core = Core(client, BASE_URL)
    assert core.http_client is client
    assert core.base_url == BASE_URL


def test_core_creates_default_client():
    core = Core(None, BASE_URL)
    assert isinstance(core.http_client, httpx.Client)
    assert core.http_client.timeout.read == 5.0


def test_stream_request_json_error():
    def handler(request):
        return json_response(
            {"code": 100, "msg": "Invalid workflow ID"},
            log_id="test_log_id",
        )

    with pytest.raises(CozeError) as info:
        make_core(handler).stream_request("POST", "/v1/workflows/chat", {"workflow_id": "w"})
    assert info.value.code == 100
    assert info.value.message == "Invalid workflow ID"
    assert info.value.log_id == "test_log_id"


def test_stream_request_returns_stream():
    def handler(request):
        return httpx.Response(200, content=b"event: done\ndata: {}\n")

    response = make_core(handler).stream_request("POST", "/stream")
    assert response.read() == b"event: done\ndata: {}\n"


def test_pack_response_invalid_json():
    response = httpx.Response(200, content=b"not json")
    with pytest.raises(ValueError):
        pack_response(response)


def test_pack_response_returns_payload():
    response = httpx.Response(200, json={"code": 0, "data": [1, 2]})
    assert pack_response(response) == {"code": 0, "data": [1, 2]}


def test_check_http_response_rejects_non_200():
    response = httpx.Response(400, json={"code": 0, "msg": ""})
    with pytest.raises(AuthError) as info:
        check_http_response(response)
    assert info.value.http_code == 400
    assert info.value.code == ""


def test_http_response_log_id():
    assert HTTPResponse({"X-Tt-Logid": "abc"}).log_id() == "abc"
    assert HTTPResponse({}).log_id() == ""