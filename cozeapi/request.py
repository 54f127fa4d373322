"""HTTP transport: request building, error mapping and response decoding."""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx

from .logger import get_logger
from .user_agent import apply_user_agent

LOG_ID_HEADER = "X-Tt-Logid"
DEFAULT_TIMEOUT = 5.0


class CozeError(Exception):
    """An API call that the server answered with a non-zero business code."""

    def __init__(self, code: int, message: str, log_id: str = "") -> None:
        super().__init__(f"code={code}, message={message}, logid={log_id}")
        self.code = code
        self.message = message
        self.log_id = log_id


class AuthError(Exception):
    """An API call rejected with a non-200 HTTP status and an error document."""

    def __init__(self, code: str, error_message: str, http_code: int, log_id: str = "") -> None:
        super().__init__(
            f"code={code}, message={error_message}, http_code={http_code}, logid={log_id}"
        )
        self.code = code
        self.error_message = error_message
        self.http_code = http_code
        self.log_id = log_id


class HTTPResponse:
    """Headers of an HTTP response, kept for tracing."""

    def __init__(self, headers: Mapping[str, str]) -> None:
        self.headers = httpx.Headers(headers)

    def log_id(self) -> str:
        return self.headers.get(LOG_ID_HEADER, "")


def check_http_response(response: httpx.Response) -> None:
    """Raise if the response status is not 200."""
    if response.status_code == httpx.codes.OK:
        return
    log_id = HTTPResponse(response.headers).log_id()
    text = response.read().decode("utf-8", "replace")
    try:
        payload = json.loads(text)
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        get_logger().error("unmarshal response body: %s", text)
        raise CozeError(response.status_code, text, log_id)
    raise AuthError(
        str(payload.get("error_code") or ""),
        str(payload.get("error_message") or ""),
        response.status_code,
        log_id,
    )


def pack_response(response: httpx.Response) -> Any:
    """Check the response, decode its JSON body and raise on a non-zero code."""
    check_http_response(response)
    body = response.read()
    log_id = HTTPResponse(response.headers).log_id()
    try:
        payload = json.loads(body)
    except ValueError:
        get_logger().error(
            "unmarshal response body: %s", body.decode("utf-8", "replace")
        )
        raise
    if isinstance(payload, dict):
        code = payload.get("code") or 0
        if code != 0:
            get_logger().warn(
                "request unsuccessful: %s, log_id:%s",
                body.decode("utf-8", "replace"),
                log_id,
            )
            raise CozeError(code, str(payload.get("msg") or ""), log_id)
    return payload


class Core:
    """Sends requests to the API below base_url."""

    def __init__(self, http_client: httpx.Client | None, base_url: str) -> None:
        self.http_client = (
            http_client if http_client is not None else httpx.Client(timeout=DEFAULT_TIMEOUT)
        )
        self.base_url = base_url

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> tuple[Any, HTTPResponse]:
        """Send a JSON request; return the decoded body and the response headers."""
        response = self.raw_request(method, path, body, headers=headers, params=params)
        return pack_response(response), HTTPResponse(response.headers)

    def upload_file(
        self,
        path: str,
        file: Any,
        file_name: str,
        fields: Mapping[str, str] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> tuple[Any, HTTPResponse]:
        """POST file as multipart form data together with extra fields."""
        content = file if isinstance(file, (bytes, bytearray)) else file.read()
        if isinstance(content, str):
            content = content.encode("utf-8")
        request = self.http_client.build_request(
            "POST",
            self.base_url + path,
            files={"file": (file_name, bytes(content))},
            data=dict(fields or {}),
            headers=headers,
            params=params,
        )
        apply_user_agent(request.headers)
        response = self.http_client.send(request)
        return pack_response(response), HTTPResponse(response.headers)

    def raw_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request and return the unread response once its status is 200."""
        content = None if body is None else json.dumps(body).encode("utf-8")
        request_headers = httpx.Headers({"Content-Type": "application/json"})
        request_headers.update(headers or {})
        request = self.http_client.build_request(
            method,
            self.base_url + path,
            content=content,
            headers=request_headers,
            params=params,
        )
        apply_user_agent(request.headers)
        response = self.http_client.send(request, stream=True)
        check_http_response(response)
        return response

    def stream_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request whose answer is an event stream; raise on a JSON error body."""
        response = self.raw_request(method, path, body, headers=headers, params=params)
        if "application/json" in response.headers.get("Content-Type", ""):
            pack_response(response)
        return response