"""
Payload guard ASGI middleware.

Wraps every HTTP request/response cycle:

- Inbound: JSON request bodies are sanitized before the route handler sees
  them, through the route's request shape or, by default, by dropping
  sensitive top-level keys.
- Outbound: successful JSON responses of routes with a registered response
  shape are filtered before they reach the wire.
- Monitoring: each completed cycle is recorded with the status actually sent
  and the real elapsed latency.

Filtering never turns a response into an error. Bodies that cannot be parsed
pass through untouched.
"""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from starlette.datastructures import Headers, MutableHeaders
from starlette.middleware import Middleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from payloadguard.logging import RequestLogContext, get_logger, with_log_context
from payloadguard.middleware.config import GuardConfig
from payloadguard.middleware.routes import RouteRegistry, RouteShapes
from payloadguard.monitor.log import MonitorLog
from payloadguard.monitor.models import MonitorEntry
from payloadguard.policy.sensitive import SensitiveFieldPolicy
from payloadguard.shape.descriptor import ArrayOf, Shape
from payloadguard.shape.engine import apply_shape, removed_keys, strip_sensitive

logger = get_logger(__name__)

# Methods whose request bodies are sanitized
BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

REQUEST_ID_HEADER = "x-request-id"


def _is_json(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _encode(value: Any) -> bytes:
    """
    Encode JSON compactly, like Starlette's JSONResponse.

    Non-finite floats are written back as the NaN/Infinity literals that
    json.loads accepted on the way in.
    """
    return json.dumps(
        value,
        ensure_ascii=False,
        allow_nan=True,
        indent=None,
        separators=(",", ":"),
    ).encode("utf-8")


def _empty_body(spec: Any) -> bytes:
    """The filtered form of a value with nothing allowed through."""
    match spec:
        case ArrayOf():
            return b"[]"
        case Shape():
            return b"{}"
    return b"null"


class PayloadGuardMiddleware:
    """
    ASGI middleware that sanitizes JSON payloads and records observations.

    Usage:
        app = FastAPI()
        monitor = MonitorLog()
        routes = RouteRegistry()
        routes.register("GET", "/api/employees", response=array(employee_shape))

        app.add_middleware(
            PayloadGuardMiddleware,
            config=GuardConfig(verbose=True),
            routes=routes,
            monitor=monitor,
        )
    """

    def __init__(
        self,
        app: ASGIApp,
        config: GuardConfig | Mapping[str, Any] | None = None,
        *,
        routes: RouteRegistry | None = None,
        monitor: MonitorLog | None = None,
        policy: SensitiveFieldPolicy | None = None,
    ) -> None:
        """
        Initialize the middleware.

        Args:
            app: The wrapped ASGI application
            config: GuardConfig or a mapping of option names
            routes: Per-route request/response shapes
            monitor: Log that receives one entry per completed cycle
            policy: Sensitive-field policy (defaults to the process-wide one)
        """
        self.app = app
        if config is None:
            config = GuardConfig()
        elif not isinstance(config, GuardConfig):
            config = GuardConfig.from_mapping(config)
        self.config = config
        self.routes = routes if routes is not None else RouteRegistry()
        self.monitor = monitor
        self.policy = policy

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope["method"]
        path = scope["path"]
        route = self.routes.match(method, path)
        request_headers = Headers(scope=scope)
        request_id = request_headers.get(REQUEST_ID_HEADER) or str(uuid4())

        status: int | None = None
        start_message: Message | None = None
        chunks: list[bytes] = []

        async def send_wrapper(message: Message) -> None:
            nonlocal status, start_message

            if message["type"] == "http.response.start":
                if self._should_filter_response(route, message):
                    start_message = message
                    return
                await send(message)
                status = message["status"]
                return

            if message["type"] == "http.response.body" and start_message is not None:
                chunks.append(message.get("body", b""))
                if message.get("more_body", False):
                    return
                body = self._filter_response(b"".join(chunks), route)
                headers = MutableHeaders(raw=list(start_message["headers"]))
                headers["content-length"] = str(len(body))
                await send({**start_message, "headers": headers.raw})
                # a buffered start only counts once it reaches the client
                status = start_message["status"]
                await send({"type": "http.response.body", "body": body, "more_body": False})
                return

            await send(message)

        with with_log_context(
            RequestLogContext(request_id=request_id, method=method, path=path)
        ):
            try:
                if (
                    self.config.sanitize_inbound
                    and method in BODY_METHODS
                    and _is_json(request_headers.get("content-type"))
                ):
                    scope, receive = await self._sanitize_request(scope, receive, route)

                await self.app(scope, receive, send_wrapper)
            except Exception:
                if status is None:
                    status = 500
                raise
            finally:
                latency_ms = (time.perf_counter() - start_time) * 1000
                self._record(method, path, status if status is not None else 500, latency_ms)

    async def _sanitize_request(
        self,
        scope: Scope,
        receive: Receive,
        route: RouteShapes | None,
    ) -> tuple[Scope, Receive]:
        """Buffer the request body and replay a sanitized copy."""
        messages: list[Message] = []
        body = b""
        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                # client went away mid-body; hand everything back untouched
                return scope, _replay(messages, receive)
            body += message.get("body", b"")
            if not message.get("more_body", False):
                break

        original = {"type": "http.request", "body": body, "more_body": False}
        if not body:
            return scope, _replay([original], receive)

        try:
            payload = json.loads(body)
        except (ValueError, RecursionError):
            logger.debug("Request body is not valid JSON, passing through")
            return scope, _replay([original], receive)

        if route is not None and route.request is not None:
            sanitized = apply_shape(route.request, payload, policy=self.policy)
        else:
            sanitized = strip_sensitive(payload, policy=self.policy)

        if self.config.verbose:
            stripped = removed_keys(payload, sanitized)
            if stripped:
                logger.info("Stripped request fields", fields=stripped)

        try:
            new_body = _encode(sanitized)
        except RecursionError:
            logger.warning("Sanitized request body is too deep to encode, passing through")
            return scope, _replay([original], receive)

        scope = dict(scope)
        headers = MutableHeaders(scope=scope)
        headers["content-length"] = str(len(new_body))

        return scope, _replay(
            [{"type": "http.request", "body": new_body, "more_body": False}], receive
        )

    def _should_filter_response(self, route: RouteShapes | None, message: Message) -> bool:
        if not self.config.auto_filter_outbound:
            return False
        if route is None or route.response is None:
            return False
        if not 200 <= message["status"] < 300:
            return False
        headers = Headers(raw=message.get("headers", []))
        return _is_json(headers.get("content-type"))

    def _filter_response(self, body: bytes, route: RouteShapes | None) -> bytes:
        """Filter a buffered JSON body through the route's response shape."""
        if route is None or route.response is None:
            return body

        try:
            payload = json.loads(body)
        except (ValueError, RecursionError):
            logger.warning("Response body is not valid JSON, sending unfiltered")
            return body

        filtered = apply_shape(route.response, payload, policy=self.policy)

        if self.config.verbose:
            stripped = removed_keys(payload, filtered)
            if stripped:
                logger.info("Stripped response fields", fields=stripped)

        try:
            return _encode(filtered)
        except (ValueError, RecursionError):
            logger.warning("Filtered response body could not be encoded, sending it empty")
            return _empty_body(route.response)

    def _record(self, method: str, path: str, status: int, latency_ms: float) -> None:
        logger.debug("Request completed", status=status, latency_ms=round(latency_ms, 3))
        if self.monitor is None or path in self.config.exclude_paths:
            return
        self.monitor.record(
            MonitorEntry.create(
                method=method,
                path=path,
                status=status,
                latency_ms=latency_ms,
            )
        )


def _replay(messages: list[Message], receive: Receive) -> Receive:
    """Build a receive callable that yields buffered messages first."""
    pending = list(messages)

    async def replay() -> Message:
        if pending:
            return pending.pop(0)
        return await receive()

    return replay


def guard_middleware(
    config: GuardConfig | Mapping[str, Any] | None = None,
    *,
    routes: RouteRegistry | None = None,
    monitor: MonitorLog | None = None,
    policy: SensitiveFieldPolicy | None = None,
) -> Middleware:
    """
    Create a middleware entry for ``FastAPI(middleware=[...])``.

    Example:
        app = FastAPI(middleware=[guard_middleware({"sanitizeInbound": True}, monitor=log)])
    """
    return Middleware(
        PayloadGuardMiddleware,
        config=config,
        routes=routes,
        monitor=monitor,
        policy=policy,
    )
