"""
invokerpc — JSON-RPC Server

Exposes contract invocation over JSON-RPC 2.0 on HTTP POST, single and
batch.  Arguments arrive as loosely typed JSON and are bound against the
contract's registered parameter schema before anything is signed.

Methods:
  invokecontractas  [script_hash, private_key_hex, args?] -> {"txid": hex | null}
  decodeparameters  [script_hash, args?]                  -> [{type, value}, ...]
  getaddress        [private_key_hex]                     -> {wif, address, privkey, pubkey}
  listmethods       []                                    -> [name, ...]

Every failure is an ``InvokeRPCError`` and is reported with its own code,
so decode errors keep their -12xx codes on the wire.

Usage:
    server = RPCServer(RPCConfig(port=10332))
    await server.start()
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional, Sequence

from aiohttp import web

from .config import RPCConfig
from .encoding import to_envelope
from .errors import (
    InternalRPCError,
    InvalidParamsError,
    InvalidRequestError,
    InvokeRPCError,
    MethodNotFoundError,
    RateLimitedError,
    RequestParseError,
)
from .invoker import Broadcaster, ContractInvoker, LocalBroadcaster
from .keys import KeyPair, derive
from .registry import ContractRegistry, InMemoryContractRegistry
from .types import UInt160

logger = logging.getLogger("invokerpc.rpc")

MAX_BATCH_SIZE = 100
JSONRPC_VERSION = "2.0"

_REQUIRED = object()


class RateLimiter:
    """Per-client sliding window.

    A client's timestamps are dropped once they age out of the window, and
    clients with nothing left in the window are forgotten.  Idle clients
    are swept at most once per window.
    """

    def __init__(self, max_requests: int = 100, window_seconds: float = 1.0):
        self.max_requests = max_requests
        self.window = window_seconds
        self._buckets: Dict[str, Deque[float]] = {}
        self._last_sweep = time.monotonic()

    def _expire(self, bucket: Deque[float], now: float) -> None:
        while bucket and now - bucket[0] >= self.window:
            bucket.popleft()

    def _sweep(self, now: float) -> None:
        for client in list(self._buckets):
            bucket = self._buckets[client]
            self._expire(bucket, now)
            if not bucket:
                del self._buckets[client]
        self._last_sweep = now

    def allow(self, client: str) -> bool:
        now = time.monotonic()
        if now - self._last_sweep >= self.window:
            self._sweep(now)

        bucket = self._buckets.get(client)
        if bucket is None:
            bucket = self._buckets[client] = deque()
        else:
            self._expire(bucket, now)

        if len(bucket) >= self.max_requests:
            return False
        bucket.append(now)
        return True

    def tracked(self) -> int:
        """Number of clients currently holding a bucket."""
        return len(self._buckets)

    def reset(self):
        self._buckets.clear()


@dataclass
class Endpoint:
    """A callable exposed under a JSON-RPC method name."""

    name: str
    handler: Callable[[Any], Any]
    summary: str = ""
    is_async: bool = field(init=False)

    def __post_init__(self):
        self.is_async = inspect.iscoroutinefunction(self.handler)

    async def call(self, params: Any) -> Any:
        if self.is_async:
            return await self.handler(params)
        return self.handler(params)


# ---------------------------------------------------------------------------
# Parameter access
# ---------------------------------------------------------------------------

def param_at(params: Any, index: int, name: str, default: Any = _REQUIRED) -> Any:
    """Positional parameter ``index``; object params are looked up by ``name``."""
    if isinstance(params, dict):
        if name in params:
            return params[name]
    elif isinstance(params, (list, tuple)):
        if index < len(params):
            return params[index]
    else:
        raise InvalidParamsError("params must be an array or an object")

    if default is _REQUIRED:
        raise InvalidParamsError(f"missing required parameter: {name}", {"position": index})
    return default


def parse_script_hash(value: Any) -> UInt160:
    try:
        return UInt160.parse(value)
    except (TypeError, ValueError) as e:
        raise InvalidParamsError(f"invalid script hash: {e}", {"script_hash": str(value)}) from None


# ---------------------------------------------------------------------------
# RPCServer
# ---------------------------------------------------------------------------

class RPCServer:
    """
    JSON-RPC 2.0 server for contract invocation.

    The contract registry and broadcaster are injected; by default an
    in-memory registry is seeded from ``config.contracts`` and calls are
    recorded by a ``LocalBroadcaster``.
    """

    def __init__(
        self,
        config: Optional[RPCConfig] = None,
        registry: Optional[ContractRegistry] = None,
        broadcaster: Optional[Broadcaster] = None,
    ):
        self.config = config or RPCConfig()
        if registry is None:
            registry = InMemoryContractRegistry(self.config.contracts)
        if broadcaster is None:
            broadcaster = LocalBroadcaster()
        self.contracts = registry
        self.invoker = ContractInvoker(registry, broadcaster)
        self.rate_limiter = RateLimiter(max_requests=self.config.rate_limit)
        self.endpoints: Dict[str, Endpoint] = {}

        self._runner: Optional[web.AppRunner] = None

        self.add_endpoint("invokecontractas", self.invoke_contract_as,
                          "Invoke a contract entry point signed with the given private key")
        self.add_endpoint("decodeparameters", self.decode_parameters,
                          "Bind arguments to a contract's parameter schema")
        self.add_endpoint("getaddress", self.get_address,
                          "Derive address and keys from a private key")
        self.add_endpoint("listmethods", self.list_methods, "List RPC methods")

    def add_endpoint(self, name: str, handler: Callable[[Any], Any], summary: str = "") -> None:
        self.endpoints[name] = Endpoint(name, handler, summary)

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    def invoke_contract_as(self, params) -> Dict[str, Any]:
        script_hash = parse_script_hash(param_at(params, 0, "script_hash"))
        key_pair = KeyPair.from_hex(param_at(params, 1, "private_key"))
        args = param_at(params, 2, "args", [])
        return {"txid": self.invoker.invoke(script_hash, key_pair, args)}

    def decode_parameters(self, params) -> List[Dict[str, Any]]:
        script_hash = parse_script_hash(param_at(params, 0, "script_hash"))
        args = param_at(params, 1, "args", [])
        return [to_envelope(p) for p in self.invoker.bind(script_hash, args)]

    def get_address(self, params) -> Dict[str, str]:
        key_pair = KeyPair.from_hex(param_at(params, 0, "private_key"))
        return derive(key_pair.private_key, self.config.address_version)

    def list_methods(self, params=None) -> List[str]:
        return sorted(self.endpoints)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def handle_request(self, body: Any) -> Optional[Dict[str, Any]]:
        """Answer one request object.  Notifications (no ``id``) yield ``None``."""
        if not isinstance(body, dict):
            return _failure(None, InvalidRequestError("Request must be an object"))

        req_id = body.get("id")
        try:
            result = await self._dispatch(body)
        except InvokeRPCError as e:
            logger.debug("RPC %s failed [%d]: %s", body.get("method"), e.code, e.message)
            reply = _failure(req_id, e)
        except Exception as e:
            logger.exception("RPC %s crashed", body.get("method"))
            reply = _failure(req_id, InternalRPCError(str(e)))
        else:
            reply = {"jsonrpc": JSONRPC_VERSION, "result": result, "id": req_id}

        if "id" not in body:
            return None
        return reply

    async def handle_batch(self, batch: Sequence[Any]) -> List[Dict[str, Any]]:
        replies = await asyncio.gather(*(self.handle_request(item) for item in batch))
        return [r for r in replies if r is not None]

    async def _dispatch(self, body: Dict[str, Any]) -> Any:
        if body.get("jsonrpc") != JSONRPC_VERSION:
            raise InvalidRequestError("jsonrpc must be '2.0'")
        method = body.get("method")
        if not method or not isinstance(method, str):
            raise InvalidRequestError("missing or invalid method")
        endpoint = self.endpoints.get(method)
        if endpoint is None:
            raise MethodNotFoundError(method)
        return await endpoint.call(body.get("params", []))

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def build_app(self) -> web.Application:
        app = web.Application(client_max_size=self.config.max_request_size)
        app.router.add_post("/", self._on_post)
        app.router.add_get("/", self._on_info)
        app.router.add_options("/", self._on_preflight)
        app.router.add_get("/health", self._on_health)
        return app

    def _cors_headers(self) -> Dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.config.cors_origins,
            "Access-Control-Allow-Headers": "Content-Type",
            "Access-Control-Allow-Methods": "POST, OPTIONS",
        }

    async def _on_post(self, request: web.Request) -> web.Response:
        headers = self._cors_headers()

        if not self.rate_limiter.allow(request.remote or "unknown"):
            return web.json_response(_failure(None, RateLimitedError()), status=429, headers=headers)

        try:
            body = await request.json()
        except ValueError:
            return web.json_response(_failure(None, RequestParseError()), headers=headers)

        if isinstance(body, list):
            if not body:
                err = InvalidRequestError("Empty batch")
            elif len(body) > MAX_BATCH_SIZE:
                err = InvalidRequestError(f"Batch too large (max {MAX_BATCH_SIZE})")
            else:
                return web.json_response(await self.handle_batch(body), headers=headers)
            return web.json_response(_failure(None, err), headers=headers)

        reply = await self.handle_request(body)
        if reply is None:
            return web.Response(status=204, headers=headers)
        return web.json_response(reply, headers=headers)

    async def _on_preflight(self, request: web.Request) -> web.Response:
        headers = self._cors_headers()
        headers["Access-Control-Max-Age"] = "86400"
        return web.Response(status=204, headers=headers)

    async def _on_health(self, request: web.Request) -> web.Response:
        return web.json_response({
            "status": "ok",
            "contracts": len(self.contracts) if hasattr(self.contracts, "__len__") else None,
            "rpc_methods": len(self.endpoints),
        })

    async def _on_info(self, request: web.Request) -> web.Response:
        return web.json_response({
            "jsonrpc": JSONRPC_VERSION,
            "server": "invokerpc",
            "methods": self.list_methods(),
        }, headers={"Access-Control-Allow-Origin": self.config.cors_origins})

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self):
        if self._runner is not None:
            return
        runner = web.AppRunner(self.build_app())
        await runner.setup()
        await web.TCPSite(runner, self.config.host, self.config.port).start()
        self._runner = runner
        logger.info("RPC server listening on http://%s:%d", self.config.host, self.config.port)

    async def stop(self):
        if self._runner is None:
            return
        runner, self._runner = self._runner, None
        await runner.cleanup()
        logger.info("RPC server stopped")

    @property
    def is_running(self) -> bool:
        return self._runner is not None


def _failure(req_id: Any, err: InvokeRPCError) -> Dict[str, Any]:
    return {"jsonrpc": JSONRPC_VERSION, "error": err.to_dict(), "id": req_id}
