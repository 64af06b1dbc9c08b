"""
Async client for the OpenWrt LuCI JSON-RPC API.

Only the two calls needed to read router files are covered:

- ``auth``: ``login`` with a username and password, returning a session token.
- ``sys``: ``exec`` of a shell command, authorized by the token as a query
  parameter.

Usage example:

    async with LuciRpcClient(base_url_for("192.168.1.1", 80)) as client:
        login = await client.login("root", "password")
        if isinstance(login, Ok):
            result = await client.exec(login.value, "uptime")
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from clash_dash.constants import (
    DEFAULT_LUCI_PORT,
    DEFAULT_TIMEOUT_SECONDS,
    LUCI_AUTH_PATH,
    LUCI_SYS_PATH,
)
from clash_dash.errors import NetworkError
from clash_dash.luci.models import AuthResult, Err, ExecResult, Ok
from clash_dash.utils import strip_scheme

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "no token returned"


def base_url_for(host: str, port: int | str | None = None, use_ssl: bool = False) -> str:
    scheme = "https" if use_ssl else "http"
    return f"{scheme}://{strip_scheme(host)}:{port or DEFAULT_LUCI_PORT}"


class LuciRpcClient:
    """Async client for LuCI RPC.

    Parameters
    - base_url: scheme, host and port of the router, e.g. "http://192.168.1.1:80".
    - timeout: default request timeout in seconds.
    - verify_ssl: whether to verify TLS certificates for https base URLs.
    - transport: optional httpx transport, used by tests to fake the router.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
        verify_ssl: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Accept": "application/json", "User-Agent": "clash-dash"},
            timeout=timeout,
            verify=verify_ssl,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "LuciRpcClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def login(self, username: str, password: str) -> AuthResult:
        """POST /cgi-bin/luci/rpc/auth"""
        payload = {"id": 1, "method": "login", "params": [username, password]}
        data = await self._post(LUCI_AUTH_PATH, payload)
        token = data.get("result")
        if isinstance(token, str) and token:
            return Ok(token)
        error = data.get("error")
        if error:
            return Err(str(error))
        return Err(NO_TOKEN_MESSAGE)

    async def exec(self, token: str, command: str) -> ExecResult:
        """POST /cgi-bin/luci/rpc/sys?auth=<token>"""
        payload = {"method": "exec", "params": [command]}
        data = await self._post(LUCI_SYS_PATH, payload, params={"auth": token})
        error = data.get("error")
        if error is not None:
            return Err(str(error))
        result = data.get("result")
        if not isinstance(result, str):
            raise NetworkError("exec response has no text result")
        return Ok(result)

    async def _post(
        self,
        path: str,
        payload: dict[str, Any],
        params: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        logger.debug("POST %s%s", self.base_url, path)
        try:
            response = await self._client.post(path, json=payload, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NetworkError(f"HTTP {exc.response.status_code} from {path}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"{type(exc).__name__}: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise NetworkError(f"invalid JSON from {path}") from exc
        if not isinstance(data, dict):
            raise NetworkError(f"unexpected response shape from {path}")
        return data
