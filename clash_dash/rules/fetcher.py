"""Fetch the custom rule list from a router over LuCI RPC."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Optional

import httpx

from clash_dash.constants import OPENCLASH_CUSTOM_RULES_PATH
from clash_dash.errors import AuthError, ServerError, ValidationError
from clash_dash.luci.client import LuciRpcClient, base_url_for
from clash_dash.luci.models import Err
from clash_dash.rules.models import Rule
from clash_dash.rules.parser import parse_rules_text
from clash_dash.servers.models import ServerConfig

logger = logging.getLogger(__name__)


class FetchState(str, Enum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    FETCHING_RULES = "fetching_rules"
    PARSED = "parsed"
    FAILED = "failed"


def read_file_command(path: str) -> str:
    return f"cat {path}"


class RuleListFetcher:
    """Run the login-then-exec sequence and keep the last good rule list.

    ``rules`` is only replaced when a fetch succeeds. While a fetch is in
    flight, further ``fetch()`` calls wait for it instead of starting another.
    """

    def __init__(
        self,
        client: LuciRpcClient,
        username: str,
        password: str,
        rules_path: str = OPENCLASH_CUSTOM_RULES_PATH,
    ) -> None:
        self._client = client
        self._username = username
        self._password = password
        self._command = read_file_command(rules_path)
        self._inflight: Optional[asyncio.Task] = None
        self.state = FetchState.IDLE
        self.rules: list[Rule] = []
        self.error: Optional[str] = None

    @property
    def is_fetching(self) -> bool:
        return self._inflight is not None

    async def fetch(self) -> list[Rule]:
        if self._inflight is not None:
            logger.debug("fetch already in flight, joining it")
            return await asyncio.shield(self._inflight)

        task = asyncio.ensure_future(self._run())
        self._inflight = task
        try:
            return await task
        finally:
            self._inflight = None

    async def _run(self) -> list[Rule]:
        try:
            self._set_state(FetchState.AUTHENTICATING)
            login = await self._client.login(self._username, self._password)
            if isinstance(login, Err):
                raise AuthError(login.message)

            self._set_state(FetchState.FETCHING_RULES)
            output = await self._client.exec(login.value, self._command)
            if isinstance(output, Err):
                raise ServerError(output.message)

            rules = parse_rules_text(output.value)
        except BaseException as exc:
            self.error = str(exc) or type(exc).__name__
            self._set_state(FetchState.FAILED)
            raise

        self.rules = rules
        self.error = None
        self._set_state(FetchState.PARSED)
        logger.debug("parsed %d rules", len(rules))
        return rules

    def _set_state(self, state: FetchState) -> None:
        logger.debug("rule fetch: %s -> %s", self.state.value, state.value)
        self.state = state


async def fetch_server_rules(
    server: ServerConfig,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> list[Rule]:
    openwrt = server.openwrt
    if openwrt is None or not openwrt.username or not openwrt.password:
        raise ValidationError(f"OpenWrt username or password not set for {server.name}")
    rules_path = openwrt.luci_package.custom_rules_path
    if rules_path is None:
        raise ValidationError(
            f"Custom rules are not supported for {openwrt.luci_package.value} servers"
        )

    base_url = base_url_for(openwrt.host, openwrt.port, openwrt.use_ssl)
    async with LuciRpcClient(base_url, transport=transport) as client:
        fetcher = RuleListFetcher(
            client, openwrt.username, openwrt.password, rules_path=rules_path
        )
        return await fetcher.fetch()


async def verify_openwrt_login(
    server: ServerConfig,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    openwrt = server.openwrt
    if openwrt is None:
        raise ValidationError(f"Server {server.name} has no OpenWrt control configured")
    base_url = base_url_for(openwrt.host, openwrt.port, openwrt.use_ssl)
    async with LuciRpcClient(base_url, transport=transport) as client:
        login = await client.login(openwrt.username, openwrt.password)
    if isinstance(login, Err):
        raise AuthError(login.message)
