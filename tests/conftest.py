import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from click.testing import CliRunner


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


SAMPLE_RULES_TEXT = (
    "script:\n"
    "  shortcuts: {}\n"
    "rules:\n"
    "- DOMAIN-SUFFIX,example.com,DIRECT\n"
    "##- DOMAIN,ads.com,REJECT#blocked\n"
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "clash-dash"


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    path = tmp_path / "openclash_custom_rules.list"
    path.write_text(SAMPLE_RULES_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def openwrt_server(config_root: Path, write_json) -> str:
    write_json(
        config_root / "servers.json",
        [
            {
                "name": "home",
                "host": "192.168.1.1",
                "port": 9090,
                "secret": "",
                "use_ssl": False,
                "openwrt": {
                    "host": "192.168.1.1",
                    "port": 80,
                    "use_ssl": False,
                    "username": "root",
                    "password": "secret",
                    "luci_package": "openclash",
                },
            }
        ],
    )
    return "home"


class FakeLuciRouter:
    """Answers LuCI auth and sys calls and records every request."""

    def __init__(
        self,
        login_payload: Any = None,
        exec_payload: Any = None,
        status_code: int = 200,
    ) -> None:
        self.login_payload = (
            login_payload if login_payload is not None else {"id": 1, "result": "TOK", "error": None}
        )
        self.exec_payload = (
            exec_payload if exec_payload is not None else {"result": SAMPLE_RULES_TEXT, "error": None}
        )
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="error")
        if request.url.path.endswith("/rpc/auth"):
            return httpx.Response(200, json=self.login_payload)
        if request.url.path.endswith("/rpc/sys"):
            return httpx.Response(200, json=self.exec_payload)
        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def fake_router() -> Callable[..., FakeLuciRouter]:
    return FakeLuciRouter


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            env.setdefault("COLUMNS", "200")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
