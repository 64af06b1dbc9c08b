"""Tests for servers CLI commands."""

import json
from pathlib import Path

from clash_dash.__main__ import cli


def test_servers_list_empty(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["servers", "list"])
    assert result.exit_code == 0
    assert "No servers configured" in result.output


def test_servers_add_plain(cli_runner, config_root: Path) -> None:
    result = cli_runner.invoke(
        cli, ["servers", "add", "--host", "10.0.0.2", "--port", "9090", "--name", "lab"]
    )
    assert result.exit_code == 0, result.output
    assert "Added server: lab" in result.output

    payload = json.loads((config_root / "servers.json").read_text(encoding="utf-8"))
    assert payload == [
        {
            "name": "lab",
            "host": "10.0.0.2",
            "port": 9090,
            "secret": "",
            "use_ssl": False,
            "openwrt": None,
        }
    ]

    result = cli_runner.invoke(cli, ["servers", "list"])
    assert "lab" in result.output
    assert "http://10.0.0.2:9090" in result.output


def test_servers_add_openwrt_verifies_login(cli_runner, fake_router) -> None:
    router = fake_router()
    result = cli_runner.invoke(
        cli,
        [
            "servers",
            "add",
            "--host",
            "192.168.1.1",
            "--port",
            "9090",
            "--openwrt-host",
            "http://192.168.1.1",
            "--username",
            "root",
            "--password",
            "secret",
        ],
        obj={"transport": router.transport},
    )
    assert result.exit_code == 0, result.output
    assert len(router.requests) == 1
    assert router.bodies()[0]["params"] == ["root", "secret"]


def test_servers_add_openwrt_login_failure_is_not_saved(
    cli_runner, fake_router, config_root: Path
) -> None:
    router = fake_router(login_payload={"result": None, "error": "bad password"})
    result = cli_runner.invoke(
        cli,
        [
            "servers",
            "add",
            "--host",
            "192.168.1.1",
            "--port",
            "9090",
            "--openwrt-host",
            "192.168.1.1",
            "--username",
            "root",
            "--password",
            "wrong",
        ],
        obj={"transport": router.transport},
    )
    assert result.exit_code != 0
    assert "bad password" in result.output
    assert not (config_root / "servers.json").exists()


def test_servers_add_openwrt_requires_credentials(cli_runner, fake_router) -> None:
    router = fake_router()
    result = cli_runner.invoke(
        cli,
        ["servers", "add", "--host", "h", "--port", "1", "--openwrt-host", "h"],
        obj={"transport": router.transport},
    )
    assert result.exit_code != 0
    assert "username is required" in result.output
    assert router.requests == []


def test_servers_add_no_verify_skips_login(cli_runner, fake_router) -> None:
    router = fake_router()
    result = cli_runner.invoke(
        cli,
        [
            "servers",
            "add",
            "--host",
            "h",
            "--port",
            "1",
            "--openwrt-host",
            "h",
            "--username",
            "root",
            "--password",
            "pw",
            "--no-verify",
        ],
        obj={"transport": router.transport},
    )
    assert result.exit_code == 0, result.output
    assert router.requests == []


def test_servers_remove(cli_runner, openwrt_server: str) -> None:
    result = cli_runner.invoke(cli, ["servers", "remove", openwrt_server])
    assert result.exit_code == 0
    assert "Removed server: home" in result.output

    result = cli_runner.invoke(cli, ["servers", "remove", openwrt_server])
    assert result.exit_code != 0
    assert "Server not found" in result.output


def test_verbose_flag_is_accepted(cli_runner) -> None:
    result = cli_runner.invoke(cli, ["--verbose", "servers", "list"])
    assert result.exit_code == 0
