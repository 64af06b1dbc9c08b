"""Persistence of configured servers."""

from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft202012Validator

from clash_dash.constants import CONFIG_DIRNAME, SERVERS_FILENAME
from clash_dash.errors import (
    InvalidConfigSchemaError,
    InvalidJsonFormatError,
    ServerNotFoundError,
    ValidationError,
)
from clash_dash.servers.models import LuciPackage, ServerConfig
from clash_dash.utils import read_json_safe, write_json

_PORT_SCHEMA = {"type": "integer", "minimum": 1, "maximum": 65535}

SERVERS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["name", "host", "port"],
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "host": {"type": "string", "minLength": 1},
            "port": _PORT_SCHEMA,
            "secret": {"type": "string"},
            "use_ssl": {"type": "boolean"},
            "openwrt": {
                "oneOf": [
                    {"type": "null"},
                    {
                        "type": "object",
                        "required": ["host", "port", "username", "password"],
                        "properties": {
                            "host": {"type": "string", "minLength": 1},
                            "port": _PORT_SCHEMA,
                            "use_ssl": {"type": "boolean"},
                            "username": {"type": "string", "minLength": 1},
                            "password": {"type": "string"},
                            "luci_package": {
                                "enum": [item.value for item in LuciPackage]
                            },
                        },
                    },
                ]
            },
        },
    },
}


def _schema_error_message(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


class ServersRepository:
    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root or (Path.home() / ".config" / CONFIG_DIRNAME)
        self._validator = Draft202012Validator(SERVERS_SCHEMA)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def servers_path(self) -> Path:
        return self.root / SERVERS_FILENAME

    def load_servers(self) -> list[ServerConfig]:
        payload, error = read_json_safe(self.servers_path)
        if error is not None:
            raise InvalidJsonFormatError(self.servers_path, error)
        if payload is None:
            return []
        schema_error = next(iter(self._validator.iter_errors(payload)), None)
        if schema_error is not None:
            raise InvalidConfigSchemaError(
                self.servers_path, _schema_error_message(schema_error)
            )
        return [ServerConfig.from_dict(item) for item in payload]

    def save_servers(self, servers: list[ServerConfig]) -> None:
        serialized = [
            item.as_dict() for item in sorted(servers, key=lambda item: item.name.lower())
        ]
        write_json(self.servers_path, serialized)

    def get_server(self, name: str) -> ServerConfig:
        target_name = name.strip()
        for server in self.load_servers():
            if server.name == target_name:
                return server
        raise ServerNotFoundError(target_name)

    def add_server(self, server: ServerConfig) -> None:
        servers = self.load_servers()
        if any(item.name == server.name for item in servers):
            raise ValidationError(f"Server name already exists: {server.name}")
        servers.append(server)
        self.save_servers(servers)

    def remove_server(self, name: str) -> bool:
        target_name = name.strip()
        servers = self.load_servers()
        kept = [item for item in servers if item.name != target_name]
        if len(kept) == len(servers):
            return False
        self.save_servers(kept)
        return True
