from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from clash_dash.constants import OPENCLASH_CUSTOM_RULES_PATH


class LuciPackage(str, Enum):
    OPENCLASH = "openclash"
    NIKKI = "nikki"

    @property
    def custom_rules_path(self) -> Optional[str]:
        if self == LuciPackage.OPENCLASH:
            return OPENCLASH_CUSTOM_RULES_PATH
        return None


@dataclass(frozen=True)
class OpenWrtConfig:
    host: str
    port: int
    username: str
    password: str
    use_ssl: bool = False
    luci_package: LuciPackage = LuciPackage.OPENCLASH

    def as_dict(self) -> dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "use_ssl": self.use_ssl,
            "username": self.username,
            "password": self.password,
            "luci_package": self.luci_package.value,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "OpenWrtConfig":
        return cls(
            host=payload["host"],
            port=int(payload["port"]),
            username=payload["username"],
            password=payload["password"],
            use_ssl=bool(payload.get("use_ssl", False)),
            luci_package=LuciPackage(payload.get("luci_package", LuciPackage.OPENCLASH.value)),
        )


@dataclass(frozen=True)
class ServerConfig:
    name: str
    host: str
    port: int
    secret: str = ""
    use_ssl: bool = False
    openwrt: Optional[OpenWrtConfig] = None

    @property
    def controller_url(self) -> str:
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.host}:{self.port}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "host": self.host,
            "port": self.port,
            "secret": self.secret,
            "use_ssl": self.use_ssl,
            "openwrt": self.openwrt.as_dict() if self.openwrt is not None else None,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ServerConfig":
        openwrt = payload.get("openwrt")
        return cls(
            name=payload["name"],
            host=payload["host"],
            port=int(payload["port"]),
            secret=payload.get("secret", ""),
            use_ssl=bool(payload.get("use_ssl", False)),
            openwrt=OpenWrtConfig.from_dict(openwrt) if openwrt else None,
        )
