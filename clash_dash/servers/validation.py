"""Validation of server details entered by the user."""

from typing import Optional

from clash_dash.errors import ValidationError
from clash_dash.servers.models import LuciPackage, OpenWrtConfig, ServerConfig
from clash_dash.utils import strip_scheme


def parse_port(value: str | int, field: str) -> int:
    text = str(value).strip()
    if not text:
        raise ValidationError(f"{field} is required")
    try:
        port = int(text)
    except ValueError:
        raise ValidationError(f"{field} must be a number: {text}")
    if not 1 <= port <= 65535:
        raise ValidationError(f"{field} must be between 1 and 65535: {port}")
    return port


def build_openwrt_config(
    host: str,
    port: str | int,
    username: str,
    password: str,
    use_ssl: bool = False,
    luci_package: LuciPackage = LuciPackage.OPENCLASH,
) -> OpenWrtConfig:
    clean_host = strip_scheme(host)
    if not clean_host:
        raise ValidationError("OpenWrt host is required")
    if not username.strip():
        raise ValidationError("OpenWrt username is required")
    if not password:
        raise ValidationError("OpenWrt password is required")
    return OpenWrtConfig(
        host=clean_host,
        port=parse_port(port, "OpenWrt port"),
        username=username.strip(),
        password=password,
        use_ssl=use_ssl,
        luci_package=luci_package,
    )


def build_server_config(
    host: str,
    port: str | int,
    name: str = "",
    secret: str = "",
    use_ssl: bool = False,
    openwrt: Optional[OpenWrtConfig] = None,
) -> ServerConfig:
    clean_host = host.strip()
    if not clean_host:
        raise ValidationError("Controller host is required")
    controller_port = parse_port(port, "Controller port")
    normalized_name = name.strip() or f"{clean_host}:{controller_port}"
    return ServerConfig(
        name=normalized_name,
        host=clean_host,
        port=controller_port,
        secret=secret.strip(),
        use_ssl=use_ssl,
        openwrt=openwrt,
    )
