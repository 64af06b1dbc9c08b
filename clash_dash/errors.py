from pathlib import Path


class ClashDashError(Exception):
    """Base user-facing application error."""


class AuthError(ClashDashError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Authentication failed: {message}")


class ServerError(ClashDashError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Server error: {message}")


class NetworkError(ClashDashError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Network error: {message}")


class ValidationError(ClashDashError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ServerNotFoundError(ClashDashError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Server not found: {name}")


class ServersFileError(ClashDashError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class InvalidJsonFormatError(ServersFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(ServersFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")
