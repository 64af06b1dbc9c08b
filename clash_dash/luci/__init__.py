from clash_dash.luci.client import LuciRpcClient, base_url_for
from clash_dash.luci.models import AuthResult, Err, ExecResult, Ok

__all__ = [
    "AuthResult",
    "Err",
    "ExecResult",
    "LuciRpcClient",
    "Ok",
    "base_url_for",
]
