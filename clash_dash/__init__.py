"""Client toolkit for OpenClash/Nikki routers managed over LuCI RPC."""

__version__ = "0.1.0"
