"""HTTP utilities: pooled ``httpx`` clients shared by the engine and price table."""

from .client import build_timeout, close_all_clients, get_httpx_client

__all__ = ["get_httpx_client", "close_all_clients", "build_timeout"]
