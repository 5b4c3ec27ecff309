"""formgate HTTP API."""

from formgate.api.app import app

__all__ = ["app"]
