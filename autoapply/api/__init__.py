"""HTTP API.

Serve ``autoapply.api:app`` with any ASGI server.
"""

from autoapply.api.app import app, create_app

__all__ = ["app", "create_app"]
