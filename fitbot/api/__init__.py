"""FitBot HTTP API.

Requires the 'server' optional dependency group:
    pip install fitbot[server]
"""

from fitbot.api.app import create_app

__all__ = ["create_app"]
