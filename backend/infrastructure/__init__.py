from __future__ import annotations

"""
Infrastructure layer for the catalog client.

Adapters behind the application ports: the aiohttp catalog endpoint, credential
providers, timer schedulers, environment settings and logging helpers.
"""

__all__ = [
    "catalog",
    "config",
    "timing",
    "utils",
]
