"""Settings do cliente Graph API."""

from __future__ import annotations

from opengraph.config.settings.graph import (
    DEFAULT_BATCH_LIMIT,
    GRAPH_API_VERSION,
    GraphSettings,
    get_graph_settings,
)

__all__ = [
    "DEFAULT_BATCH_LIMIT",
    "GRAPH_API_VERSION",
    "GraphSettings",
    "get_graph_settings",
]
