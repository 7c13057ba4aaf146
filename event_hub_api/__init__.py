"""
Top‑level package for the Event Hub API.

The HTTP service lives in ``event_hub_api.app`` and a matching Python
client in ``event_hub_api.client``.
"""

__all__ = []
