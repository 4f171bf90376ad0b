"""Shared Pydantic models."""

from localdev_common.models.history_entry import HistoryEntry
from localdev_common.models.site import SiteDefinition, SiteIndex, WebsocketBinding

__all__ = ["HistoryEntry", "SiteDefinition", "SiteIndex", "WebsocketBinding"]
