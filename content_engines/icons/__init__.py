"""Icon catalog engine."""

from content_engines.icons.catalog import ICON_CATALOG, is_valid_icon, list_icons, search_icons

__all__ = ["ICON_CATALOG", "is_valid_icon", "list_icons", "search_icons"]
