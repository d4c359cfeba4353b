"""LocaBriques tools, grouped by resource area."""

from .registry import ToolDefinition, ToolRegistry
from .catalogs import register_catalog_tools
from .themes import register_theme_tools
from .legosets import register_legoset_tools
from .shops import register_shop_tools
from .my_shop import register_my_shop_tools
from .inventories import register_inventory_tools
from .my_inventories import register_my_inventory_tools
from .my_account import register_my_account_tools
from .users import register_user_tools


TOOL_GROUPS = (
    register_catalog_tools,
    register_theme_tools,
    register_legoset_tools,
    register_shop_tools,
    register_my_shop_tools,
    register_inventory_tools,
    register_my_inventory_tools,
    register_my_account_tools,
    register_user_tools,
)


def register_all_tools(registry: ToolRegistry) -> None:
    """Register every tool group, always in the same order."""
    for register_group in TOOL_GROUPS:
        register_group(registry)


__all__ = ["ToolDefinition", "ToolRegistry", "register_all_tools", "TOOL_GROUPS"]
