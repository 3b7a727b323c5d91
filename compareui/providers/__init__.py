"""UI library provider registry."""

from compareui.providers.lib import (
    ANTD,
    CHAKRA,
    MUI,
    SHADCN,
    UIProvider,
    get_provider,
    list_providers,
    resolve_providers,
)

__all__ = [
    "UIProvider",
    "MUI",
    "CHAKRA",
    "ANTD",
    "SHADCN",
    "get_provider",
    "list_providers",
    "resolve_providers",
]
