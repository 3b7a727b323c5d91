"""UI library provider registry for playground code generation.

Each provider is an external React component library the playground can
target. Entries are static: an import path and the closed list of
components generated code may use from it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class UIProvider:
    """A React component library the playground can target.

    Attributes:
        id: Identifier used in requests and output keys (e.g., "mui").
        display_name: Human-readable name.
        import_path: Module that components are imported from.
        allowed_components: Closed component vocabulary for generated code.
        notes: Library-specific instructions added to the playground prompt.
    """

    id: str
    display_name: str
    import_path: str
    allowed_components: tuple[str, ...]
    notes: tuple[str, ...] = ()

    def allows(self, component: str) -> bool:
        """Check whether a component name is in the allowed vocabulary."""
        return component in self.allowed_components

    def owns_import(self, module: str) -> bool:
        """Check whether an import source belongs to this provider.

        Sub-paths count, so "@mui/material/Box" belongs to "@mui/material".
        """
        return module == self.import_path or module.startswith(self.import_path + "/")


MUI = UIProvider(
    id="mui",
    display_name="MUI",
    import_path="@mui/material",
    allowed_components=(
        "Box",
        "Typography",
        "Button",
        "Stack",
        "Paper",
        "Grid",
        "Card",
        "CardContent",
        "CircularProgress",
        "IconButton",
        "TextField",
        "Switch",
        "Checkbox",
        "Select",
        "MenuItem",
        "Slider",
        "Alert",
        "Avatar",
        "Tooltip",
    ),
    notes=(
        "NEVER use sub-path imports like `import Box from '@mui/material/Box'`.",
        "ALWAYS use root-level named imports: "
        "`import { Box, Button, Card } from '@mui/material'`.",
    ),
)

CHAKRA = UIProvider(
    id="chakra",
    display_name="Chakra UI",
    import_path="@chakra-ui/react",
    allowed_components=(
        "Box",
        "Text",
        "Button",
        "Stack",
        "VStack",
        "HStack",
        "Heading",
        "Card",
        "CardHeader",
        "CardBody",
        "CardFooter",
        "CircularProgress",
        "IconButton",
        "Input",
        "Switch",
        "Checkbox",
        "Select",
        "Slider",
        "Alert",
        "AlertIcon",
        "AlertTitle",
        "AlertDescription",
        "Avatar",
        "Tooltip",
        "Tabs",
        "TabList",
        "TabPanels",
        "Tab",
        "TabPanel",
        "Modal",
        "ModalOverlay",
        "ModalContent",
        "ModalHeader",
        "ModalFooter",
        "ModalBody",
        "ModalCloseButton",
    ),
    notes=(
        "The sandbox uses Chakra UI v2; use v2 component syntax directly.",
        "Tabs example: <Tabs><TabList><Tab>Tab 1</Tab></TabList>"
        "<TabPanels><TabPanel>Content 1</TabPanel></TabPanels></Tabs>",
    ),
)

ANTD = UIProvider(
    id="antd",
    display_name="Ant Design",
    import_path="antd",
    allowed_components=(
        "Button",
        "Divider",
        "Typography",
        "Space",
        "Card",
        "Progress",
        "Flex",
        "Input",
        "Switch",
        "Checkbox",
        "Select",
        "Slider",
        "Alert",
        "Avatar",
        "Tooltip",
        "Tabs",
        "Modal",
    ),
)

SHADCN = UIProvider(
    id="shadcn",
    display_name="shadcn/ui",
    import_path="@/components/ui",
    allowed_components=(
        "Card",
        "CardHeader",
        "CardTitle",
        "CardContent",
        "Button",
        "Input",
        "Slider",
        "Accordion",
        "AccordionItem",
        "AccordionTrigger",
        "AccordionContent",
        "Tabs",
        "TabsList",
        "TabsTrigger",
        "TabsContent",
        "Dialog",
        "DialogContent",
        "DialogHeader",
        "DialogTitle",
        "DialogTrigger",
        "Select",
        "SelectTrigger",
        "SelectValue",
        "SelectContent",
        "SelectItem",
        "RadioGroup",
        "RadioGroupItem",
        "Switch",
        "Checkbox",
        "Avatar",
        "AvatarImage",
        "AvatarFallback",
        "Tooltip",
        "TooltipProvider",
        "TooltipTrigger",
        "TooltipContent",
        "Alert",
        "AlertTitle",
        "AlertDescription",
        "Label",
        "Separator",
        "Badge",
    ),
)

_registry: dict[str, UIProvider] = {p.id: p for p in (MUI, CHAKRA, ANTD, SHADCN)}


def get_provider(provider_id: str) -> UIProvider:
    """Get a provider by identifier.

    Args:
        provider_id: The provider identifier (e.g., "mui", "chakra").

    Returns:
        UIProvider: The registered provider.

    Raises:
        KeyError: If no provider with the given identifier is registered.

    Example:
        >>> get_provider("mui").import_path
        '@mui/material'
    """
    key = provider_id.strip().lower()
    if key not in _registry:
        available = ", ".join(_registry.keys())
        raise KeyError(f"Unknown provider '{provider_id}'. Available: {available}")
    return _registry[key]


def list_providers() -> list[str]:
    """List all registered provider identifiers.

    Example:
        >>> list_providers()
        ['mui', 'chakra', 'antd', 'shadcn']
    """
    return list(_registry.keys())


def resolve_providers(provider_ids: Iterable[str]) -> list[UIProvider]:
    """Resolve identifiers to providers, dropping duplicates and keeping order.

    Raises:
        KeyError: On the first unknown identifier.
    """
    resolved: list[UIProvider] = []
    for provider_id in provider_ids:
        provider = get_provider(provider_id)
        if provider not in resolved:
            resolved.append(provider)
    return resolved


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
