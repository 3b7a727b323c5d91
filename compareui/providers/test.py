"""Unit tests for the providers module.

Tests for:
- UIProvider vocabulary and import ownership
- Provider registry (get_provider, list_providers, resolve_providers)
"""

import pytest

from compareui.providers import (
    CHAKRA,
    MUI,
    SHADCN,
    UIProvider,
    get_provider,
    list_providers,
    resolve_providers,
)


class TestRegistry:
    """Tests for the provider registry."""

    @pytest.mark.unit
    def test_list_providers(self):
        """All four libraries are registered in a stable order."""
        assert list_providers() == ["mui", "chakra", "antd", "shadcn"]

    @pytest.mark.unit
    def test_get_provider(self):
        """Lookup returns the registered entry."""
        provider = get_provider("chakra")
        assert isinstance(provider, UIProvider)
        assert provider.import_path == "@chakra-ui/react"

    @pytest.mark.unit
    def test_lookup_normalizes_case(self):
        assert get_provider(" MUI ") is MUI

    @pytest.mark.unit
    def test_unknown_provider_raises(self):
        """Unknown identifiers raise KeyError listing what is available."""
        with pytest.raises(KeyError, match="Available: mui, chakra, antd, shadcn"):
            get_provider("bootstrap")

    @pytest.mark.unit
    def test_resolve_deduplicates(self):
        assert resolve_providers(["mui", "chakra", "mui"]) == [MUI, CHAKRA]

    @pytest.mark.unit
    def test_resolve_rejects_unknown(self):
        with pytest.raises(KeyError):
            resolve_providers(["mui", "vuetify"])


class TestUIProvider:
    """Tests for per-provider helpers."""

    @pytest.mark.unit
    def test_allows(self):
        assert MUI.allows("TextField")
        assert not MUI.allows("Input")
        assert CHAKRA.allows("Input")

    @pytest.mark.unit
    def test_owns_import_root_and_subpath(self):
        assert MUI.owns_import("@mui/material")
        assert MUI.owns_import("@mui/material/Box")
        assert not MUI.owns_import("@mui/material-next")
        assert not MUI.owns_import("@mui/icons-material")

    @pytest.mark.unit
    def test_shadcn_alias_path(self):
        assert SHADCN.owns_import("@/components/ui/card")

    @pytest.mark.unit
    def test_providers_are_frozen(self):
        with pytest.raises(AttributeError):
            MUI.import_path = "other"  # type: ignore[misc]

    @pytest.mark.unit
    def test_mui_notes_forbid_subpath_imports(self):
        assert any("sub-path" in note for note in MUI.notes)
