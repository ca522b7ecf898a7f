"""
hexbloop/styles/__init__.py
Style registry - parameter tables plus the shared renderer
"""

from typing import Dict, List, Optional

from .base import (
    AtmosphereKind,
    BackgroundKind,
    Motif,
    RenderContext,
    ShapeKind,
    StyleDefinition,
    StyleRenderer,
)

# Global registry (insertion order is the discrete selection order)
_REGISTRY: Dict[str, StyleRenderer] = {}


def register_style(definition: StyleDefinition) -> None:
    """Register a style definition."""
    if definition.name in _REGISTRY:
        raise ValueError(f"Style {definition.name} already registered")
    _REGISTRY[definition.name] = StyleRenderer(definition)


def get_style(name: str) -> Optional[StyleDefinition]:
    """Get a registered style definition by name."""
    renderer = _REGISTRY.get(name)
    return renderer.definition if renderer else None


def get_renderer(name: str) -> Optional[StyleRenderer]:
    return _REGISTRY.get(name)


def list_styles() -> List[str]:
    """List all registered style names in selection order."""
    return list(_REGISTRY.keys())


def get_all_styles() -> Dict[str, StyleDefinition]:
    return {name: r.definition for name, r in _REGISTRY.items()}


# =============================================================================
# Auto-registration of built-in styles
# =============================================================================

def _register_builtins():
    """Register all built-in styles."""
    from .catalog import BUILTIN_STYLES

    for definition in BUILTIN_STYLES:
        register_style(definition)


_register_builtins()


__all__ = [
    "AtmosphereKind",
    "BackgroundKind",
    "Motif",
    "RenderContext",
    "ShapeKind",
    "StyleDefinition",
    "StyleRenderer",
    "register_style",
    "get_style",
    "get_renderer",
    "list_styles",
    "get_all_styles",
]
