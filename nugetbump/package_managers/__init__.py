"""Package managers module - unified interface for outdated-package upgrades.

Provides a registry pattern for package manager implementations:
- dotnet (*.csproj) - NuGet via the dotnet CLI

Usage:
    from nugetbump.package_managers import get_manager

    mgr = get_manager("dotnet", executable="/usr/share/dotnet/dotnet")
    if mgr:
        outdated = mgr.list_outdated(Path("App.csproj"), "net8.0")
"""

from __future__ import annotations

from typing import Any

from .base import BasePackageManager

# Lazy imports to avoid circular dependencies
_REGISTRY: dict[str, type[BasePackageManager]] | None = None


def _init_registry() -> dict[str, type[BasePackageManager]]:
    """Initialize the registry with all package manager implementations."""
    global _REGISTRY
    if _REGISTRY is not None:
        return _REGISTRY

    from .dotnet import DotnetPackageManager

    _REGISTRY = {
        "dotnet": DotnetPackageManager,
    }
    return _REGISTRY


def get_manager(manager_name: str, **options: Any) -> BasePackageManager | None:
    """Get package manager instance by name.

    Args:
        manager_name: The manager identifier (e.g., 'dotnet')
        **options: Constructor keyword arguments for the manager

    Returns:
        Package manager instance or None if not found
    """
    registry = _init_registry()
    cls = registry.get(manager_name.lower())
    return cls(**options) if cls else None


__all__ = [
    "get_manager",
    "BasePackageManager",
]
