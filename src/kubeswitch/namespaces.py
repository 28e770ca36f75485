"""Namespace listing for a context.

The list is static for now; a provider that queries the cluster API can be
dropped in behind the SubSelectionProvider port.
"""

from __future__ import annotations

DEFAULT_NAMESPACES: tuple[str, ...] = (
    "default",
    "kube-system",
    "kube-public",
    "kube-node-lease",
    "monitoring",
    "logging",
    "app-frontend",
    "app-backend",
    "database",
)


class StaticNamespaceProvider:
    """Returns the same namespace list for every context."""

    def __init__(self, namespaces=DEFAULT_NAMESPACES):
        self._namespaces = tuple(namespaces)

    def list(self, entry_name: str) -> tuple[str, ...]:
        return self._namespaces
