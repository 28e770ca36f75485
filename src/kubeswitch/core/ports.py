"""Core ports (interfaces) for kubeswitch.

These protocols define the boundaries between the navigation core and the
collaborators it drives: persistence, name classification and namespace
listing. Rendering is not a port; the TUI drives the controller instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from ..classifier import Category
    from .document import ConfigDocument


@runtime_checkable
class ConfigStore(Protocol):
    """Loads and saves the kubeconfig document."""

    def load(self, path: "Path") -> "ConfigDocument":
        """Load the document; raises LoadFailure."""

    def save(self, document: "ConfigDocument", path: "Path") -> None:
        """Write the full document; raises SaveFailure."""


@runtime_checkable
class Classifier(Protocol):
    """Maps a context name to a category."""

    def classify(self, name: str) -> "Category":
        """Classify a context name."""


@runtime_checkable
class SubSelectionProvider(Protocol):
    """Lists the namespaces available in a context."""

    def list(self, entry_name: str) -> Sequence[str]:
        """Return namespaces in display order."""
