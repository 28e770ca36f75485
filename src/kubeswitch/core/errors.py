"""Error types shared by the core and its adapters."""

from __future__ import annotations

# Process exit codes
EXIT_OK = 0
EXIT_LOAD_FAILURE = 1
EXIT_SAVE_FAILURE = 2


class KubeSwitchError(Exception):
    """Base class for kubeswitch errors."""


class LoadFailure(KubeSwitchError):
    """The kubeconfig could not be loaded."""

    def __init__(self, path, reason: str):
        super().__init__(f"failed to load kubeconfig {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigNotFound(LoadFailure):
    pass


class ConfigParseError(LoadFailure):
    pass


class SaveFailure(KubeSwitchError):
    """Writing the kubeconfig back to disk failed."""

    def __init__(self, path, reason: str):
        super().__init__(f"failed to save kubeconfig {path}: {reason}")
        self.path = path
        self.reason = reason


class InvariantViolation(KubeSwitchError):
    """The document was left in a state no transition should produce."""
