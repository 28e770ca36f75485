"""kubeswitch - Interactive Kubernetes context and namespace switcher"""

__version__ = "1.0.0"
__description__ = "Interactive Kubernetes context and namespace switcher"

__all__ = ["main", "KubeSwitchApp", "__version__"]


def __getattr__(name: str):
    """Lazy import so the core can be used without loading Textual."""
    if name == "KubeSwitchApp":
        from .tui import KubeSwitchApp

        return KubeSwitchApp
    if name == "main":
        from .main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
