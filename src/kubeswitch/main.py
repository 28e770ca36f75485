#!/usr/bin/env python3
"""kubeswitch: pick a context, optionally a namespace, and write it back to the kubeconfig"""

import logging
import sys

from textual.logging import TextualHandler

from .adapters.config_env import load_app_config
from .adapters.config_store import YamlConfigStore
from .classifier import KeywordClassifier
from .core.controller import NavigationController
from .core.errors import EXIT_LOAD_FAILURE, EXIT_OK, LoadFailure
from .namespaces import StaticNamespaceProvider

logger = logging.getLogger("kubeswitch")


def configure_logging(app_config) -> None:
    """Route package logs to a file when configured, else through Textual

    TextualHandler writes to the app log while the UI is running and to
    stderr otherwise, so log lines never land on top of the screen.
    """
    if app_config.log_file:
        handler = logging.FileHandler(app_config.log_file)
    else:
        handler = TextualHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if app_config.debug else logging.WARNING)


def build_controller(app_config, store=None) -> NavigationController:
    """Load the kubeconfig and wire up the controller; raises LoadFailure"""
    store = store or YamlConfigStore()
    document = store.load(app_config.kubeconfig_path)
    return NavigationController(
        document=document,
        path=app_config.kubeconfig_path,
        store=store,
        classifier=KeywordClassifier(),
        provider=StaticNamespaceProvider(),
    )


def main() -> int:
    app_config = load_app_config()
    configure_logging(app_config)

    try:
        controller = build_controller(app_config)
    except LoadFailure as e:
        logger.error("Error loading kubeconfig: %s", e)
        if app_config.log_file:
            print(f"Error loading kubeconfig: {e}", file=sys.stderr)
        return EXIT_LOAD_FAILURE

    from .tui import KubeSwitchApp

    app = KubeSwitchApp(controller)
    app.run()
    return app.return_code or EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
