"""Core orchestration for kubeswitch.

Owns the kubeconfig document and the navigation state, runs each event
through the transition table, and commits mutations to the store before
the next view is shown.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..classifier import Category
from .errors import EXIT_SAVE_FAILURE, SaveFailure
from .ports import Classifier, ConfigStore, SubSelectionProvider
from .state_machine import (
    CommitContext,
    CommitNamespace,
    Exit,
    initial_state,
    transition,
)

if TYPE_CHECKING:
    from pathlib import Path

    from .document import ConfigDocument
    from .state_machine import Event, NavigationState, Page

logger = logging.getLogger(__name__)


class NavigationController:
    """Drives one switching session over a loaded document."""

    def __init__(
        self,
        document: ConfigDocument,
        path: Path,
        store: ConfigStore,
        classifier: Classifier,
        provider: SubSelectionProvider,
    ):
        self._document = document
        self._path = path
        self._store = store
        self._classifier = classifier
        self._provider = provider
        self._categories = {name: classifier.classify(name) for name in document.order}
        guarded = [name for name, cat in self._categories.items() if cat is Category.PRODUCTION]
        self._state = initial_state(document.order, document.current_entry, guarded)

    @property
    def document(self) -> ConfigDocument:
        return self._document

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def pages(self) -> tuple[Page, ...]:
        return self._state.pages

    def category(self, name: str) -> Category:
        return self._categories.get(name, Category.UNKNOWN)

    def handle(self, event: Event) -> Exit | None:
        """Handle one input event to completion.

        Returns:
            An Exit when the run is over, otherwise None. On a failed save
            the new state is not adopted.
        """
        next_state, effects = transition(self._state, event, self._provider)
        for effect in effects:
            if isinstance(effect, Exit):
                return effect
            try:
                self._commit(effect)
            except SaveFailure as e:
                logger.error("%s", e)
                return Exit(EXIT_SAVE_FAILURE, str(e))
        self._state = next_state
        return None

    def _commit(self, effect) -> None:
        if isinstance(effect, CommitContext):
            self._document.set_current(effect.name)
            logger.info("Switching current context to %s", effect.name)
        elif isinstance(effect, CommitNamespace):
            self._document.set_sub_selection(effect.entry, effect.namespace)
            logger.info("Setting namespace of %s to %s", effect.entry, effect.namespace)
        else:
            raise TypeError(f"not a commit effect: {effect!r}")
        self._store.save(self._document, self._path)
