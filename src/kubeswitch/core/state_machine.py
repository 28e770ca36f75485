"""Navigation state machine for the context/namespace switcher.

The view stack and the rules for moving through it live here as a pure
function: ``transition(state, event, provider)`` returns the next state and
the effects (commits, exit) the controller must run before adopting it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import logging
from typing import TYPE_CHECKING, Callable, Union

from .errors import EXIT_OK

if TYPE_CHECKING:
    from .ports import SubSelectionProvider

logger = logging.getLogger(__name__)


# Pages


@dataclass(frozen=True)
class ContextList:
    pass


@dataclass(frozen=True)
class DecisionModal:
    entry: str
    guarded: bool

    @property
    def text(self) -> str:
        if self.guarded:
            return f"Warning: You are switching to a PRODUCTION context: {self.entry}\nAre you sure?"
        return f"Context: {self.entry}\nWhat would you like to do?"


@dataclass(frozen=True)
class NamespaceList:
    entry: str
    namespaces: tuple[str, ...]


@dataclass(frozen=True)
class ConfirmationModal:
    message: str


Page = Union[ContextList, DecisionModal, NamespaceList, ConfirmationModal]


# Events


class DecisionAction(Enum):
    CANCEL = "Cancel"
    SWITCH_CONTEXT = "Switch Context"
    SWITCH_NAMESPACE = "Switch Namespace"


@dataclass(frozen=True)
class Select:
    """A list row was chosen; carries the row's name, not its position."""

    name: str


@dataclass(frozen=True)
class Choose:
    action: DecisionAction


@dataclass(frozen=True)
class Escape:
    pass


@dataclass(frozen=True)
class Acknowledge:
    pass


@dataclass(frozen=True)
class Interrupt:
    pass


Event = Union[Select, Choose, Escape, Acknowledge, Interrupt]


# Effects


@dataclass(frozen=True)
class CommitContext:
    name: str


@dataclass(frozen=True)
class CommitNamespace:
    entry: str
    namespace: str


@dataclass(frozen=True)
class Exit:
    code: int = EXIT_OK
    message: str = ""


Effect = Union[CommitContext, CommitNamespace, Exit]


@dataclass(frozen=True)
class NavigationState:
    """Everything the transition table needs to decide the next view.

    Attributes:
        pages: View stack, bottom first; the last page has focus
        entries: Context names in display order
        current_entry: Name of the active context
        guarded: Context names that need the production warning
    """

    pages: tuple[Page, ...]
    entries: tuple[str, ...]
    current_entry: str
    guarded: frozenset[str] = frozenset()

    @property
    def focused(self) -> Page:
        return self.pages[-1]

    def push(self, page: Page) -> "NavigationState":
        return replace(self, pages=self.pages + (page,))

    def pop(self) -> "NavigationState":
        if len(self.pages) == 1:
            return self
        return replace(self, pages=self.pages[:-1])


def initial_state(entries, current_entry: str, guarded=()) -> NavigationState:
    return NavigationState(
        pages=(ContextList(),),
        entries=tuple(entries),
        current_entry=current_entry,
        guarded=frozenset(guarded),
    )


Result = tuple[NavigationState, list]


def _select_context(state: NavigationState, page, event: Select, provider) -> Result | None:
    if event.name not in state.entries:
        return None
    modal = DecisionModal(entry=event.name, guarded=event.name in state.guarded)
    return state.push(modal), []


def _choose(state: NavigationState, page: DecisionModal, event: Choose, provider) -> Result:
    name = page.entry
    below = state.pop()
    if event.action is DecisionAction.SWITCH_CONTEXT:
        after = replace(below, current_entry=name)
        return after.push(ConfirmationModal(f"Switched to context: {name}")), [CommitContext(name)]
    if event.action is DecisionAction.SWITCH_NAMESPACE:
        effects = []
        if state.current_entry != name:
            effects.append(CommitContext(name))
            below = replace(below, current_entry=name)
        namespaces = tuple(provider.list(name))
        return below.push(NamespaceList(entry=name, namespaces=namespaces)), effects
    return below, []


def _cancel_decision(state: NavigationState, page, event, provider) -> Result:
    return state.pop(), []


def _select_namespace(state: NavigationState, page: NamespaceList, event: Select, provider) -> Result | None:
    if event.name not in page.namespaces:
        return None
    message = f"Switched namespace to: {event.name} in context: {page.entry}"
    return state.push(ConfirmationModal(message)), [CommitNamespace(page.entry, event.name)]


def _leave_namespaces(state: NavigationState, page, event, provider) -> Result:
    # The context commit made on the way in is kept
    return state.pop(), []


def _finish(state: NavigationState, page, event, provider) -> Result:
    return state, [Exit(EXIT_OK)]


_TRANSITIONS: dict[type, dict[type, Callable]] = {
    ContextList: {
        Select: _select_context,
    },
    DecisionModal: {
        Choose: _choose,
        Escape: _cancel_decision,
    },
    NamespaceList: {
        Select: _select_namespace,
        Escape: _leave_namespaces,
    },
    ConfirmationModal: {
        Acknowledge: _finish,
        Escape: _finish,
    },
}


def transition(state: NavigationState, event: Event, provider: "SubSelectionProvider") -> Result:
    """Compute the next state and the effects to run before adopting it."""
    if isinstance(event, Interrupt):
        return state, [Exit(EXIT_OK)]

    page = state.focused
    handler = _TRANSITIONS.get(type(page), {}).get(type(event))
    result = handler(state, page, event, provider) if handler else None
    if result is None:
        logger.warning("Ignored event on %s: %s", type(page).__name__, event)
        return state, []
    return result
