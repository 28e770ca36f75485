"""Textual front end for kubeswitch.

Screens are thin views: they turn widget events into navigation events for
the controller, and the app mirrors the controller's page stack onto the
Textual screen stack after each one.
"""

from __future__ import annotations

import logging

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Label, ListItem, ListView, Static

from .classifier import get_category_color
from .core.controller import NavigationController
from .core.document import context_info
from .core.state_machine import (
    Acknowledge,
    Choose,
    ConfirmationModal,
    ContextList,
    DecisionAction,
    DecisionModal,
    Escape,
    Interrupt,
    NamespaceList,
    Select,
)

logger = logging.getLogger(__name__)

MARKER = "► "
CONTEXT_HELP = "↑/↓: Navigate | Enter: Select | Ctrl-C: Quit"
NAMESPACE_HELP = "↑/↓: Navigate | Enter: Select | Esc: Back | Ctrl-C: Quit"

_BUTTON_ACTIONS = {
    "cancel": DecisionAction.CANCEL,
    "switch-context": DecisionAction.SWITCH_CONTEXT,
    "switch-namespace": DecisionAction.SWITCH_NAMESPACE,
}


def _marked(text: str, current: bool) -> str:
    return MARKER + text if current else text


class ContextListScreen(Screen):
    """All contexts, with the current one marked and a details pane."""

    def __init__(self, controller: NavigationController):
        super().__init__()
        self._controller = controller
        self._labels: dict[str, Label] = {}

    def compose(self) -> ComposeResult:
        document = self._controller.document
        yield Static(Text("kube switch: Kubernetes Context Switcher", style="bold purple"), id="title")
        items = []
        for name in document.order:
            label = Label(self._label_text(name))
            self._labels[name] = label
            items.append(
                ListItem(label, Label(context_info(document.entries[name]), classes="info"), name=name)
            )
        with Vertical():
            yield ListView(*items, id="contexts")
            yield Static("Select a context to view details", id="details")
        yield Static(Text(CONTEXT_HELP, style="blue"), id="help")

    def _label_text(self, name: str) -> Text:
        color = get_category_color(self._controller.category(name))
        current = name == self._controller.document.current_entry
        return Text(_marked(name, current), style=color)

    def on_screen_resume(self) -> None:
        # The current context can change underneath while a namespace list is open
        for name, label in self._labels.items():
            label.update(self._label_text(name))

    @on(ListView.Highlighted, "#contexts")
    def _show_details(self, event: ListView.Highlighted) -> None:
        if event.item is None or event.item.name is None:
            return
        name = event.item.name
        entry = self._controller.document.entries.get(name)
        details = Text()
        details.append(name, style=get_category_color(self._controller.category(name)))
        details.append("\n\n")
        details.append(context_info(entry))
        self.query_one("#details", Static).update(details)

    @on(ListView.Selected, "#contexts")
    def _select(self, event: ListView.Selected) -> None:
        if event.item.name is not None:
            self.app.navigate(Select(event.item.name))


class DecisionModalScreen(ModalScreen):
    """Cancel / Switch Context / Switch Namespace for one context."""

    BINDINGS = [
        Binding("escape", "back", "Cancel"),
        Binding("c", "choose('switch-context')", "Switch Context"),
        Binding("n", "choose('switch-namespace')", "Switch Namespace"),
    ]

    CSS = """
    DecisionModalScreen {
        align: center middle;
    }
    #decision-dialog {
        width: 72;
        height: auto;
        border: thick $primary;
        padding: 1 2;
        background: $surface;
    }
    #decision-dialog.guarded {
        border: thick $error;
    }
    #decision-actions {
        height: auto;
        margin-top: 1;
    }
    #decision-actions Button {
        margin-right: 1;
    }
    """

    def __init__(self, page: DecisionModal):
        super().__init__()
        self._page = page

    def compose(self) -> ComposeResult:
        with Vertical(id="decision-dialog", classes="guarded" if self._page.guarded else ""):
            yield Label(Text(self._page.text))
            with Horizontal(id="decision-actions"):
                yield Button(DecisionAction.CANCEL.value, id="cancel")
                yield Button(
                    DecisionAction.SWITCH_CONTEXT.value,
                    id="switch-context",
                    variant="error" if self._page.guarded else "primary",
                )
                yield Button(DecisionAction.SWITCH_NAMESPACE.value, id="switch-namespace")

    @on(Button.Pressed)
    def _pressed(self, event: Button.Pressed) -> None:
        self.action_choose(event.button.id)

    def action_choose(self, button_id: str) -> None:
        action = _BUTTON_ACTIONS.get(button_id)
        if action is not None:
            self.app.navigate(Choose(action))

    def action_back(self) -> None:
        self.app.navigate(Escape())


class NamespaceListScreen(Screen):
    BINDINGS = [Binding("escape", "back", "Back")]

    def __init__(self, page: NamespaceList, current_namespace: str):
        super().__init__()
        self._page = page
        self._current_namespace = current_namespace

    def compose(self) -> ComposeResult:
        yield Static(
            Text(f"Namespaces for context: {self._page.entry}", style="bold purple"), id="title"
        )
        yield ListView(
            *[
                ListItem(
                    Label(_marked(ns, ns == self._current_namespace)),
                    Label("Select to switch to this namespace", classes="info"),
                    name=ns,
                )
                for ns in self._page.namespaces
            ],
            id="namespaces",
        )
        yield Static(Text(NAMESPACE_HELP, style="blue"), id="help")

    @on(ListView.Selected, "#namespaces")
    def _select(self, event: ListView.Selected) -> None:
        if event.item.name is not None:
            self.app.navigate(Select(event.item.name))

    def action_back(self) -> None:
        self.app.navigate(Escape())


class ConfirmationModalScreen(ModalScreen):
    BINDINGS = [Binding("escape", "acknowledge", "OK")]

    CSS = """
    ConfirmationModalScreen {
        align: center middle;
    }
    #confirm-dialog {
        width: 72;
        height: auto;
        border: thick $success;
        padding: 1 2;
        background: $surface;
    }
    """

    def __init__(self, page: ConfirmationModal):
        super().__init__()
        self._page = page

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(Text(self._page.message))
            yield Button("OK", id="ok", variant="success")

    @on(Button.Pressed, "#ok")
    def _ok(self) -> None:
        self.action_acknowledge()

    def action_acknowledge(self) -> None:
        self.app.navigate(Acknowledge())


class KubeSwitchApp(App):
    """Runs one switching session; the exit code comes from the controller."""

    TITLE = "kube switch"
    BINDINGS = [Binding("ctrl+c", "interrupt", "Quit", priority=True, show=False)]

    CSS = """
    #title, #help {
        width: 100%;
        content-align: center middle;
    }
    #details {
        height: 10;
        padding: 0 1;
    }
    .info {
        color: $text-muted;
    }
    """

    def __init__(self, controller: NavigationController):
        super().__init__()
        self.controller = controller
        self._shown: list = []

    def on_mount(self) -> None:
        self._sync_screens()

    def action_interrupt(self) -> None:
        self.navigate(Interrupt())

    def navigate(self, event) -> None:
        """Hand an event to the controller and show the resulting pages."""
        outcome = self.controller.handle(event)
        if outcome is not None:
            logger.debug("Exiting with code %d", outcome.code)
            self.exit(return_code=outcome.code, message=outcome.message or None)
            return
        self._sync_screens()

    def _sync_screens(self) -> None:
        pages = self.controller.pages
        keep = 0
        while keep < min(len(pages), len(self._shown)) and pages[keep] == self._shown[keep]:
            keep += 1
        while len(self._shown) > keep:
            self.pop_screen()
            self._shown.pop()
        for page in pages[keep:]:
            self.push_screen(self._screen_for(page))
            self._shown.append(page)

    def _screen_for(self, page) -> Screen:
        if isinstance(page, ContextList):
            return ContextListScreen(self.controller)
        if isinstance(page, DecisionModal):
            return DecisionModalScreen(page)
        if isinstance(page, NamespaceList):
            entry = self.controller.document.entries.get(page.entry)
            return NamespaceListScreen(page, entry.sub_selection if entry else "")
        if isinstance(page, ConfirmationModal):
            return ConfirmationModalScreen(page)
        raise TypeError(f"no screen for page {page!r}")
