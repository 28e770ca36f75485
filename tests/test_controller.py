import copy
from pathlib import Path

import pytest

from kubeswitch.classifier import KeywordClassifier
from kubeswitch.core.controller import NavigationController
from kubeswitch.core.document import ConfigDocument, Entry
from kubeswitch.core.errors import EXIT_SAVE_FAILURE, InvariantViolation, SaveFailure
from kubeswitch.core.ports import ConfigStore, SubSelectionProvider
from kubeswitch.core.state_machine import (
    Acknowledge,
    Choose,
    ConfirmationModal,
    ContextList,
    DecisionAction,
    DecisionModal,
    Escape,
    Exit,
    Interrupt,
    NamespaceList,
    Select,
)

PATH = Path("/tmp/kubeconfig")


class _Store(ConfigStore):
    def __init__(self, fail=False):
        self.fail = fail
        self.saved = []

    def load(self, path):
        raise AssertionError("controller must not reload")

    def save(self, document, path) -> None:
        if self.fail:
            raise SaveFailure(path, "read-only file system")
        self.saved.append((copy.deepcopy(document), path))


class _Provider(SubSelectionProvider):
    def list(self, entry_name: str):
        return ["default", "monitoring", "logging"]


def _document():
    return ConfigDocument(
        entries={
            "dev-a": Entry(cluster="dev", credential="dev-user", sub_selection="default"),
            "prod-east": Entry(cluster="east", credential="admin", sub_selection="default"),
        },
        current_entry="dev-a",
    )


def _controller(store=None):
    return NavigationController(
        document=_document(),
        path=PATH,
        store=store or _Store(),
        classifier=KeywordClassifier(),
        provider=_Provider(),
    )


def test_end_to_end_namespace_switch_on_production_context():
    store = _Store()
    controller = _controller(store)

    assert controller.handle(Select("prod-east")) is None
    assert controller.state.focused == DecisionModal("prod-east", guarded=True)

    assert controller.handle(Choose(DecisionAction.SWITCH_NAMESPACE)) is None
    assert len(store.saved) == 1
    assert store.saved[0][0].current_entry == "prod-east"
    assert isinstance(controller.state.focused, NamespaceList)
    assert "monitoring" in controller.state.focused.namespaces

    assert controller.handle(Select("monitoring")) is None
    assert len(store.saved) == 2
    message = controller.state.focused.message
    assert "monitoring" in message and "prod-east" in message

    assert controller.handle(Acknowledge()) == Exit(0)
    saved, path = store.saved[-1]
    assert path == PATH
    assert saved.current_entry == "prod-east"
    assert saved.entries["prod-east"].sub_selection == "monitoring"


def test_switch_context_saves_once():
    store = _Store()
    controller = _controller(store)
    controller.handle(Select("dev-a"))
    controller.handle(Choose(DecisionAction.SWITCH_CONTEXT))
    assert len(store.saved) == 1
    assert controller.state.focused == ConfirmationModal("Switched to context: dev-a")


def test_guard_does_not_block_context_switch():
    results = {}
    for name in ("dev-a", "prod-east"):
        store = _Store()
        controller = _controller(store)
        controller.handle(Select(name))
        controller.handle(Choose(DecisionAction.SWITCH_CONTEXT))
        results[name] = (controller.document.current_entry, len(store.saved))
    assert results == {"dev-a": ("dev-a", 1), "prod-east": ("prod-east", 1)}


def test_namespace_on_current_context_skips_context_save():
    store = _Store()
    controller = _controller(store)
    controller.handle(Select("dev-a"))
    controller.handle(Choose(DecisionAction.SWITCH_NAMESPACE))
    assert store.saved == []
    controller.handle(Select("logging"))
    assert len(store.saved) == 1
    assert store.saved[0][0].entries["dev-a"].sub_selection == "logging"


def test_escape_from_namespaces_keeps_context_commit():
    store = _Store()
    controller = _controller(store)
    controller.handle(Select("prod-east"))
    controller.handle(Choose(DecisionAction.SWITCH_NAMESPACE))
    controller.handle(Escape())
    assert controller.pages == (ContextList(),)
    assert controller.document.current_entry == "prod-east"
    assert controller.document.entries["prod-east"].sub_selection == "default"
    assert len(store.saved) == 1


def test_cancel_does_not_save():
    store = _Store()
    controller = _controller(store)
    controller.handle(Select("prod-east"))
    controller.handle(Choose(DecisionAction.CANCEL))
    assert controller.pages == (ContextList(),)
    assert store.saved == []


def test_interrupt_exits_without_commit():
    store = _Store()
    controller = _controller(store)
    controller.handle(Select("prod-east"))
    assert controller.handle(Interrupt()) == Exit(0)
    assert store.saved == []
    assert controller.document.current_entry == "dev-a"


def test_save_failure_is_fatal_and_keeps_view():
    controller = _controller(_Store(fail=True))
    controller.handle(Select("prod-east"))
    outcome = controller.handle(Choose(DecisionAction.SWITCH_CONTEXT))
    assert outcome.code == EXIT_SAVE_FAILURE
    assert "read-only" in outcome.message
    assert controller.state.focused == DecisionModal("prod-east", guarded=True)


def test_invariant_holds_after_every_commit():
    store = _Store()
    controller = _controller(store)
    for name, action in (
        ("prod-east", DecisionAction.SWITCH_NAMESPACE),
        ("dev-a", DecisionAction.SWITCH_NAMESPACE),
    ):
        controller.handle(Select(name))
        controller.handle(Choose(action))
        controller.handle(Escape())
    for saved, _ in store.saved:
        assert saved.current_entry in saved.entries


def test_document_rejects_unknown_current_context():
    document = _document()
    with pytest.raises(InvariantViolation):
        document.set_current("missing")
    with pytest.raises(InvariantViolation):
        document.set_sub_selection("missing", "default")


def test_display_order_is_fixed_at_load():
    document = ConfigDocument(
        entries={"b": Entry("c", "u"), "a": Entry("c", "u")},
        current_entry="b",
    )
    assert document.order == ("a", "b")
