import asyncio

import yaml

from kubeswitch.adapters.config_store import YamlConfigStore
from kubeswitch.classifier import KeywordClassifier
from kubeswitch.core.controller import NavigationController
from kubeswitch.core.errors import EXIT_SAVE_FAILURE, SaveFailure
from kubeswitch.core.ports import ConfigStore
from kubeswitch.core.state_machine import ContextList, NamespaceList
from kubeswitch.kubeconfig import load_kubeconfig
from kubeswitch.namespaces import StaticNamespaceProvider
from kubeswitch.tui import ContextListScreen, DecisionModalScreen, KubeSwitchApp, NamespaceListScreen

KUBECONFIG = """\
contexts:
- name: dev-a
  context: {cluster: dev, user: dev-user, namespace: default}
- name: prod-east
  context: {cluster: east, user: admin, namespace: default}
current-context: dev-a
"""


class _ReadOnlyStore(ConfigStore):
    def load(self, path):
        return load_kubeconfig(path)

    def save(self, document, path) -> None:
        raise SaveFailure(path, "read-only file system")


def _app(tmp_path, store=None):
    path = tmp_path / "config"
    path.write_text(KUBECONFIG)
    controller = NavigationController(
        document=load_kubeconfig(path),
        path=path,
        store=store or YamlConfigStore(),
        classifier=KeywordClassifier(),
        provider=StaticNamespaceProvider(),
    )
    return KubeSwitchApp(controller), path


def test_switch_namespace_through_the_ui(tmp_path):
    app, path = _app(tmp_path)

    async def _drive():
        async with app.run_test() as pilot:
            await pilot.pause()
            assert isinstance(app.screen, ContextListScreen)
            await pilot.press("down", "enter")
            await pilot.pause()
            assert isinstance(app.screen, DecisionModalScreen)
            await pilot.press("n")
            await pilot.pause()
            assert isinstance(app.screen, NamespaceListScreen)
            # monitoring is the fifth namespace
            await pilot.press("down", "down", "down", "down", "enter")
            await pilot.pause()
            await pilot.press("escape")

    asyncio.run(_drive())

    assert app.return_code == 0
    raw = yaml.safe_load(path.read_text())
    assert raw["current-context"] == "prod-east"
    contexts = {item["name"]: item["context"] for item in raw["contexts"]}
    assert contexts["prod-east"]["namespace"] == "monitoring"


def test_escape_from_namespaces_returns_to_context_list(tmp_path):
    app, path = _app(tmp_path)

    async def _drive():
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("down", "enter")
            await pilot.pause()
            await pilot.press("n")
            await pilot.pause()
            assert isinstance(app.controller.state.focused, NamespaceList)
            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, ContextListScreen)
            assert app.controller.pages == (ContextList(),)
            await pilot.press("ctrl+c")

    asyncio.run(_drive())

    assert app.return_code == 0
    assert yaml.safe_load(path.read_text())["current-context"] == "prod-east"


def test_save_failure_exits_with_error_code(tmp_path):
    app, path = _app(tmp_path, store=_ReadOnlyStore())

    async def _drive():
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("down", "enter")
            await pilot.pause()
            assert isinstance(app.screen, DecisionModalScreen)
            await pilot.press("c")

    asyncio.run(_drive())

    assert app.return_code == EXIT_SAVE_FAILURE
    assert yaml.safe_load(path.read_text())["current-context"] == "dev-a"
