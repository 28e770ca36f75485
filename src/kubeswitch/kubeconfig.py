"""Kubeconfig file access for kubeswitch.

Reads a kubeconfig into a ConfigDocument and writes the switcher's changes
(current-context, per-context namespace) back, leaving every other field of
the file as it was.
"""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path
import tempfile

import yaml

from .core.document import ConfigDocument, Entry
from .core.errors import ConfigNotFound, ConfigParseError, SaveFailure

logger = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"


def default_kubeconfig_path() -> Path:
    return Path.home() / ".kube" / "config"


def resolve_kubeconfig_path(environ=None) -> Path:
    """Return the kubeconfig path from $KUBECONFIG or the default location.

    A $KUBECONFIG list is not merged; its first element is used.
    """
    environ = os.environ if environ is None else environ
    value = environ.get(KUBECONFIG_ENV, "")
    first = next((part for part in value.split(os.pathsep) if part), "")
    if first:
        return Path(first).expanduser()
    return default_kubeconfig_path()


def _named_items(raw: dict, section: str, path: Path) -> list[dict]:
    items = raw.get(section) or []
    if not isinstance(items, list):
        raise ConfigParseError(path, f"'{section}' must be a list")
    return items


def document_from_mapping(raw: dict, path: Path) -> ConfigDocument:
    entries: dict[str, Entry] = {}
    for item in _named_items(raw, "contexts", path):
        if not isinstance(item, dict) or not item.get("name"):
            raise ConfigParseError(path, "context without a name")
        context = item.get("context") or {}
        if not isinstance(context, dict):
            raise ConfigParseError(path, f"context {item['name']!r} must be a mapping")
        entries[str(item["name"])] = Entry(
            cluster=str(context.get("cluster") or ""),
            credential=str(context.get("user") or ""),
            sub_selection=str(context.get("namespace") or ""),
        )

    current = str(raw.get("current-context") or "")
    if current and current not in entries:
        logger.warning("current-context %r does not name a context in %s", current, path)
    return ConfigDocument(entries=entries, current_entry=current, raw=raw)


def load_kubeconfig(path: Path) -> ConfigDocument:
    path = Path(path)
    try:
        text = path.read_text()
    except FileNotFoundError:
        raise ConfigNotFound(path, "no such file") from None
    except OSError as e:
        raise ConfigParseError(path, str(e)) from e

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(path, str(e)) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigParseError(path, "top level must be a mapping")

    document = document_from_mapping(raw, path)
    logger.debug("Loaded %d contexts from %s", len(document.entries), path)
    return document


def document_to_mapping(document: ConfigDocument) -> dict:
    raw = dict(document.raw)
    raw["current-context"] = document.current_entry
    contexts = []
    for item in raw.get("contexts") or []:
        item = dict(item)
        entry = document.entries.get(str(item.get("name")))
        if entry is not None:
            context = dict(item.get("context") or {})
            if entry.sub_selection:
                context["namespace"] = entry.sub_selection
            else:
                context.pop("namespace", None)
            item["context"] = context
        contexts.append(item)
    if contexts:
        raw["contexts"] = contexts
    return raw


def save_kubeconfig(document: ConfigDocument, path: Path) -> None:
    """Write the document to ``path``.

    The file is replaced atomically: readers see either the old or the new
    content, never a partial write. A symlinked kubeconfig is written
    through to its target.
    """
    path = Path(path)
    try:
        target = path.resolve()
        text = yaml.safe_dump(document_to_mapping(document), default_flow_style=False, sort_keys=False)
        fd, tmp_name = tempfile.mkstemp(prefix=".kubeswitch-", dir=target.parent)
        try:
            with os.fdopen(fd, "w") as fh:
                fh.write(text)
            if target.exists():
                os.chmod(tmp_name, target.stat().st_mode & 0o777)
            else:
                os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, target)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise
    except (OSError, yaml.YAMLError) as e:
        raise SaveFailure(path, str(e)) from e
    logger.debug("Saved kubeconfig to %s", path)
