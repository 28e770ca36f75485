"""ConfigStore adapter wrapping the kubeconfig reader/writer."""

from __future__ import annotations

from ..kubeconfig import load_kubeconfig, save_kubeconfig


class YamlConfigStore:
    def load(self, path):
        return load_kubeconfig(path)

    def save(self, document, path) -> None:
        save_kubeconfig(document, path)
