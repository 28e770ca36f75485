"""Env configuration adapter producing a structured AppConfig."""

from __future__ import annotations

from ..config import config as env_config
from ..core.config_model import AppConfig
from ..kubeconfig import resolve_kubeconfig_path


def load_app_config(environ=None) -> AppConfig:
    return AppConfig(
        kubeconfig_path=resolve_kubeconfig_path(environ),
        debug=env_config.DEBUG,
        log_file=env_config.log_file_path(),
    )
