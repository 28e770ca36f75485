"""Core configuration model (structured view)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    kubeconfig_path: Path
    debug: bool
    log_file: Path | None = None
