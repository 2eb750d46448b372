"""
Local app configuration file.

The file is YAML: the app name under ``app`` and the configuration
definition keys at top level, the same shape the control plane returns.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field

from .errors import AppConfigNotFound

__all__ = ["AppConfig", "DEFAULT_CONFIG_FILENAME", "resolve_config_path", "load_app_config", "write_app_config"]

DEFAULT_CONFIG_FILENAME = "platform.yaml"


class AppConfig(BaseModel):
    """An app name plus its configuration definition."""
    app_name: Optional[str] = Field(default=None, description="App this configuration belongs to")
    definition: Dict[str, Any] = Field(default_factory=dict, description="Configuration definition")

    def to_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {}
        if self.app_name:
            document["app"] = self.app_name
        document.update(self.definition)
        return document

    @classmethod
    def from_document(cls, document: Optional[Dict[str, Any]]) -> AppConfig:
        data = dict(document or {})
        app_name = data.pop("app", None)
        return cls(app_name=app_name, definition=data)


def resolve_config_path(path: Optional[str] = None, working_dir: Optional[Path] = None) -> Path:
    """
    Resolve the config file path.

    A directory resolves to the default file name inside it; no path at all
    resolves to the default file name in ``working_dir`` (or the cwd).
    """
    base = working_dir or Path.cwd()
    if path is None:
        return base / DEFAULT_CONFIG_FILENAME
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = base / candidate
    if candidate.is_dir():
        return candidate / DEFAULT_CONFIG_FILENAME
    return candidate


def load_app_config(path: Path) -> AppConfig:
    """
    Load an app config file.

    Raises:
        AppConfigNotFound: If the file does not exist
        ValueError: If the file is not a YAML mapping
    """
    if not path.exists():
        raise AppConfigNotFound(f"App config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"App config {path} must be a mapping, got {type(data).__name__}")
    return AppConfig.from_document(data)


def write_app_config(path: Path, config: AppConfig) -> Path:
    """
    Write an app config file atomically using temp file + rename.

    The temp file lives next to the target so the rename never crosses
    filesystems; it is removed if anything fails before the rename.

    Returns:
        Path to the written file
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.parent / f"{path.name}.tmp.{os.getpid()}"

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config.to_document(), f, default_flow_style=False, sort_keys=False)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, path)
        return path

    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise
