"""YAML/JSON file configuration store."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from ..values import format_bool
from ..interfaces import ConfigStore

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)


class FileConfigStore(ConfigStore):
    """Stores options in a YAML or JSON document.

    The format follows the file suffix (``.json`` is JSON, anything else
    YAML). Dotted keys address nested mappings, so ``db.host`` reads
    ``{"db": {"host": ...}}``. A missing file behaves as an empty
    document and is created on first write. The file is re-read on every
    access.

    Scalars are returned as text: booleans as ``true``/``false``, lists as
    comma-separated items.
    """

    def __init__(self, path: str | Path, separator: str = "."):
        self.path = Path(path).expanduser()
        self.separator = separator
        self._is_json = self.path.suffix.lower() in JSON_SUFFIXES

    @property
    def name(self) -> str:
        return f"File ({self.path})"

    @property
    def can_read(self) -> bool:
        return True

    @property
    def can_write(self) -> bool:
        return True

    def read(self, key: str) -> Optional[str]:
        node: Any = self._load()
        for part in key.split(self.separator):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return _to_text(node)

    def write(self, key: str, value: Optional[str]) -> None:
        data = self._load()
        parts = key.split(self.separator)

        if value is None:
            _delete_path(data, parts)
        else:
            node = data
            for part in parts[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = node[part] = {}
                node = child
            node[parts[-1]] = value

        self._save(data)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with open(self.path) as f:
            if self._is_json:
                text = f.read()
                data = json.loads(text) if text.strip() else {}
            else:
                data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping at the top level")
        return data

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            if self._is_json:
                json.dump(data, f, indent=2)
                f.write("\n")
            else:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        logger.debug(f"Saved {self.path}")


def _to_text(node: Any) -> Optional[str]:
    if node is None or isinstance(node, dict):
        return None
    if isinstance(node, bool):
        return format_bool(node)
    if isinstance(node, list):
        return ",".join(_to_text(item) or "" for item in node)
    return str(node)


def _delete_path(data: dict, parts: list[str]) -> None:
    """Remove the leaf at parts and prune parents left empty."""
    if not parts or not isinstance(data, dict) or parts[0] not in data:
        return
    if len(parts) == 1:
        del data[parts[0]]
        return
    child = data[parts[0]]
    _delete_path(child, parts[1:])
    if isinstance(child, dict) and not child:
        del data[parts[0]]
