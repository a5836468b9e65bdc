from __future__ import annotations
import json
import os
from typing import Any, Mapping, Optional

from bookery.domain.ports import StoragePort


class StorageLocal(StoragePort):
    """Local filesystem storage for user settings (JSON)."""

    SETTINGS_FILE = "user_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, self.SETTINGS_FILE)

    def save_user_settings(self, payload: Mapping[str, Any]) -> None:
        os.makedirs(self.root, exist_ok=True)
        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump(dict(payload), f, ensure_ascii=False, indent=2, sort_keys=True)

    def load_user_settings(self) -> Optional[dict]:
        """Return stored settings, or ``None`` when nothing was saved yet."""
        path = self.settings_path
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: settings must be a JSON object")
        return data
