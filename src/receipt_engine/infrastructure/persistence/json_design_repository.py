"""JSON-file-backed implementation of DesignRepository.

One ``<name>.json`` per design, in the editor's export shape
``{"elements": [...]}``.  Names missing from the directory are looked up
in an optional fallback repository (the built-in presets).
"""

from __future__ import annotations

import json
import re
from pathlib import Path

from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.elements import DesignDocument
from receipt_engine.domain.repository.design_repository import DesignRepository

_VALID_NAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class JsonDesignRepository(DesignRepository):

    def __init__(self, directory: Path, fallback: DesignRepository | None = None) -> None:
        self._directory = directory
        self._fallback = fallback
        self._directory.mkdir(parents=True, exist_ok=True)

    # --- DesignRepository interface -------------------------------------------

    def get_by_name(self, name: str) -> DesignDocument | None:
        path = self._path_for(name)
        if path.exists():
            return DesignDocument.from_raw(self._load_raw(path), name=name)
        if self._fallback is not None:
            return self._fallback.get_by_name(name)
        return None

    def list_names(self) -> list[str]:
        names = {path.stem for path in self._directory.glob("*.json")}
        if self._fallback is not None:
            names.update(self._fallback.list_names())
        return sorted(names)

    def save(self, design: DesignDocument) -> None:
        if not design.name:
            raise ValidationError("Design needs a name to be stored")
        self._path_for(design.name).write_text(
            json.dumps(design.to_dict(), indent=2) + "\n", encoding="utf-8"
        )

    # --- File helpers ---------------------------------------------------------

    def _path_for(self, name: str) -> Path:
        if not _VALID_NAME.match(name):
            raise ValidationError(
                f"Invalid design name '{name}'. Use letters, digits, '-' and '_'."
            )
        return self._directory / f"{name}.json"

    @staticmethod
    def _load_raw(path: Path) -> dict | list:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{path} is not valid JSON: {exc}") from exc
