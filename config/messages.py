from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_MESSAGES_PATH = Path(__file__).resolve().parent / "messages.yaml"

PROGRESS_KEYS = ("processing", "searching", "analyzing")
ERROR_KEYS = ("empty_input", "no_sources", "no_relevant_sources", "unexpected")
SEARCH_ERROR_KEYS = (
    "configuration",
    "authentication",
    "authorization",
    "quota",
    "bad_request",
    "transient",
    "unknown",
)


@dataclass(frozen=True)
class MessageCatalog:
    greeting: str
    help: str
    results_header: str
    confidence_label: str
    degraded_notice: str
    progress: dict[str, str]
    errors: dict[str, str]
    search_errors: dict[str, str]

    @classmethod
    def from_yaml(cls, path: str | Path | None = None) -> "MessageCatalog":
        catalog_path = Path(path) if path else DEFAULT_MESSAGES_PATH
        if not catalog_path.exists():
            raise ValueError(f"Message catalog not found at {catalog_path}")

        data = yaml.safe_load(catalog_path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Invalid message catalog: expected a mapping at top level")

        for key in ("greeting", "help", "results_header", "confidence_label", "degraded_notice"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"Invalid message catalog: missing '{key}'")

        progress = _require_section(data.get("progress"), PROGRESS_KEYS, "progress")
        errors_data = data.get("errors") or {}
        errors = _require_section(errors_data, ERROR_KEYS, "errors")
        search_errors = _require_section(errors_data.get("search"), SEARCH_ERROR_KEYS, "errors.search")

        return cls(
            greeting=data["greeting"].strip(),
            help=data["help"].strip(),
            results_header=data["results_header"],
            confidence_label=data["confidence_label"],
            degraded_notice=data["degraded_notice"],
            progress=progress,
            errors=errors,
            search_errors=search_errors,
        )

    def search_error(self, category: str) -> str:
        return self.search_errors.get(category, self.search_errors["unknown"])


def _require_section(section: Any, keys: tuple[str, ...], name: str) -> dict[str, str]:
    if not isinstance(section, dict):
        raise ValueError(f"Invalid message catalog: missing section '{name}'")
    missing = [key for key in keys if not isinstance(section.get(key), str)]
    if missing:
        raise ValueError(f"Invalid message catalog: '{name}' lacks {missing}")
    return {key: section[key] for key in keys}
