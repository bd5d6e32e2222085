"""
Template store - the registry of API templates.

Built-in templates are loaded first, then the persisted overlay on top of
them (saved entries win). Every mutation is written straight back to disk.
Disk failures are logged, never raised: the in-memory map stays
authoritative for the rest of the session.
"""
import copy
import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, List, Optional

from request_mcp.defaults import load_builtin_templates
from request_mcp.errors import DuplicateIdError, NotFoundError, ValidationError

log = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "name", "description", "api")


class JsonFileBackend:
    """Persist the template map as one JSON object (id -> template)."""

    def __init__(self, file_path):
        self.file_path = Path(file_path)

    def load(self) -> Optional[dict]:
        """Return the saved map, or None if nothing has been saved yet.

        Raises OSError / ValueError when the file exists but can't be used.
        """
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        if not isinstance(data, dict):
            raise ValueError(f"{self.file_path} does not contain a JSON object")
        return data

    def save(self, templates: dict) -> None:
        """Write JSON atomically (temp file then rename)."""
        os.makedirs(self.file_path.parent, exist_ok=True)
        tmp_path = f"{self.file_path}.{os.getpid()}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(templates, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.file_path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)


class TemplateStore:
    """In-memory template registry backed by an injected persistence backend."""

    def __init__(self, backend, builtins: Optional[Dict[str, dict]] = None):
        self.backend = backend
        self._builtins = builtins
        self._templates: Dict[str, dict] = {}
        self._lock = threading.RLock()

    def initialize(self) -> int:
        """Load built-ins, overlay saved templates, then save the union.

        Returns the number of templates loaded.
        """
        builtins = self._builtins if self._builtins is not None else load_builtin_templates()

        with self._lock:
            self._templates = {tid: copy.deepcopy(t) for tid, t in builtins.items()}

            try:
                saved = self.backend.load()
            except (OSError, ValueError) as e:
                log.warning("Using default API configurations (could not read saved configs: %s)", e)
                saved = None

            if saved is None:
                log.info("Using default API configurations")
            else:
                for template_id, template in saved.items():
                    if not isinstance(template, dict):
                        log.warning("Skipping saved entry %s: not an object", template_id)
                        continue
                    self._templates[template_id] = template

            self._persist()
            log.info("Loaded %d API templates", len(self._templates))
            return len(self._templates)

    def get(self, template_id) -> Optional[dict]:
        with self._lock:
            template = self._templates.get(template_id)
            return copy.deepcopy(template) if template is not None else None

    def __contains__(self, template_id) -> bool:
        with self._lock:
            return template_id in self._templates

    def __len__(self) -> int:
        with self._lock:
            return len(self._templates)

    def list(self) -> List[dict]:
        """Summaries of every template. The api section is never included."""
        with self._lock:
            return [
                {
                    "id": template.get("id", template_id),
                    "name": template.get("name"),
                    "description": template.get("description"),
                    "params": copy.deepcopy(template.get("params") or {}),
                }
                for template_id, template in self._templates.items()
            ]

    def register(self, template) -> dict:
        if not isinstance(template, dict) or not all(template.get(field) for field in REQUIRED_FIELDS):
            raise ValidationError("API configuration missing required fields")

        template_id = template["id"]
        if not isinstance(template_id, str):
            raise ValidationError("API id must be a string")
        if not isinstance(template["api"], dict):
            raise ValidationError("API configuration field api must be an object")
        with self._lock:
            if template_id in self._templates:
                raise DuplicateIdError(template_id)
            self._templates[template_id] = copy.deepcopy(template)
            self._persist()

        log.info("Registered API template %s", template_id)
        return copy.deepcopy(template)

    def remove(self, template_id) -> None:
        with self._lock:
            if template_id not in self._templates:
                raise NotFoundError(template_id, f"API {template_id} does not exist")
            del self._templates[template_id]
            self._persist()

        log.info("Deleted API template %s", template_id)

    def _persist(self) -> bool:
        try:
            self.backend.save(copy.deepcopy(self._templates))
        except (OSError, TypeError, ValueError) as e:
            log.error("Failed to save API configurations: %s", e)
            return False
        return True
