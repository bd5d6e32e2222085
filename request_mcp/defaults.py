"""
Built-in API templates.

One YAML file per template in api_index/. Files starting with "_" are
skipped; a file that fails to parse is logged and skipped.
"""
import logging

import yaml

from request_mcp.config import API_INDEX_DIR

log = logging.getLogger(__name__)


def load_builtin_templates(index_dir=API_INDEX_DIR) -> dict:
    """Load all built-in templates from YAML files, keyed by id."""
    templates = {}

    for yaml_file in sorted(index_dir.glob("*.yaml")):
        if yaml_file.name.startswith("_"):
            continue

        try:
            with open(yaml_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            log.warning("Failed to load %s: %s", yaml_file.name, e)
            continue

        if isinstance(data, dict) and data.get("id"):
            templates[data["id"]] = data
        else:
            log.warning("Skipping %s: no template id", yaml_file.name)

    return templates
