#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Editor schema for swe.yaml."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from .models import Config

DEFAULT_SCHEMA_PATH = Path(".vscode") / "swe.schema.json"


def build_config_schema() -> dict[str, Any]:
    """JSON schema for swe.yaml; SWE_* environment overrides are not part of it."""
    config_schema = Config.model_json_schema()
    config_schema.setdefault("$schema", "https://json-schema.org/draft/2020-12/schema")
    config_schema["title"] = "swe.yaml"
    config_schema["description"] = (
        "Open SWE Docker workspace settings. "
        "Values can also be set via SWE_* environment variables."
    )
    return config_schema


def generate_config_schema(project_root: Path, output: Optional[Path] = None) -> Path:
    """Write the schema; relative ``output`` paths resolve against the root."""
    schema_path = output if output is not None else DEFAULT_SCHEMA_PATH
    if not schema_path.is_absolute():
        schema_path = project_root / schema_path
    schema_path.parent.mkdir(parents=True, exist_ok=True)

    schema_path.write_text(
        json.dumps(build_config_schema(), indent=2, ensure_ascii=True) + "\n",
        encoding="utf-8",
    )

    return schema_path
