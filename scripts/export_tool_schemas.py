"""Export the input JSON Schema of every Altmetric tool."""

from __future__ import annotations

import json
from pathlib import Path

from altmetric_mcp import __version__
from altmetric_mcp.server import TOOL_SPECS


def main() -> None:
    """Write one JSON document mapping tool names to input schemas."""

    schemas = {spec.name: spec.arguments.model_json_schema() for spec in TOOL_SPECS}
    output_path = Path(__file__).resolve().parent.parent / (
        f"tool_schemas_v{__version__}.json"
    )
    output_path.write_text(json.dumps(schemas, indent=2), encoding="utf-8")


if __name__ == "__main__":
    main()
