"""Command-line utilities for altmetric_mcp."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .digest import canonical_string, compute_digest
from .settings import get_settings


def _read_stdin() -> str | None:
    """Read JSON payload from stdin if available."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _load_filters(path: str | None, stdin_payload: str | None) -> dict[str, object]:
    """Load a filter set from file or stdin."""
    if path:
        text = Path(path).read_text(encoding="utf-8")
        return _parse_json_dict(text)
    if stdin_payload:
        return _parse_json_dict(stdin_payload)
    raise ValueError("No input provided. Use --input or pipe JSON via stdin.")


def _parse_json_dict(payload: str) -> dict[str, object]:
    """Parse a JSON string and ensure the result is a dictionary."""

    data = json.loads(payload)
    if not isinstance(data, dict):
        raise ValueError("Input JSON must be an object at the top level.")
    return {str(key): value for key, value in data.items()}


def main(argv: list[str] | None = None) -> int:
    """Print the canonical string and digest for an Explorer filter set."""
    parser = argparse.ArgumentParser(
        description=(
            "Compute the Explorer API digest for a JSON filter set. The secret is "
            "read from ALTMETRIC_EXPLORER_API_SECRET."
        )
    )
    parser.add_argument(
        "--input",
        "-i",
        help="Path to a JSON object of filters. If omitted, reads from stdin.",
    )
    parser.add_argument(
        "--canonical-only",
        "-c",
        action="store_true",
        help="Print only the canonical string; no secret is needed.",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Quiet mode: suppress output, just return exit code.",
    )

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    try:
        stdin_payload = _read_stdin()
        filters = _load_filters(args.input, stdin_payload)

        output: dict[str, object] = {"canonical": canonical_string(filters)}
        if not args.canonical_only:
            output["digest"] = compute_digest(
                filters, get_settings().explorer_secret_value
            )

        if not args.quiet:
            print(json.dumps(output, separators=(",", ":"), ensure_ascii=False))
        return 0

    except Exception as exc:
        if not args.quiet:
            print(str(exc), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
