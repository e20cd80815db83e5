#!/usr/bin/env python3
"""
Fail if the transport layer imports the resource layer.
Checks all Python files under src/tracker_api/core/.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
CORE_DIR = REPO_ROOT / "src" / "tracker_api" / "core"

FORBIDDEN_PREFIXES = (
    "tracker_api.models",
    "tracker_api.queries",
    "tracker_api.project",
    "tracker_api.tracker",
)
FORBIDDEN_RELATIVE = ("models", "queries", "project", "tracker")


def is_forbidden(module: str) -> bool:
    return any(
        module == prefix or module.startswith(prefix + ".")
        for prefix in FORBIDDEN_PREFIXES
    )


def scan_file(path: Path) -> list[str]:
    errors: list[str] = []
    tree = ast.parse(path.read_text())
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                mod = alias.name
                if is_forbidden(mod):
                    errors.append(f"{path}: forbidden import '{mod}'")
        elif isinstance(node, ast.ImportFrom):
            mod = node.module or ""
            # "from ..models import X" climbs out of core into the resource layer
            if node.level >= 2 and mod.split(".")[0] in FORBIDDEN_RELATIVE:
                errors.append(f"{path}: forbidden import '{'.' * node.level}{mod}'")
            elif node.level == 0 and is_forbidden(mod):
                errors.append(f"{path}: forbidden import '{mod}'")
    return errors


def main() -> int:
    violations: list[str] = []
    for py_file in CORE_DIR.rglob("*.py"):
        violations.extend(scan_file(py_file))

    if violations:
        for v in violations:
            print(v, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
