#!/usr/bin/env python3
"""Keep environment reads inside the overlay config and logging modules."""

from __future__ import annotations

import argparse
import ast
from pathlib import Path


ALLOWED_FILES = frozenset(
    {
        "overlay_kit/runtime/config.py",
        "overlay_kit/runtime/logging.py",
    }
)


def _is_os_environ(node: ast.expr) -> bool:
    return (
        isinstance(node, ast.Attribute)
        and node.attr == "environ"
        and isinstance(node.value, ast.Name)
        and node.value.id == "os"
    )


def _reads_env(node: ast.AST) -> bool:
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Attribute):
        fn = node.func
        if fn.attr == "getenv" and isinstance(fn.value, ast.Name) and fn.value.id == "os":
            return True
        if fn.attr == "get" and _is_os_environ(fn.value):
            return True
    return isinstance(node, ast.Subscript) and _is_os_environ(node.value)


def collect_violations(root: Path) -> list[str]:
    violations: list[str] = []
    base = root.parent
    for path in sorted(root.rglob("*.py")):
        rel = path.relative_to(base).as_posix()
        if rel in ALLOWED_FILES:
            continue
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        for node in ast.walk(tree):
            if _reads_env(node):
                violations.append(f"{rel}:{getattr(node, 'lineno', 0)} env read outside config")
    return violations


def main() -> int:
    parser = argparse.ArgumentParser(description="Check env read placement.")
    parser.add_argument("--root", default="overlay_kit")
    args = parser.parse_args()

    violations = collect_violations(Path(args.root).resolve())
    if violations:
        print("Env read placement violations:")
        for line in violations:
            print(f"  {line}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
