from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

SRC_ROOT = Path(__file__).resolve().parents[1] / "src" / "dgo"

_IO_FRAMEWORKS = frozenset(
    {
        "fastapi",
        "starlette",
        "sqlalchemy",
        "alembic",
        "redis",
        "httpx",
        "opentelemetry",
    }
)

# Layers may only import inward: api -> infrastructure -> application -> domain.
LAYER_RULES: dict[str, frozenset[str]] = {
    "domain": _IO_FRAMEWORKS
    | {"pydantic", "prometheus_client", "dgo.api", "dgo.application", "dgo.infrastructure"},
    "application": _IO_FRAMEWORKS | {"dgo.api", "dgo.infrastructure"},
}


@dataclass(frozen=True)
class Violation:
    layer: str
    file_path: Path
    line: int
    module: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _matches_forbidden(module: str, forbidden_modules: frozenset[str]) -> bool:
    return any(
        module == forbidden or module.startswith(f"{forbidden}.")
        for forbidden in forbidden_modules
    )


def _imported_modules(tree: ast.AST) -> Iterable[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def _scan_file(layer: str, file_path: Path) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    forbidden_modules = LAYER_RULES[layer]
    return [
        Violation(layer=layer, file_path=file_path, line=line, module=module)
        for line, module in _imported_modules(tree)
        if _matches_forbidden(module, forbidden_modules)
    ]


def find_violations(layer: str, paths: Sequence[Path]) -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(layer, file_path))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check that dgo's domain and application layers only import inward."
    )
    parser.add_argument(
        "--layer",
        choices=sorted(LAYER_RULES),
        help="Rule set to apply. Without --path, every layer is checked under src/dgo.",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan with the --layer rules (repeatable). Defaults to --layer domain.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.path:
        targets = {args.layer or "domain": [Path(item) for item in args.path]}
    else:
        layers = [args.layer] if args.layer else sorted(LAYER_RULES)
        targets = {layer: [SRC_ROOT / layer] for layer in layers}

    violations: list[Violation] = []
    for layer, paths in targets.items():
        violations.extend(find_violations(layer, paths))
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"[{violation.layer}] {violation.file_path}:{violation.line} -> {violation.module}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
