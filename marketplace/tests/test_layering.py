import ast
from pathlib import Path

import pytest

PACKAGE = Path(__file__).resolve().parents[1]


def imported_modules(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            modules.add(node.module)
        elif isinstance(node, ast.Import):
            modules.update(alias.name for alias in node.names)
    return modules


@pytest.mark.parametrize("layer", ["domain", "application"])
def test_inner_layers_do_not_import_infrastructure(layer):
    offenders = {
        str(path.relative_to(PACKAGE)): sorted(
            m for m in imported_modules(path) if m.startswith("marketplace.infrastructure")
        )
        for path in (PACKAGE / layer).rglob("*.py")
    }
    assert {k: v for k, v in offenders.items() if v} == {}


def test_sql_repository_does_not_depend_on_json_backend():
    path = PACKAGE / "infrastructure/repositories/users/sqlalchemy_user_repository.py"
    assert "marketplace.infrastructure.storage.json_store" not in imported_modules(path)
