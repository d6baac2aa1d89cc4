import ast
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

DOMAINS = (
    "account",
    "profile",
    "publish",
    "comment",
    "playlist",
    "watch_later",
    "bookmark",
    "notification",
    "dont_recommend",
    "report",
    "stream",
    "webhooks",
)

DOMAIN_CONFIGS = {
    domain: {
        "paths": [ROOT / "routers" / domain],
        "allowed_prefixes": [f"routers.{domain}", "routers.dependencies"],
    }
    for domain in DOMAINS
}


def _iter_python_files(paths):
    for base in paths:
        if not base.exists():
            continue
        for path in base.rglob("*.py"):
            if path.is_file():
                yield path


def _iter_imported_modules(tree):
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                yield node.module


def _is_cross_domain_import(module_name, allowed_prefixes):
    if not module_name.startswith("routers."):
        return False
    for prefix in allowed_prefixes:
        if module_name == prefix or module_name.startswith(prefix + "."):
            return False
    return True


def test_no_cross_domain_imports():
    """
    Enforces "no cross-domain imports" across all Python modules within each domain,
    including `api.py` routers, and also `service.py`/`repository.py`/`schemas.py`.
    """
    violations = []
    for domain, config in DOMAIN_CONFIGS.items():
        for path in _iter_python_files(config["paths"]):
            tree = ast.parse(path.read_text(), filename=str(path))
            for module_name in _iter_imported_modules(tree):
                if _is_cross_domain_import(module_name, config["allowed_prefixes"]):
                    violations.append(f"{path}: {module_name} ({domain})")

    if violations:
        joined = "\n".join(sorted(violations))
        raise AssertionError(f"Cross-domain imports detected:\n{joined}")


def test_only_account_domain_imports_account_model():
    """
    Data ownership rule: `Account` is owned by the account domain.

    Other domains reach accounts through `core.authenticity` and pass
    `account_id` around instead of querying the table themselves.
    """
    paths = [ROOT / "routers" / domain for domain in DOMAINS if domain != "account"]
    violations = []
    for path in _iter_python_files(paths):
        tree = ast.parse(path.read_text(), filename=str(path))
        for node in ast.walk(tree):
            if isinstance(node, ast.ImportFrom) and node.module == "models":
                for alias in node.names:
                    if alias.name == "Account":
                        violations.append(str(path))

    if violations:
        joined = "\n".join(sorted(set(violations)))
        raise AssertionError(
            "Non-account domains import `Account` directly. Use `core.authenticity` instead:\n"
            + joined
        )


def test_core_does_not_import_domains():
    violations = []
    for path in _iter_python_files([ROOT / "core"]):
        tree = ast.parse(path.read_text(), filename=str(path))
        for module_name in _iter_imported_modules(tree):
            if module_name == "routers" or module_name.startswith("routers."):
                violations.append(f"{path}: {module_name}")

    if violations:
        joined = "\n".join(sorted(violations))
        raise AssertionError(f"core/ imports domain modules:\n{joined}")
