import ast
import unittest
from pathlib import Path


def _iter_py_files(root: Path) -> list[Path]:
    return sorted(
        p
        for p in root.rglob("*.py")
        if "__pycache__" not in p.parts
    )


def _find_forbidden_imports(py_file: Path, forbidden_roots: tuple[str, ...]) -> list[str]:
    """Absolute imports in `py_file` whose module starts with one of `forbidden_roots`."""
    try:
        tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
    except SyntaxError as exc:
        return [f"SyntaxError while parsing {py_file}: {exc}"]

    offenders: list[str] = []

    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                name = alias.name
                if name.startswith(forbidden_roots):
                    offenders.append(f"import {name}")
        elif isinstance(node, ast.ImportFrom):
            # Relative import (module=None) is always within the package boundary.
            if node.module is None:
                continue
            mod = node.module
            if mod.startswith(forbidden_roots):
                offenders.append(f"from {mod} import ...")

    return offenders


class TestLayerBoundaryImports(unittest.TestCase):
    def _assert_clean(self, layer: str, forbidden: tuple[str, ...]) -> None:
        repo_root = Path(__file__).resolve().parents[1]
        layer_root = repo_root / "backend" / layer
        self.assertTrue(layer_root.exists(), msg=f"Expected {layer} dir: {layer_root}")

        violations: list[str] = []
        for py_file in _iter_py_files(layer_root):
            offenders = _find_forbidden_imports(py_file, forbidden)
            if offenders:
                violations.append(f"{py_file.relative_to(repo_root)}: {offenders}")

        self.assertFalse(
            violations,
            msg=f"`backend/{layer}` must not import {forbidden}.\n" + "\n".join(violations),
        )

    def test_domain_is_pure(self) -> None:
        self._assert_clean("domain", ("infrastructure", "application", "aiohttp", "pydantic", "dotenv"))

    def test_application_does_not_import_transport(self) -> None:
        """
        Application services log their own state transitions (fetch discarded,
        mutation failed, ...), so `infrastructure.utils.format_kv` is the one
        infrastructure module they may import. It is pure string formatting
        without project or third-party imports. Every other infrastructure
        package and the transport libraries stay out of this layer.
        """
        self._assert_clean(
            "application",
            (
                "aiohttp",
                "pydantic",
                "dotenv",
                "infrastructure.catalog",
                "infrastructure.config",
                "infrastructure.timing",
            ),
        )

    def test_application_only_reaches_infrastructure_for_log_formatting(self) -> None:
        repo_root = Path(__file__).resolve().parents[1]
        allowed = {"infrastructure.utils", "infrastructure.utils.log_format"}

        violations: list[str] = []
        for py_file in _iter_py_files(repo_root / "backend" / "application"):
            tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
            for node in ast.walk(tree):
                if isinstance(node, ast.ImportFrom) and node.module and node.module.startswith("infrastructure"):
                    names = {alias.name for alias in node.names}
                    if node.module not in allowed or names != {"format_kv"}:
                        violations.append(f"{py_file.relative_to(repo_root)}: from {node.module} import {sorted(names)}")
                elif isinstance(node, ast.Import):
                    violations.extend(
                        f"{py_file.relative_to(repo_root)}: import {alias.name}"
                        for alias in node.names
                        if alias.name.startswith("infrastructure")
                    )

        self.assertFalse(violations, msg="\n".join(violations))

    def test_log_formatter_has_no_project_imports(self) -> None:
        repo_root = Path(__file__).resolve().parents[1]
        log_format = repo_root / "backend" / "infrastructure" / "utils" / "log_format.py"
        offenders = _find_forbidden_imports(log_format, ("infrastructure", "application", "domain", "aiohttp", "pydantic", "dotenv"))
        self.assertFalse(offenders, msg=f"log_format.py must stay dependency-free: {offenders}")


if __name__ == "__main__":
    unittest.main()
