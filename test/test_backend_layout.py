import unittest
from pathlib import Path


class TestBackendLayout(unittest.TestCase):
    def test_backend_code_is_scoped_under_backend_dir(self) -> None:
        repo_root = Path(__file__).resolve().parents[1]

        # Guard-rail: backend code should not drift back to repo root.
        banned_root_dirs = [
            "application",
            "domain",
            "infrastructure",
        ]
        found = [name for name in banned_root_dirs if (repo_root / name).exists()]
        self.assertFalse(
            found,
            msg=(
                "Backend packages must live under `backend/`. "
                f"Found unexpected root-level directories: {found}"
            ),
        )

    def test_every_layer_is_a_package(self) -> None:
        backend_root = Path(__file__).resolve().parents[1] / "backend"
        for layer in ("domain", "application", "infrastructure"):
            package_dirs = [p.parent for p in (backend_root / layer).rglob("*.py") if "__pycache__" not in p.parts]
            missing = sorted(
                str(d.relative_to(backend_root)) for d in set(package_dirs) if not (d / "__init__.py").exists()
            )
            self.assertFalse(missing, msg=f"Missing __init__.py in: {missing}")


if __name__ == "__main__":
    unittest.main()
