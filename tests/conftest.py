"""Global test fixtures for the Selo kernel test suite."""
import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Ensure the repository root is on sys.path so that `import selo_project` is
# always resolvable when tests are run from any working directory (e.g., CI).
# ---------------------------------------------------------------------------
_repo_root = Path(__file__).resolve().parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

from selo_project.src.models.primitives import Polygon, Ring  # noqa: E402
from selo_project.src.services.settings_service import SettingsService  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings singleton at a throwaway file for every test."""
    monkeypatch.setenv("SELO_SETTINGS_PATH", str(tmp_path / "settings.json"))
    SettingsService.reset_instance()
    yield tmp_path / "settings.json"
    SettingsService.reset_instance()


@pytest.fixture
def unit_square() -> Ring:
    """Counter-clockwise unit square at the origin."""
    return Ring([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])


@pytest.fixture
def square_with_hole() -> Polygon:
    """3x3 square with a clockwise 1x1 hole in the middle (area 8)."""
    exterior = Ring([(0.0, 0.0), (3.0, 0.0), (3.0, 3.0), (0.0, 3.0)])
    hole = Ring([(1.0, 1.0), (1.0, 2.0), (2.0, 2.0), (2.0, 1.0)])
    return Polygon(exterior, [hole])
