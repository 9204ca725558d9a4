"""Shared fixtures and helpers for tests."""

from pathlib import Path

import pytest

from playdate_dev.core.platform import LinuxDistro, OsFamily, PlatformInfo
from playdate_dev.core.settings import Settings

_REPO_ROOT = Path(__file__).parent.parent

BASIC_MAIN_LUA = """--[[
    Basic Playdate Game Template

    Controls:
    - A: Action
]]

import "CoreLibs/graphics"

function playdate.update()
end
"""

BASIC_PDXINFO = """name=TemplateName
author=Your Name
bundleID=com.example.templatename
version=1.0
buildNumber=1
"""


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def linux_platform() -> PlatformInfo:
    return PlatformInfo(os=OsFamily.LINUX, arch="x64", distro=LinuxDistro.DEBIAN)


@pytest.fixture
def macos_platform() -> PlatformInfo:
    return PlatformInfo(os=OsFamily.MACOS, arch="arm64")


@pytest.fixture
def sdk_dir(tmp_path: Path) -> Path:
    """An empty SDK layout with a bin/ directory and no tools."""
    path = tmp_path / "Developer" / "PlaydateSDK"
    (path / "bin").mkdir(parents=True)
    return path


@pytest.fixture
def dev_root(tmp_path: Path) -> Path:
    """A repository root with one template and two examples."""
    root = tmp_path / "dev-root"
    basic = root / "templates" / "basic" / "source"
    basic.mkdir(parents=True)
    (basic / "main.lua").write_text(BASIC_MAIN_LUA, encoding="utf-8")
    (basic / "pdxinfo").write_text(BASIC_PDXINFO, encoding="utf-8")

    plain = root / "templates" / "plain" / "source"
    plain.mkdir(parents=True)
    (plain / "main.lua").write_text("-- no block comment\n", encoding="utf-8")

    hello = root / "examples" / "hello-world"
    (hello / "source").mkdir(parents=True)
    (hello / "source" / "main.lua").write_text("print('hi')\n", encoding="utf-8")
    (hello / "output.pdx").mkdir()

    crank = root / "examples" / "crank-demo" / "source"
    crank.mkdir(parents=True)
    (crank / "main.lua").write_text("print('crank')\n", encoding="utf-8")
    return root


@pytest.fixture
def settings(linux_platform: PlatformInfo, sdk_dir: Path, dev_root: Path) -> Settings:
    return Settings(platform=linux_platform, sdk_path=sdk_dir, dev_root=dev_root)


@pytest.fixture
def installed_pdc(settings: Settings) -> Path:
    """Create a placeholder pdc binary so existence checks pass."""
    settings.pdc_path.write_text("", encoding="utf-8")
    return settings.pdc_path


@pytest.fixture
def installed_pdutil(settings: Settings) -> Path:
    settings.pdutil_path.write_text("", encoding="utf-8")
    return settings.pdutil_path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "MyGame"
    (project / "source").mkdir(parents=True)
    (project / "source" / "main.lua").write_text("function playdate.update() end\n", encoding="utf-8")
    return project
