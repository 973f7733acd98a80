# Doot Test Fixtures
# Pytest fixtures for Doot tests

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import yaml

from doot.config.schema import DootConfig


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def repo_dir(temp_dir: Path) -> Path:
    """Repository root holding the managed group directories."""
    repo = temp_dir / "repo"
    repo.mkdir()
    return repo


@pytest.fixture
def system_dir(temp_dir: Path) -> Path:
    """Stand-in for the target locations on the machine."""
    system = temp_dir / "system"
    system.mkdir()
    return system


@pytest.fixture
def write_files() -> Callable[[Path, dict], None]:
    """Write a {relative_path: content} mapping below a root."""

    def _write(root: Path, files: dict) -> None:
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")

    return _write


@pytest.fixture
def sample_config(system_dir: Path) -> dict:
    """Create sample configuration dict."""
    return {
        "version": "v1",
        "mode": "file",
        "plans": {
            "all": None,
            "minimal": ["bash"],
        },
        "groups": {
            "bash": {
                "nux": str(system_dir / "home"),
                "mac": "$HOME",
            },
            "nvim": {
                "nux": str(system_dir / "nvim"),
            },
        },
    }


@pytest.fixture
def config(sample_config: dict) -> DootConfig:
    return DootConfig.model_validate(sample_config)


@pytest.fixture
def config_file(repo_dir: Path, sample_config: dict) -> Path:
    """Create a configuration file in the repository root."""
    config_path = repo_dir / "doot.yaml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config, f, default_flow_style=False)

    return config_path
