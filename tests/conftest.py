"""Pytest fixtures and utilities for custom-ui tests."""

import json
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from custom_ui.feedback import RecordingFeedback
from custom_ui.registry import RegistryClient, RegistryLoader


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's registry/config overrides out of the tests."""
    monkeypatch.delenv("CUSTOM_UI_REGISTRY", raising=False)
    monkeypatch.delenv("CUSTOM_UI_CONFIG", raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def make_component(
    name: str,
    dependencies: list[str] | None = None,
    npm_dependencies: list[str] | None = None,
    utils: list[dict] | None = None,
    extra_files: list[dict] | None = None,
) -> dict:
    """Raw registry entry with one component file."""
    files = [
        {
            "path": f"components/ui/{name}.tsx",
            "content": f"export const {name.title()} = () => null\n",
            "type": "component",
        }
    ]
    files.extend(extra_files or [])
    entry = {
        "name": name,
        "description": f"The {name} component",
        "dependencies": dependencies or [],
        "npmDependencies": npm_dependencies or [],
        "files": files,
    }
    if utils is not None:
        entry["utils"] = utils
    return entry


UTILS_FILE = {
    "path": "lib/utils.ts",
    "content": "export function cn() {}\n",
    "type": "utility",
}


@pytest.fixture
def sample_registry_data() -> dict:
    return {
        "version": "1.0.0",
        "components": {
            "button": make_component(
                "button",
                npm_dependencies=["class-variance-authority", "@radix-ui/react-slot"],
                utils=[UTILS_FILE],
            ),
            "card": make_component("card", dependencies=["button"]),
            "badge": make_component("badge"),
        },
        "utils": {
            "cn": {
                "path": "lib/utils.ts",
                "content": "export function cn() {}\n",
                "description": "Class name helper",
            }
        },
    }


@pytest.fixture
def registry_file(temp_dir: Path, sample_registry_data: dict) -> Path:
    path = temp_dir / "registry.json"
    path.write_text(json.dumps(sample_registry_data))
    return path


@pytest.fixture
def registry_client(registry_file: Path) -> RegistryClient:
    return RegistryClient(RegistryLoader(registry_file), delay=0)


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """An initialized project: package.json plus custom-ui.json."""
    project = temp_dir / "project"
    project.mkdir()
    (project / "package.json").write_text(
        json.dumps(
            {
                "name": "demo-app",
                "dependencies": {"react": "^18.2.0"},
                "devDependencies": {"typescript": "^5.0.0"},
            }
        )
    )
    (project / "custom-ui.json").write_text(
        json.dumps(
            {
                "componentsDir": "src/components/ui",
                "utilsDir": "src/lib",
                "cssFramework": "tailwind",
                "typescript": True,
                "projectType": "vite",
            }
        )
    )
    return project


@pytest.fixture
def feedback() -> RecordingFeedback:
    return RecordingFeedback()


@pytest.fixture
def component_factory():
    """Factory for raw registry component entries."""
    return make_component


@pytest.fixture
def mock_tty() -> Generator[None, None, None]:
    """Mock sys.stdin.isatty to return True."""
    with patch("sys.stdin.isatty", return_value=True):
        yield


@pytest.fixture
def mock_no_tty() -> Generator[None, None, None]:
    """Mock sys.stdin.isatty to return False."""
    with patch("sys.stdin.isatty", return_value=False):
        yield


@pytest.fixture
def mock_stdout_tty() -> Generator[None, None, None]:
    """Mock sys.stdout.isatty to return True."""
    with patch("sys.stdout.isatty", return_value=True):
        yield


@pytest.fixture
def mock_no_stdout_tty() -> Generator[None, None, None]:
    """Mock sys.stdout.isatty to return False."""
    with patch("sys.stdout.isatty", return_value=False):
        yield
