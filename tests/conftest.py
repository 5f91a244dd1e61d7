"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from buildexport.core.models.workspace import Configuration, Project, Workspace

from tests.factories import make_project


@pytest.fixture
def project() -> Project:
    return make_project()


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """Two-project workspace rooted in a real temp directory."""
    root = tmp_path.as_posix()
    return Workspace(
        name="demo",
        location=root,
        configurations=["Debug", "Release"],
        projects=[
            Project(
                name="Lib",
                kind="StaticLib",
                location=f"{root}/lib",
                files=[f"{root}/lib/lib.cpp"],
                configs=[Configuration(name="Debug"), Configuration(name="Release")],
            ),
            Project(
                name="App",
                location=f"{root}/app",
                dependson=["Lib"],
                files=[f"{root}/app/main.cpp"],
                libs=["Lib"],
                configs=[Configuration(name="Debug"), Configuration(name="Release")],
            ),
        ],
    )
