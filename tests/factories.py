"""
Model factories shared by the test modules.
"""

from buildexport.core.models.workspace import Configuration, Project


def make_project(**overrides) -> Project:
    """A C++ console app at /ws/app inside workspace /ws."""
    data = {
        "name": "App",
        "location": "/ws/app",
        "workspace_location": "/ws",
        "include_dirs": ["../inc"],
        "files": [
            "/ws/app/src/main.cpp",
            "/ws/app/src/util.c",
            "/ws/app/include/util.h",
        ],
        "configs": [
            Configuration(name="Debug", include_dirs=["gen"], defines=["DEBUG"], symbols="On"),
            Configuration(name="Release", optimize="Speed"),
        ],
    }
    data.update(overrides)
    return Project(**data)
