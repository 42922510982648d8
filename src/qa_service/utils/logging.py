"""
Project metadata lookup (name / version) used to stamp log records.

The installed distribution metadata is preferred; a source checkout falls back
to the nearest pyproject.toml.
"""
from pathlib import Path
from importlib import metadata as importlib_metadata
from typing import Any

try:
    import tomllib as _toml_loader  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as _toml_loader    # declared for Python < 3.11 in pyproject.toml

DEFAULT_PROJECT_NAME = "qa-service"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    p = start
    for _ in range(max_up):
        candidate = p / "pyproject.toml"
        if candidate.exists():
            return candidate
        if p.parent == p:
            break
        p = p.parent
    return None


def get_pyproject_value(key: str, start: Path | None = None, max_up: int = 5, default: Any = None) -> Any:
    """
    Return the value for a dot-separated `key` (e.g. "project.version") from the
    nearest pyproject.toml, or `default` when the file or key is missing/unreadable.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    pyproject = find_pyproject(start_path, max_up=max_up)
    if pyproject is None:
        return default

    try:
        with pyproject.open("rb") as f:
            cur = _toml_loader.load(f)
    except (OSError, _toml_loader.TOMLDecodeError):
        return default

    for part in key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def get_project_name(start: Path | None = None) -> str:
    return get_pyproject_value("project.name", start=start, default=DEFAULT_PROJECT_NAME)


def get_project_version(start: Path | None = None, default: str = "unknown") -> str:
    name = get_project_name(start=start)
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        pass
    return get_pyproject_value("project.version", start=start, default=default)


__all__ = [
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
