"""Path resolution utilities for vaultpress configuration."""

import os
from pathlib import Path
from typing import Any


def resolve_path(path: str | Path, base_dir: Path | None) -> Path:
    """Resolve a path, making it relative to base_dir if it's relative."""
    path_obj = Path(os.path.expanduser(str(path)))

    # If path is absolute or no base_dir provided, return as-is
    if path_obj.is_absolute() or base_dir is None:
        return path_obj

    return base_dir / path_obj


def resolve_config_paths(
    data: dict[str, Any], keys: set[str], base_dir: Path
) -> dict[str, Any]:
    """Return a copy of `data` with the path-valued `keys` resolved against base_dir.

    Empty and null values are left alone so they still read as "not configured".
    """
    resolved = dict(data)
    for key in keys:
        value = resolved.get(key)
        if isinstance(value, str | Path) and str(value):
            resolved[key] = resolve_path(value, base_dir)
    return resolved


def to_url_path(*segments: str) -> str:
    """Join URL path segments into a single absolute path.

    >>> to_url_path("/images/", "photo.jpg")
    '/images/photo.jpg'
    """
    parts = [segment.strip("/") for segment in segments if segment.strip("/")]
    return "/" + "/".join(parts)
