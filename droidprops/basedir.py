"""
Base directory reconciliation.

Subprojects may declare base directories outside of the root project's
directory. The scanner needs one base directory above all of them, so the
root base directory is widened to the longest common path prefix.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Mapping, Tuple, Union, Any

from .properties import PropertiesMap, SONAR_PROJECT_BASE_DIR_PROP

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

BASE_DIR_SUFFIX = ".projectBaseDir"


def _normalize(path: PathLike) -> Path:
    return Path(os.path.abspath(os.fspath(path)))


def _common_parts(left: Tuple[str, ...], right: Tuple[str, ...]) -> Tuple[str, ...]:
    common = []
    for a, b in zip(left, right):
        if a != b:
            break
        common.append(a)
    return tuple(common)


def reconcile_base_dir(root_base_dir: PathLike, all_base_dirs: Iterable[PathLike]) -> Path:
    """
    Widen root_base_dir until every other base directory sits below it.

    Directories on another filesystem root are ignored, as are directories
    sharing nothing but the filesystem root with the current base directory.

    Args:
        root_base_dir: Base directory of the root project
        all_base_dirs: Base directories of every project

    Returns:
        Normalized absolute common base directory
    """
    root = _normalize(root_base_dir)

    for base_dir in all_base_dirs:
        normalized = _normalize(base_dir)

        if normalized.anchor != root.anchor:
            logger.debug(f"Ignoring base directory on another root: {normalized}")
            continue

        if normalized.parts[:len(root.parts)] == root.parts:
            continue

        common = _common_parts(root.parts, normalized.parts)
        if len(common) <= 1:
            logger.debug(f"Ignoring base directory with no common parent: {normalized}")
            continue

        root = Path(*common)
        logger.debug(f"Project base directory widened to {root}")

    return root


def find_project_base_dir(properties: Union[PropertiesMap, Mapping[str, Any]]) -> str:
    """Reconcile sonar.projectBaseDir with every '*.projectBaseDir' property."""
    root_base_dir = properties[SONAR_PROJECT_BASE_DIR_PROP]
    all_base_dirs = [
        str(value) for key, value in properties.items()
        if key.endswith(BASE_DIR_SUFFIX)
    ]
    return str(reconcile_base_dir(str(root_base_dir), all_base_dirs))
