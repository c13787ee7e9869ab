"""
Variant resolution.

Picks the one build variant whose sources and classpath are handed to the
scanner. Without an explicit choice the first variant of the test build type
is preferred: release variants may be obfuscated, and unit tests and coverage
reports are usually collected in debug mode.
"""

import logging
from typing import List, Optional, Sequence

from .exceptions import InvalidVariantError
from .models import ProjectKind, ProjectModel, Variant

logger = logging.getLogger(__name__)


def resolve_variant(candidates: Sequence[Variant],
                    preferred_build_type: Optional[str] = None,
                    explicit_name: Optional[str] = None,
                    project_name: str = "") -> Optional[Variant]:
    """
    Select a variant among candidates.

    Args:
        candidates: Variants in the order the plugin declares them
        preferred_build_type: Build type to prefer when no name is given
        explicit_name: Variant name configured by the user

    Returns:
        The selected variant, or None when there are no candidates

    Raises:
        InvalidVariantError: explicit_name matches no candidate
    """
    if not candidates:
        return None

    if explicit_name is None:
        result = next(
            (v for v in candidates
             if preferred_build_type is not None and v.build_type == preferred_build_type),
            candidates[0],
        )
        logger.info(f"No variant name specified to be used for analysis. Default to '{result.name}'")
        return result

    for variant in candidates:
        if variant.name == explicit_name:
            return variant
    raise InvalidVariantError(explicit_name, [v.name for v in candidates], project_name)


def get_candidates(project: ProjectModel) -> List[Variant]:
    if project.android is None or not project.kind.has_variants:
        return []
    return list(project.android.variants)


def get_boot_classpath(project: ProjectModel) -> Optional[List[str]]:
    if project.android is None or not project.kind.has_variants:
        return None
    return project.android.boot_classpath


def get_test_build_type(project: ProjectModel) -> Optional[str]:
    if project.android is None or not project.kind.has_test_build_type:
        return None
    return project.android.test_build_type


def find_variant(project: ProjectModel, explicit_name: Optional[str] = None) -> Optional[Variant]:
    """Resolve the variant to analyse for a project, dispatching on its kind."""
    kind = project.kind
    if not kind.has_variants:
        if kind is ProjectKind.FEATURE:
            logger.debug(f"Feature project '{project.name}' exposes no variants")
        return None

    return resolve_variant(
        get_candidates(project),
        get_test_build_type(project),
        explicit_name,
        project_name=project.name,
    )
