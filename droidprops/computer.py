"""
Multi-project property computation.

Walks a project tree, derives the properties of every project, nests the
subproject properties under '<project path>.' prefixes and finally widens
the root base directory so that every subproject sits below it.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .android import configure_for_android
from .basedir import find_project_base_dir
from .models import ProjectModel
from .properties import (
    PropertiesMap,
    SONAR_MODULES_PROP,
    SONAR_PROJECT_BASE_DIR_PROP,
    SONAR_PROJECT_KEY_PROP,
    SONAR_PROJECT_NAME_PROP,
    is_android_project,
)

logger = logging.getLogger(__name__)


class PropertyComputer:
    """Computes the scanner properties of a whole project tree"""

    def __init__(self, project: ProjectModel,
                 variant_overrides: Optional[Mapping[str, str]] = None,
                 overrides: Optional[Mapping[str, Any]] = None):
        """
        Args:
            project: Root project of the build
            variant_overrides: Variant name per project path, replacing the
                variant configured in the model
            overrides: Properties applied after everything else
        """
        self.project = project
        self.variant_overrides = dict(variant_overrides or {})
        self.overrides = dict(overrides or {})

    def compute_properties(self) -> PropertiesMap:
        """Compute the unflattened properties of the project tree."""
        if self.project.skip:
            logger.info(f"Project '{self.project.name}' is skipped")
            return PropertiesMap()

        properties = self._compute_project(self.project, is_root=True)
        if SONAR_PROJECT_BASE_DIR_PROP in properties:
            properties.put(SONAR_PROJECT_BASE_DIR_PROP, find_project_base_dir(properties))

        for key, value in self.overrides.items():
            properties.put(key, value)
        return properties

    def compute(self) -> Dict[str, str]:
        """Compute the properties handed to the scanner."""
        return self.compute_properties().flatten()

    def _variant_name(self, project: ProjectModel) -> Optional[str]:
        return self.variant_overrides.get(project.path, project.android_variant)

    def _compute_project(self, project: ProjectModel, is_root: bool = False) -> PropertiesMap:
        properties = PropertiesMap()
        if is_root:
            properties.put(SONAR_PROJECT_KEY_PROP, project.name)
        properties.put(SONAR_PROJECT_NAME_PROP, project.name)
        properties.put(SONAR_PROJECT_BASE_DIR_PROP, project.base_dir)

        if is_android_project(project):
            logger.info(f"Configuring Android project '{project.path}' ({project.kind.value})")
            configure_for_android(project, self._variant_name(project), properties)

        for key, value in project.properties.items():
            properties.put(key, value)

        for child in project.subprojects:
            if child.skip:
                logger.info(f"Project '{child.path}' is skipped")
                continue
            properties.append_prop(SONAR_MODULES_PROP, child.path)
            self._merge_child(properties, self._compute_project(child), prefix=f"{child.path}.")

        return properties

    @staticmethod
    def _merge_child(properties: PropertiesMap, child: PropertiesMap, prefix: str) -> None:
        for key, value in child.items():
            if child.is_collection(key):
                properties.append_props(prefix + key, value)
            else:
                properties.put(prefix + key, value)


def compute_properties(project: ProjectModel,
                       variant_overrides: Optional[Mapping[str, str]] = None,
                       overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, str]:
    """Convenience wrapper around PropertyComputer.compute()."""
    return PropertyComputer(project, variant_overrides, overrides).compute()
