"""
Android property populator.

Translates a resolved variant into scanner properties: sources or tests,
compiled classes, libraries and JDK settings. Only call this for projects
applying one of the Android plugins.
"""

import logging
from typing import Iterable, List, Optional

from .exceptions import ModelAccessError
from .models import ProjectKind, ProjectModel, SourceProvider, Variant, CompilerTask
from .properties import (
    PropertiesMap,
    SONAR_SOURCES_PROP,
    SONAR_TESTS_PROP,
    exists,
    nonempty_or_none,
)
from .variants import find_variant, get_boot_classpath

logger = logging.getLogger(__name__)


def configure_for_android(project: ProjectModel, explicit_variant_name: Optional[str],
                          properties: PropertiesMap) -> None:
    """Populate properties for the variant selected on an Android project."""
    variant = find_variant(project, explicit_variant_name)
    if variant is None:
        logger.warning(f"No variant found for '{project.name}'. No android specific configuration will be done")
        return

    boot_classpath = get_boot_classpath(project)
    if boot_classpath is None:
        logger.warning(f"Unable to find boot classpath for '{project.name}'")
        boot_classpath = []

    if project.kind is ProjectKind.TEST:
        # Instrumentation tests only
        populate_properties(properties, boot_classpath, variant, True)
        return

    populate_properties(properties, boot_classpath, variant, False)
    # Local tests
    if variant.unit_test_variant is not None:
        populate_properties(properties, boot_classpath, variant.unit_test_variant, True)
    # Instrumentation tests
    if variant.test_variant is not None:
        populate_properties(properties, boot_classpath, variant.test_variant, True)


def populate_properties(properties: PropertiesMap, boot_classpath: Iterable[str],
                        variant: Variant, is_test: bool) -> None:
    src_dirs = []
    for source_set in variant.source_sets:
        src_dirs.extend(get_files_from_source_set(source_set))
    sources_or_tests = nonempty_or_none(exists(src_dirs))
    if sources_or_tests is not None:
        properties.append_props(SONAR_TESTS_PROP if is_test else SONAR_SOURCES_PROP, sources_or_tests)

    java_compile = get_java_compiler(variant)
    if java_compile is None:
        logger.warning(
            f"Unable to find Java compiler on variant '{variant.name}'. "
            "Analysis will be less accurate without bytecode."
        )
    else:
        properties.populate_jdk_properties(java_compile.configuration)

    # Two model accessors may list the same jars, keep each once
    libraries = dict.fromkeys(boot_classpath)
    if variant.apk:
        libraries.update(dict.fromkeys(get_libraries(variant)))
    if java_compile is not None:
        libraries.update(dict.fromkeys(exists(java_compile.classpath)))

    class_dirs = []
    if java_compile is not None and java_compile.destination_dir:
        class_dirs.append(java_compile.destination_dir)

    if is_test:
        properties.set_test_classpath_props(class_dirs, list(libraries))
    else:
        properties.set_main_classpath_props(False, class_dirs, list(libraries))


def get_libraries(variant: Variant) -> List[str]:
    """
    Compile libraries of an apk variant.

    Older plugin versions expose get_compile_libraries(); newer ones only
    get_compile_classpath(). A missing or unimplemented accessor falls back,
    any other failure is fatal.
    """
    accessor = getattr(variant, 'get_compile_libraries', None)
    if accessor is None:
        return variant.get_compile_classpath()
    try:
        return list(accessor())
    except NotImplementedError:
        logger.debug(f"get_compile_libraries unsupported on '{variant.name}', using compile classpath")
        return variant.get_compile_classpath()
    except Exception as e:
        raise ModelAccessError("Unable to call get_compile_libraries") from e


def get_java_compiler(variant: Variant) -> Optional[CompilerTask]:
    return getattr(variant, 'java_compile', None)


def get_files_from_source_set(source_set: SourceProvider) -> List[str]:
    return source_set.all_paths()
