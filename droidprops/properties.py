"""
Properties accumulator and the writers that fill it.

A PropertiesMap maps a scanner property key to either a scalar or an
ordered, duplicate-free collection of strings. Collections only grow;
scalars are overwritten by later writes.
"""

import os
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .models import CompilerConfiguration, ProjectModel

T = TypeVar('T')

SONAR_PROJECT_KEY_PROP = "sonar.projectKey"
SONAR_PROJECT_NAME_PROP = "sonar.projectName"
SONAR_PROJECT_BASE_DIR_PROP = "sonar.projectBaseDir"
SONAR_MODULES_PROP = "sonar.modules"
SONAR_SOURCES_PROP = "sonar.sources"
SONAR_TESTS_PROP = "sonar.tests"
SONAR_JAVA_BINARIES_PROP = "sonar.java.binaries"
SONAR_JAVA_LIBRARIES_PROP = "sonar.java.libraries"
SONAR_JAVA_TEST_BINARIES_PROP = "sonar.java.test.binaries"
SONAR_JAVA_TEST_LIBRARIES_PROP = "sonar.java.test.libraries"
SONAR_GROOVY_BINARIES_PROP = "sonar.groovy.binaries"
SONAR_JAVA_JDK_HOME_PROP = "sonar.java.jdkHome"
SONAR_JAVA_SOURCE_PROP = "sonar.java.source"
SONAR_JAVA_TARGET_PROP = "sonar.java.target"

# Deprecated aliases still read by older scanners
SONAR_BINARIES_PROP = "sonar.binaries"
SONAR_LIBRARIES_PROP = "sonar.libraries"

ANDROID_PLUGIN_IDS = (
    "com.android.application",
    "com.android.library",
    "com.android.test",
    "com.android.feature",
    "com.android.dynamic-feature",
)


class PropertiesMap:
    """Append-only accumulator of scanner properties"""

    def __init__(self):
        # Collections are kept as insertion-ordered dicts used as sets
        self._props: Dict[str, Any] = {}

    def put(self, key: str, value: Any) -> None:
        """Set a scalar, replacing any previous value."""
        self._props[key] = value

    def append_props(self, key: str, values: Iterable[Any]) -> None:
        """Append values to the collection under key, creating it if needed."""
        bucket = self._props.setdefault(key, {})
        if not isinstance(bucket, dict):
            raise TypeError(f"Property '{key}' holds a scalar value, cannot append to it")
        for value in values:
            bucket[str(value)] = None

    def append_prop(self, key: str, value: Any) -> None:
        self.append_props(key, [value])

    def get(self, key: str, default: Any = None) -> Any:
        value = self._props.get(key, default)
        if isinstance(value, dict):
            return list(value)
        return value

    def is_collection(self, key: str) -> bool:
        return isinstance(self._props.get(key), dict)

    def keys(self) -> List[str]:
        return list(self._props)

    def items(self) -> Iterator[Tuple[str, Any]]:
        for key in self._props:
            yield key, self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._props

    def __getitem__(self, key: str) -> Any:
        if key not in self._props:
            raise KeyError(key)
        return self.get(key)

    def __len__(self) -> int:
        return len(self._props)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._props))

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict copy, collections as lists."""
        return dict(self.items())

    def flatten(self) -> Dict[str, str]:
        """String form handed to the scanner, collections comma-joined."""
        flat = {}
        for key, value in self.items():
            if isinstance(value, list):
                flat[key] = ",".join(_scalar_str(v) for v in value)
            else:
                flat[key] = _scalar_str(value)
        return flat

    # ------------------------------------------------------------------
    # Classpath and JDK writers
    # ------------------------------------------------------------------

    def set_test_classpath_props(self, test_class_dirs: Iterable[str], test_libraries: Iterable[str]) -> None:
        self.append_props(SONAR_JAVA_TEST_BINARIES_PROP, exists(test_class_dirs))
        self.append_props(SONAR_JAVA_TEST_LIBRARIES_PROP, exists(test_libraries))

    def set_main_classpath_props(self, add_for_groovy: bool, main_class_dirs: Iterable[str],
                                 main_libraries: Iterable[str]) -> None:
        class_dirs = exists(main_class_dirs)
        libraries = exists(main_libraries)

        self.append_props(SONAR_JAVA_BINARIES_PROP, class_dirs)
        if add_for_groovy:
            self.append_props(SONAR_GROOVY_BINARIES_PROP, class_dirs)
        self.append_props(SONAR_BINARIES_PROP, class_dirs)

        self.append_props(SONAR_JAVA_LIBRARIES_PROP, libraries)
        self.append_props(SONAR_LIBRARIES_PROP, libraries)

    def populate_jdk_properties(self, config: CompilerConfiguration) -> None:
        """Write JDK home and language levels; release wins over source/target."""
        if config.jdk_home:
            self.put(SONAR_JAVA_JDK_HOME_PROP, config.jdk_home)
        if config.release:
            self.put(SONAR_JAVA_SOURCE_PROP, config.release)
            self.put(SONAR_JAVA_TARGET_PROP, config.release)
        else:
            if config.source:
                self.put(SONAR_JAVA_SOURCE_PROP, config.source)
            if config.target:
                self.put(SONAR_JAVA_TARGET_PROP, config.target)


def _scalar_str(value: Any) -> str:
    """Scanner spelling of a scalar: lower-case booleans, empty for None."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def exists(paths: Iterable[str]) -> List[str]:
    """Keep only paths present on disk."""
    return [p for p in paths if os.path.exists(p)]


def nonempty_or_none(items: Iterable[T]) -> Optional[List[T]]:
    result = list(items)
    return result if result else None


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def is_android_project(project: ProjectModel) -> bool:
    return any(project.has_plugin(plugin_id) for plugin_id in ANDROID_PLUGIN_IDS)
