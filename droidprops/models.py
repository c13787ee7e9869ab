"""
Data models for droidprops.

This module defines the build model consumed by the property populator:

- ProjectKind: Which Android plugin a project applies
- SourceProvider: One source-set layer of a variant
- CompilerConfiguration/CompilerTask: Java compiler task of a variant
- Variant: A named build configuration (e.g. debug, release)
- AndroidExtension: The android { } block of a project
- ProjectModel: A project with its plugins and subprojects

The models are read-only from the populator's point of view. They are built
by the model loader or by a host integration exposing the same accessors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Iterable


class ProjectKind(Enum):
    APPLICATION = "com.android.application"
    LIBRARY = "com.android.library"
    TEST = "com.android.test"
    DYNAMIC_FEATURE = "com.android.dynamic-feature"
    FEATURE = "com.android.feature"
    NONE = ""

    @classmethod
    def from_plugins(cls, plugins: Iterable[str]) -> "ProjectKind":
        """Resolve the project kind, first matching plugin in precedence order wins."""
        applied = set(plugins)
        for kind in (cls.APPLICATION, cls.LIBRARY, cls.TEST, cls.DYNAMIC_FEATURE, cls.FEATURE):
            if kind.value in applied:
                return kind
        return cls.NONE

    @property
    def is_android(self) -> bool:
        return self is not ProjectKind.NONE

    @property
    def has_variants(self) -> bool:
        return self not in (ProjectKind.FEATURE, ProjectKind.NONE)

    @property
    def has_test_build_type(self) -> bool:
        return self in (ProjectKind.APPLICATION, ProjectKind.LIBRARY, ProjectKind.DYNAMIC_FEATURE)

    @property
    def produces_apk(self) -> bool:
        """Whether variants of this kind contribute compile libraries by default."""
        return self in (ProjectKind.APPLICATION, ProjectKind.TEST, ProjectKind.DYNAMIC_FEATURE)


@dataclass
class SourceProvider:
    """One source-set layer (main, debug, flavor...) of a variant"""
    name: str
    manifest_file: Optional[str] = None
    c_directories: List[str] = field(default_factory=list)
    aidl_directories: List[str] = field(default_factory=list)
    assets_directories: List[str] = field(default_factory=list)
    cpp_directories: List[str] = field(default_factory=list)
    java_directories: List[str] = field(default_factory=list)
    renderscript_directories: List[str] = field(default_factory=list)
    res_directories: List[str] = field(default_factory=list)
    resources_directories: List[str] = field(default_factory=list)

    def all_paths(self) -> List[str]:
        """Every path contributed by this layer, manifest first."""
        paths = []
        if self.manifest_file:
            paths.append(self.manifest_file)
        paths.extend(self.c_directories)
        paths.extend(self.aidl_directories)
        paths.extend(self.assets_directories)
        paths.extend(self.cpp_directories)
        paths.extend(self.java_directories)
        paths.extend(self.renderscript_directories)
        paths.extend(self.res_directories)
        paths.extend(self.resources_directories)
        return paths


@dataclass
class CompilerConfiguration:
    """Language level settings extracted from a compiler task"""
    jdk_home: Optional[str] = None
    release: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None


@dataclass
class CompilerTask:
    """Java compiler task attached to a variant"""
    name: str
    destination_dir: Optional[str] = None
    classpath: List[str] = field(default_factory=list)
    configuration: CompilerConfiguration = field(default_factory=CompilerConfiguration)


@dataclass
class Variant:
    """A named build configuration exposed by the Android plugin"""
    name: str
    build_type: str
    source_sets: List[SourceProvider] = field(default_factory=list)
    java_compile: Optional[CompilerTask] = None
    apk: bool = False
    # None when the legacy accessor is not available on this plugin version
    compile_libraries: Optional[List[str]] = None
    compile_classpath: List[str] = field(default_factory=list)
    unit_test_variant: Optional[Variant] = None
    test_variant: Optional[Variant] = None

    def get_compile_libraries(self) -> List[str]:
        if self.compile_libraries is None:
            raise NotImplementedError(f"get_compile_libraries is not available on variant '{self.name}'")
        return list(self.compile_libraries)

    def get_compile_classpath(self) -> List[str]:
        return list(self.compile_classpath)

    @property
    def is_tested(self) -> bool:
        return self.unit_test_variant is not None or self.test_variant is not None


@dataclass
class AndroidExtension:
    """The android { } configuration of a project"""
    variants: List[Variant] = field(default_factory=list)
    boot_classpath: Optional[List[str]] = None
    test_build_type: Optional[str] = None

    @property
    def variant_names(self) -> List[str]:
        return [v.name for v in self.variants]


@dataclass
class ProjectModel:
    """A project of the build, with its plugins and subprojects"""
    name: str
    base_dir: str
    path: str = ":"
    plugins: List[str] = field(default_factory=list)
    android: Optional[AndroidExtension] = None
    android_variant: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    skip: bool = False
    subprojects: List[ProjectModel] = field(default_factory=list)

    @property
    def kind(self) -> ProjectKind:
        return ProjectKind.from_plugins(self.plugins)

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self.plugins

    def all_projects(self) -> List[ProjectModel]:
        """This project followed by every subproject, depth first."""
        projects = [self]
        for child in self.subprojects:
            projects.extend(child.all_projects())
        return projects
