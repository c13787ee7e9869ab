"""
Model loader - parses YAML build model exports into ProjectModel objects

A model document looks like:

    project:
      name: my-app
      plugins: [com.android.application]
      android_variant: fullDebug        # optional
      properties:                       # optional, applied last
        sonar.exclusions: "**/generated/**"
      android:
        boot_classpath: [/opt/android-sdk/platforms/android-33/android.jar]
        test_build_type: debug
        variants:
          - name: debug
            build_type: debug
            source_sets:
              - name: main
                manifest: src/main/AndroidManifest.xml
                java: [src/main/java]
                res: [src/main/res]
            compiler:
              destination_dir: build/intermediates/javac/debug/classes
              classpath: [libs/a.jar]
              release: "11"
            unit_test: {...}
            android_test: {...}
      subprojects:
        - name: core
          base_dir: core

Relative paths resolve against the owning project's base directory. Quote
language levels ("1.8", "11") so YAML keeps them as strings.
"""

import yaml
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

from .exceptions import ModelLoadError
from .models import (
    AndroidExtension,
    CompilerConfiguration,
    CompilerTask,
    ProjectKind,
    ProjectModel,
    SourceProvider,
    Variant,
)
from .properties import capitalize

logger = logging.getLogger(__name__)

PROJECT_KEYS = {
    'name', 'path', 'base_dir', 'plugins', 'android', 'android_variant',
    'properties', 'skip', 'subprojects',
}
ANDROID_KEYS = {'boot_classpath', 'test_build_type', 'variants'}
VARIANT_KEYS = {
    'name', 'build_type', 'source_sets', 'compiler', 'apk',
    'compile_libraries', 'compile_classpath', 'unit_test', 'android_test',
}
COMPILER_KEYS = {'name', 'destination_dir', 'classpath', 'jdk_home', 'release', 'source', 'target'}

# Source set key -> SourceProvider field
SOURCE_SET_DIRS = {
    'c': 'c_directories',
    'aidl': 'aidl_directories',
    'assets': 'assets_directories',
    'cpp': 'cpp_directories',
    'java': 'java_directories',
    'renderscript': 'renderscript_directories',
    'res': 'res_directories',
    'resources': 'resources_directories',
}


class ModelLoader:
    """Loads and parses build models from YAML files"""

    def __init__(self):
        self._loaded_files: List[str] = []

    @property
    def loaded_files(self) -> List[str]:
        return list(self._loaded_files)

    def load_file(self, filepath: Union[str, Path]) -> ProjectModel:
        """Load the project tree described by a YAML model file"""
        filepath = Path(filepath)
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ModelLoadError(f"Invalid YAML in {filepath}: {e}") from e
        except OSError as e:
            raise ModelLoadError(f"Unable to read model file {filepath}: {e}") from e

        project = self.load_dict(data, filepath.resolve().parent)
        self._loaded_files.append(str(filepath))
        logger.info(f"Loaded {len(project.all_projects())} projects from {filepath.name}")
        return project

    def load_dict(self, data: Any, relative_to: Union[str, Path]) -> ProjectModel:
        """Build the project tree from an already parsed document"""
        if not isinstance(data, dict) or not isinstance(data.get('project'), dict):
            raise ModelLoadError("Model document has no 'project' section")
        return self._parse_project(data['project'], Path(relative_to), parent=None)

    def _parse_project(self, raw: Dict[str, Any], relative_to: Path,
                       parent: Optional[ProjectModel]) -> ProjectModel:
        if not isinstance(raw, dict):
            raise ModelLoadError("Project entries must be mappings")
        name = raw.get('name')
        if not name:
            raise ModelLoadError("Project without a name")
        self._log_unknown(raw, PROJECT_KEYS, f"project '{name}'")

        default_dir = '.' if parent is None else str(name)
        base_dir = self._resolve(raw.get('base_dir', default_dir), relative_to)

        if raw.get('path'):
            path = str(raw['path'])
        elif parent is None:
            path = ":"
        elif parent.path == ":":
            path = f":{name}"
        else:
            path = f"{parent.path}:{name}"

        plugins = raw.get('plugins') or []
        if isinstance(plugins, str):
            plugins = [plugins]
        elif not isinstance(plugins, list):
            raise ModelLoadError("'plugins' must be a list", str(name))
        properties = raw.get('properties') or {}
        if not isinstance(properties, dict):
            raise ModelLoadError("'properties' must be a mapping", str(name))
        subprojects = raw.get('subprojects') or []
        if not isinstance(subprojects, list):
            raise ModelLoadError("'subprojects' must be a list", str(name))

        project = ProjectModel(
            name=str(name),
            base_dir=base_dir,
            path=path,
            plugins=[str(p) for p in plugins],
            android_variant=self._as_str(raw.get('android_variant')),
            properties={str(k): v for k, v in properties.items()},
            skip=self._as_bool(raw.get('skip'), False, 'skip', str(name)),
        )

        if raw.get('android'):
            if not isinstance(raw['android'], dict):
                raise ModelLoadError("'android' must be a mapping", project.name)
            project.android = self._parse_android(raw['android'], Path(base_dir), project.kind, project.name)

        for raw_child in subprojects:
            project.subprojects.append(self._parse_project(raw_child, Path(base_dir), parent=project))

        return project

    def _parse_android(self, raw: Dict[str, Any], base_dir: Path, kind: ProjectKind,
                       project_name: str) -> AndroidExtension:
        self._log_unknown(raw, ANDROID_KEYS, f"android block of '{project_name}'")
        boot_classpath = None
        if raw.get('boot_classpath') is not None:
            boot_classpath = self._resolve_all(raw['boot_classpath'], base_dir)

        raw_variants = raw.get('variants') or []
        if not isinstance(raw_variants, list):
            raise ModelLoadError("'variants' must be a list", project_name)

        variants = []
        for raw_variant in raw_variants:
            try:
                variants.append(self._parse_variant(raw_variant, base_dir, kind.produces_apk))
            except (KeyError, TypeError, AttributeError) as e:
                raise ModelLoadError(f"Malformed variant: {e}", project_name) from e

        return AndroidExtension(
            variants=variants,
            boot_classpath=boot_classpath,
            test_build_type=self._as_str(raw.get('test_build_type')),
        )

    def _parse_variant(self, raw: Dict[str, Any], base_dir: Path, default_apk: bool,
                       default_build_type: Optional[str] = None) -> Variant:
        name = str(raw['name'])
        self._log_unknown(raw, VARIANT_KEYS, f"variant '{name}'")
        build_type = self._as_str(raw.get('build_type')) or default_build_type or name

        compile_libraries = None
        if raw.get('compile_libraries') is not None:
            compile_libraries = self._resolve_all(raw['compile_libraries'], base_dir)

        variant = Variant(
            name=name,
            build_type=build_type,
            source_sets=[self._parse_source_set(s, base_dir) for s in raw.get('source_sets') or []],
            apk=self._as_bool(raw.get('apk'), default_apk, 'apk', name),
            compile_libraries=compile_libraries,
            compile_classpath=self._resolve_all(raw.get('compile_classpath') or [], base_dir),
        )
        if raw.get('compiler') is not None:
            variant.java_compile = self._parse_compiler(raw['compiler'], base_dir, name)

        if raw.get('unit_test'):
            variant.unit_test_variant = self._parse_variant(raw['unit_test'], base_dir, False, build_type)
        if raw.get('android_test'):
            variant.test_variant = self._parse_variant(raw['android_test'], base_dir, True, build_type)
        return variant

    def _parse_source_set(self, raw: Dict[str, Any], base_dir: Path) -> SourceProvider:
        source_set = SourceProvider(name=str(raw.get('name', 'main')))
        if raw.get('manifest'):
            source_set.manifest_file = self._resolve(raw['manifest'], base_dir)
        for key, attr in SOURCE_SET_DIRS.items():
            setattr(source_set, attr, self._resolve_all(raw.get(key) or [], base_dir))
        return source_set

    def _parse_compiler(self, raw: Dict[str, Any], base_dir: Path, variant_name: str) -> CompilerTask:
        self._log_unknown(raw, COMPILER_KEYS, f"compiler of '{variant_name}'")
        destination_dir = None
        if raw.get('destination_dir'):
            destination_dir = self._resolve(raw['destination_dir'], base_dir)
        jdk_home = None
        if raw.get('jdk_home'):
            jdk_home = self._resolve(raw['jdk_home'], base_dir)

        return CompilerTask(
            name=str(raw.get('name') or f"compile{capitalize(variant_name)}JavaWithJavac"),
            destination_dir=destination_dir,
            classpath=self._resolve_all(raw.get('classpath') or [], base_dir),
            configuration=CompilerConfiguration(
                jdk_home=jdk_home,
                release=self._as_str(raw.get('release')),
                source=self._as_str(raw.get('source')),
                target=self._as_str(raw.get('target')),
            ),
        )

    @staticmethod
    def _resolve(path: Any, base_dir: Path) -> str:
        resolved = Path(os.path.expanduser(str(path)))
        if not resolved.is_absolute():
            resolved = base_dir / resolved
        return os.path.normpath(os.path.abspath(resolved))

    def _resolve_all(self, paths: Any, base_dir: Path) -> List[str]:
        if isinstance(paths, str):
            paths = [paths]
        return [self._resolve(p, base_dir) for p in paths]

    @staticmethod
    def _as_str(value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @staticmethod
    def _as_bool(value: Any, default: bool, key: str, owner: str) -> bool:
        """YAML booleans, or the strings true/false in any case"""
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
            return value.strip().lower() == 'true'
        raise ModelLoadError(f"'{key}' must be true or false, got {value!r}", owner)

    @staticmethod
    def _log_unknown(raw: Dict[str, Any], known: set, where: str) -> None:
        for key in raw:
            if key not in known:
                logger.debug(f"Ignoring unknown key '{key}' in {where}")


def load_model(filepath: Union[str, Path]) -> ProjectModel:
    """Load a build model file"""
    return ModelLoader().load_file(filepath)
