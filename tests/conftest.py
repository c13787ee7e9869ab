"""Shared test fixtures for droidprops test suite."""

import sys
import shutil
import pytest
from pathlib import Path

# Ensure droidprops is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from droidprops.models import (
    AndroidExtension, CompilerConfiguration, CompilerTask,
    ProjectModel, SourceProvider, Variant,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Directories and files created for the 'app' module layout
APP_DIRS = [
    "src/main/java",
    "src/main/res",
    "src/test/java",
    "src/androidTest/java",
    "build/classes/debug",
    "build/classes/release",
    "build/classes/debugUnitTest",
    "libs",
    "sdk",
]
APP_FILES = [
    "src/main/AndroidManifest.xml",
    "libs/appcompat.jar",
    "libs/junit.jar",
    "sdk/android.jar",
]


def make_layout(root: Path) -> Path:
    for d in APP_DIRS:
        (root / d).mkdir(parents=True, exist_ok=True)
    for f in APP_FILES:
        (root / f).write_text("")
    return root


@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def app_dir(tmp_path):
    """On-disk layout of an Android application module."""
    return make_layout(tmp_path.resolve() / "app")


@pytest.fixture
def main_sources(app_dir):
    """The main source set, plus a directory that does not exist."""
    return SourceProvider(
        name="main",
        manifest_file=str(app_dir / "src/main/AndroidManifest.xml"),
        java_directories=[str(app_dir / "src/main/java"), str(app_dir / "src/main/kotlin")],
        res_directories=[str(app_dir / "src/main/res")],
    )


@pytest.fixture
def debug_variant(app_dir, main_sources):
    """A tested debug variant with unit and instrumentation tests."""
    return Variant(
        name="debug",
        build_type="debug",
        source_sets=[main_sources],
        apk=True,
        compile_classpath=[str(app_dir / "libs/appcompat.jar")],
        java_compile=CompilerTask(
            name="compileDebugJavaWithJavac",
            destination_dir=str(app_dir / "build/classes/debug"),
            classpath=[str(app_dir / "libs/appcompat.jar"), str(app_dir / "libs/gone.jar")],
            configuration=CompilerConfiguration(source="1.8", target="1.8"),
        ),
        unit_test_variant=Variant(
            name="debugUnitTest",
            build_type="debug",
            source_sets=[SourceProvider(name="test", java_directories=[str(app_dir / "src/test/java")])],
            java_compile=CompilerTask(
                name="compileDebugUnitTestJavaWithJavac",
                destination_dir=str(app_dir / "build/classes/debugUnitTest"),
                classpath=[str(app_dir / "libs/junit.jar")],
            ),
        ),
        test_variant=Variant(
            name="debugAndroidTest",
            build_type="debug",
            apk=True,
            source_sets=[SourceProvider(name="androidTest",
                                        java_directories=[str(app_dir / "src/androidTest/java")])],
        ),
    )


@pytest.fixture
def release_variant(app_dir, main_sources):
    """An untested release variant compiled with --release 11."""
    return Variant(
        name="release",
        build_type="release",
        source_sets=[main_sources],
        apk=True,
        java_compile=CompilerTask(
            name="compileReleaseJavaWithJavac",
            destination_dir=str(app_dir / "build/classes/release"),
            configuration=CompilerConfiguration(release="11", source="1.8", target="1.8"),
        ),
    )


@pytest.fixture
def app_project(app_dir, release_variant, debug_variant):
    """An application project declaring release before debug."""
    return ProjectModel(
        name="app",
        base_dir=str(app_dir),
        path=":app",
        plugins=["com.android.application"],
        android=AndroidExtension(
            variants=[release_variant, debug_variant],
            boot_classpath=[str(app_dir / "sdk/android.jar")],
            test_build_type="debug",
        ),
    )


@pytest.fixture
def model_file(tmp_path, fixtures_dir):
    """The shop build model copied next to an on-disk layout of its modules."""
    root = tmp_path.resolve()
    make_layout(root / "app")
    (root / "lib/src/main/java").mkdir(parents=True)
    (root / "lib/build/classes/debug").mkdir(parents=True)
    target = root / "build-model.yaml"
    shutil.copy(fixtures_dir / "shop_model.yaml", target)
    return target
