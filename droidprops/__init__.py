"""
droidprops - Scanner properties for Android builds.

Reads an Android build model (projects, plugins, variants, source sets,
compiler tasks, classpaths) and derives the flat property map consumed by a
code analysis scanner.

Pipeline:
    1. Variant resolution - pick the variant to analyse per project
    2. Property population - sources, tests, binaries, libraries, JDK levels
    3. Base directory reconciliation - one base directory above all projects

Quick Start:
    >>> from droidprops import load_model, compute_properties
    >>> project = load_model("build-model.yaml")
    >>> props = compute_properties(project)
    >>> print(props["sonar.sources"])
"""

__version__ = "0.3.0"
__author__ = "droidprops"

from .models import (
    ProjectKind,
    SourceProvider,
    CompilerConfiguration,
    CompilerTask,
    Variant,
    AndroidExtension,
    ProjectModel,
)
from .exceptions import DroidPropsError, InvalidVariantError, ModelAccessError, ModelLoadError
from .properties import PropertiesMap
from .variants import resolve_variant, find_variant
from .android import configure_for_android, populate_properties
from .basedir import reconcile_base_dir, find_project_base_dir
from .computer import PropertyComputer, compute_properties
from .model_loader import ModelLoader, load_model
from .reporters import PropertiesReporter, JsonReporter, ArgsReporter, get_reporter

__all__ = [
    # Models
    'ProjectKind',
    'SourceProvider',
    'CompilerConfiguration',
    'CompilerTask',
    'Variant',
    'AndroidExtension',
    'ProjectModel',
    # Errors
    'DroidPropsError',
    'InvalidVariantError',
    'ModelAccessError',
    'ModelLoadError',
    # Core
    'PropertiesMap',
    'resolve_variant',
    'find_variant',
    'configure_for_android',
    'populate_properties',
    'reconcile_base_dir',
    'find_project_base_dir',
    'PropertyComputer',
    'compute_properties',
    # Loading and output
    'ModelLoader',
    'load_model',
    'PropertiesReporter',
    'JsonReporter',
    'ArgsReporter',
    'get_reporter',
]
