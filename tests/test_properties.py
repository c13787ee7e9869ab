"""Tests for droidprops.properties"""

import pytest
from droidprops.models import CompilerConfiguration, ProjectModel
from droidprops.properties import (
    PropertiesMap, exists, nonempty_or_none, capitalize, is_android_project,
)


class TestPropertiesMap:
    def test_append_creates_collection(self):
        props = PropertiesMap()
        props.append_props("sonar.sources", ["a", "b"])
        assert props.get("sonar.sources") == ["a", "b"]
        assert props.is_collection("sonar.sources")

    def test_append_ignores_duplicates(self):
        props = PropertiesMap()
        props.append_props("sonar.sources", ["a", "b"])
        props.append_props("sonar.sources", ["b", "c"])
        props.append_prop("sonar.sources", "a")
        assert props.get("sonar.sources") == ["a", "b", "c"]

    def test_append_empty_creates_key(self):
        props = PropertiesMap()
        props.append_props("sonar.java.libraries", [])
        assert "sonar.java.libraries" in props
        assert props["sonar.java.libraries"] == []

    def test_append_stringifies(self, tmp_path):
        props = PropertiesMap()
        props.append_props("sonar.tests", [tmp_path])
        assert props.get("sonar.tests") == [str(tmp_path)]

    def test_put_last_write_wins(self):
        props = PropertiesMap()
        props.put("sonar.java.source", "1.8")
        props.put("sonar.java.source", "11")
        assert props["sonar.java.source"] == "11"

    def test_append_to_scalar_rejected(self):
        props = PropertiesMap()
        props.put("sonar.projectName", "app")
        with pytest.raises(TypeError):
            props.append_prop("sonar.projectName", "other")

    def test_missing_key(self):
        props = PropertiesMap()
        assert props.get("nope") is None
        with pytest.raises(KeyError):
            props["nope"]

    def test_flatten(self):
        props = PropertiesMap()
        props.put("sonar.projectName", "app")
        props.append_props("sonar.sources", ["src/main/java", "src/main/res"])
        props.append_props("sonar.java.binaries", [])
        assert props.flatten() == {
            "sonar.projectName": "app",
            "sonar.sources": "src/main/java,src/main/res",
            "sonar.java.binaries": "",
        }

    def test_flatten_booleans_lowercase(self):
        props = PropertiesMap()
        props.put("sonar.verbose", True)
        props.put("sonar.scm.disabled", False)
        props.put("sonar.branch.name", None)
        props.put("sonar.flags", [True, 3])
        assert props.flatten() == {
            "sonar.verbose": "true",
            "sonar.scm.disabled": "false",
            "sonar.branch.name": "",
            "sonar.flags": "true,3",
        }

    def test_to_dict(self):
        props = PropertiesMap()
        props.append_prop("sonar.modules", ":app")
        assert props.to_dict() == {"sonar.modules": [":app"]}
        assert len(props) == 1
        assert list(props) == ["sonar.modules"]


class TestClasspathProps:
    @pytest.fixture
    def layout(self, tmp_path):
        (tmp_path / "classes").mkdir()
        (tmp_path / "a.jar").write_text("")
        return tmp_path

    def test_main_classpath_with_aliases(self, layout):
        props = PropertiesMap()
        classes = str(layout / "classes")
        jar = str(layout / "a.jar")
        props.set_main_classpath_props(False, [classes], [jar, str(layout / "missing.jar")])

        assert props["sonar.java.binaries"] == [classes]
        assert props["sonar.binaries"] == [classes]
        assert props["sonar.java.libraries"] == [jar]
        assert props["sonar.libraries"] == [jar]
        assert "sonar.groovy.binaries" not in props

    def test_main_classpath_for_groovy(self, layout):
        props = PropertiesMap()
        props.set_main_classpath_props(True, [str(layout / "classes")], [])
        assert props["sonar.groovy.binaries"] == [str(layout / "classes")]

    def test_test_classpath(self, layout):
        props = PropertiesMap()
        props.set_test_classpath_props([str(layout / "classes")], [str(layout / "a.jar")])
        assert props["sonar.java.test.binaries"] == [str(layout / "classes")]
        assert props["sonar.java.test.libraries"] == [str(layout / "a.jar")]
        assert "sonar.java.binaries" not in props

    def test_missing_class_dir_keeps_key(self, layout):
        props = PropertiesMap()
        props.set_test_classpath_props([str(layout / "nothing")], [])
        assert props["sonar.java.test.binaries"] == []


class TestJdkProperties:
    def test_release_wins(self):
        props = PropertiesMap()
        props.populate_jdk_properties(CompilerConfiguration(release="17", source="1.8", target="11"))
        assert props["sonar.java.source"] == "17"
        assert props["sonar.java.target"] == "17"

    def test_source_and_target_independent(self):
        props = PropertiesMap()
        props.populate_jdk_properties(CompilerConfiguration(source="1.8", target="11"))
        assert props["sonar.java.source"] == "1.8"
        assert props["sonar.java.target"] == "11"

    def test_only_source(self):
        props = PropertiesMap()
        props.populate_jdk_properties(CompilerConfiguration(source="1.8"))
        assert props["sonar.java.source"] == "1.8"
        assert "sonar.java.target" not in props

    def test_jdk_home(self):
        props = PropertiesMap()
        props.populate_jdk_properties(CompilerConfiguration(jdk_home="/opt/jdk-17"))
        assert props["sonar.java.jdkHome"] == "/opt/jdk-17"
        assert "sonar.java.source" not in props

    def test_empty_configuration(self):
        props = PropertiesMap()
        props.populate_jdk_properties(CompilerConfiguration())
        assert len(props) == 0


class TestHelpers:
    def test_exists(self, tmp_path):
        (tmp_path / "here").mkdir()
        assert exists([str(tmp_path / "here"), str(tmp_path / "gone")]) == [str(tmp_path / "here")]

    def test_nonempty_or_none(self):
        assert nonempty_or_none([]) is None
        assert nonempty_or_none(iter(["a"])) == ["a"]

    def test_capitalize(self):
        assert capitalize("debug") == "Debug"
        assert capitalize("fullDebug") == "FullDebug"
        assert capitalize("") == ""

    def test_is_android_project(self):
        assert is_android_project(ProjectModel(name="a", base_dir="/a", plugins=["com.android.feature"]))
        assert not is_android_project(ProjectModel(name="a", base_dir="/a", plugins=["java"]))
