"""Tests for name qualification and path resolution."""

from pathlib import Path

import pytest

from eloquent_composition.config import ProjectLayout
from eloquent_composition.naming import NameQualifier, PathResolver, class_basename, studly


def _qualifier(existing: set[str], root: str = "App\\") -> NameQualifier:
    return NameQualifier(root, lambda segment: segment in existing)


class TestHelpers:
    @pytest.mark.parametrize("name,expected", [
        ("App\\Models\\User", "User"),
        ("Blog/Post", "Post"),
        ("User", "User"),
        ("App\\Models\\", "Models"),
    ])
    def test_class_basename(self, name, expected):
        assert class_basename(name) == expected

    @pytest.mark.parametrize("value,expected", [
        ("user", "User"),
        ("user_profile", "UserProfile"),
        ("user-profile", "UserProfile"),
        ("UserProfile", "UserProfile"),
    ])
    def test_studly(self, value, expected):
        assert studly(value) == expected


class TestNameQualifier:
    def test_sub_namespace_when_directory_exists(self):
        assert _qualifier({"Models"}).qualify_model("User") == "App\\Models\\User"

    def test_root_when_directory_missing(self):
        assert _qualifier(set()).qualify_model("User") == "App\\User"

    def test_each_kind_uses_its_segment(self):
        q = _qualifier({"Models", "Collections", "QueryBuilders"})
        assert q.qualify_collection("UserCollection") == "App\\Collections\\UserCollection"
        assert q.qualify_query_builder("UserQueryBuilder") == "App\\QueryBuilders\\UserQueryBuilder"

    def test_slashes_normalized(self):
        assert _qualifier({"Models"}).qualify_model("/Blog/Post") == "App\\Models\\Blog\\Post"

    def test_leading_backslash_stripped(self):
        assert _qualifier({"Models"}).qualify_model("\\App\\Foo") == "App\\Foo"

    def test_already_qualified_returned_as_is(self):
        assert _qualifier({"Models"}).qualify_model("App\\Models\\User") == "App\\Models\\User"

    @pytest.mark.parametrize("name", ["User", "Blog/Post", "App\\Other\\Thing", "\\Foo"])
    def test_fixed_point(self, name):
        q = _qualifier({"Models"})
        once = q.qualify_model(name)
        assert q.qualify_model(once) == once

    def test_root_prefix_appears_once(self):
        assert _qualifier({"Models"}).qualify_model("User").count("App\\") == 1

    def test_root_without_trailing_separator(self):
        assert _qualifier({"Models"}, root="App").qualify_model("User") == "App\\Models\\User"

    def test_no_selector_uses_root(self):
        assert _qualifier({"Models"}).qualify("User") == "App\\User"

    def test_selector_outside_root_rejected(self):
        with pytest.raises(ValueError):
            _qualifier(set()).qualify("User", lambda root: "Vendor")

    @pytest.mark.parametrize("name", ["", "   ", "/", "\\"])
    def test_blank_name_rejected(self, name):
        with pytest.raises(ValueError, match="Invalid class name"):
            _qualifier({"Models"}).qualify_model(name)

    def test_trailing_separator_dropped(self):
        assert _qualifier({"Models"}).qualify_model("Blog/Post/") == "App\\Models\\Blog\\Post"

    def test_similar_prefix_is_not_root(self):
        assert _qualifier(set()).qualify("Application\\Foo") == "App\\Application\\Foo"

    def test_default_namespace(self):
        assert _qualifier({"Collections"}).default_namespace("collection") == "App\\Collections"
        assert _qualifier(set()).default_namespace("collection") == "App"

    def test_for_layout_checks_directories(self, project, bare_project):
        assert NameQualifier.for_layout(project).qualify_model("User") == "App\\Models\\User"
        assert NameQualifier.for_layout(bare_project).qualify_model("User") == "App\\User"


class TestPathResolver:
    def test_path_for(self, project):
        path = PathResolver(project).path_for("App\\Models\\User")
        assert path == project.base_path / "app" / "Models" / "User.php"

    def test_relative_path(self, project):
        assert PathResolver(project).relative_path_for("App\\Models\\Blog\\Post") == "Models/Blog/Post.php"

    def test_root_only_stripped_at_front(self, project):
        assert PathResolver(project).relative_path_for("App\\Models\\App\\X") == "Models/App/X.php"

    def test_custom_layout(self, tmp_path):
        layout = ProjectLayout(base_path=tmp_path, root_namespace="Acme", app_dir="src", extension="php")
        assert PathResolver(layout).path_for("Acme\\Models\\User") == tmp_path / "src" / "Models" / "User.php"

    @pytest.mark.parametrize("name", ["User", "Blog/Post", "\\Deep\\Nested\\Name"])
    def test_qualified_path_has_no_namespace_separators(self, project, name):
        qualified = NameQualifier.for_layout(project).qualify_model(name)
        relative = PathResolver(project).relative_path_for(qualified)
        assert "\\" not in relative
        assert relative.endswith(".php")

    def test_pure(self, project):
        path = PathResolver(project).path_for("App\\Models\\Missing")
        assert isinstance(path, Path)
        assert not path.exists()
