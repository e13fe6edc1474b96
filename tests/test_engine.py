"""Tests for the composition engine recipes."""

from pathlib import Path

import pytest

from eloquent_composition.engine import (
    COLLECTION_MARKER,
    QUERY_BUILDER_MARKER,
    append_to_class_body,
    collection_annotation_props,
    is_composed,
    model_annotation_props,
    query_builder_annotation_props,
)
from eloquent_composition.errors import DuplicateCompositionDetected, MalformedSource

FIXTURES = Path(__file__).parent / "fixtures"


class TestAnnotationProps:
    def test_collection(self):
        assert collection_annotation_props("App\\Models\\User") == ["@method null|User first()"]

    def test_query_builder(self):
        assert query_builder_annotation_props("User", "App\\Collections\\UserCollection") == [
            "@method null|User first()",
            "@method UserCollection get()",
        ]

    def test_query_builder_without_collection(self):
        assert query_builder_annotation_props("User") == ["@method null|User first()"]

    def test_model(self):
        assert model_annotation_props("App\\QueryBuilders\\UserQueryBuilder") == [
            "@method static UserQueryBuilder query()"
        ]


class TestAppendToClassBody:
    def test_replaces_last_brace(self):
        assert append_to_class_body("class A\n{\n    //\n}\n", "\n    X") == "class A\n{\n    //\n\n    X\n}\n"

    def test_requires_brace(self):
        with pytest.raises(MalformedSource):
            append_to_class_body("class A", "X")


class TestInjectComposition:
    def test_marker_checked_before_edits(self, engine):
        # no namespace: the duplicate check must fire first
        text = "<?php\nclass A\n{\n    public function newCollection() {}\n}\n"
        with pytest.raises(DuplicateCompositionDetected) as exc_info:
            engine.inject_composition(text, ["X\\Y"], "\n    z", marker=COLLECTION_MARKER)
        assert exc_info.value.marker == COLLECTION_MARKER

    def test_adds_import_and_block(self, engine):
        text = "<?php\nnamespace App;\n\nclass A\n{\n}\n"
        result = engine.inject_composition(text, ["X\\Y"], "\n    // composed")
        assert result == "<?php\nnamespace App;\n\nuse X\\Y;\n\nclass A\n{\n\n    // composed\n}\n"

    def test_missing_namespace(self, engine):
        with pytest.raises(MalformedSource):
            engine.inject_composition("<?php\nclass A {}\n", ["X\\Y"], "z")

    def test_is_composed(self):
        assert is_composed("public function newEloquentBuilder($q)", QUERY_BUILDER_MARKER)
        assert not is_composed("class A {}", QUERY_BUILDER_MARKER)


class TestComposeCollection:
    def test_full_output(self, engine, model_source):
        assert engine.compose_collection(model_source, "UserCollection") == (
            "<?php\n\nnamespace App\\Models;\n\n"
            "use App\\Collections\\UserCollection;\n\n"
            "use Illuminate\\Database\\Eloquent\\Factories\\HasFactory;\n"
            "use Illuminate\\Database\\Eloquent\\Model;\n\n"
            "class User extends Model\n{\n    use HasFactory;\n\n"
            "    /**\n"
            "     * Create a new Eloquent Collection instance.\n"
            "     *\n"
            "     * @param  array<int, \\Illuminate\\Database\\Eloquent\\Model>  $models\n"
            "     */\n"
            "    public function newCollection(array $models = []): UserCollection\n"
            "    {\n"
            "        return new UserCollection($models);\n"
            "    }\n"
            "}\n"
        )

    def test_twice_rejected(self, engine, model_source):
        once = engine.compose_collection(model_source, "UserCollection")
        with pytest.raises(DuplicateCompositionDetected):
            engine.compose_collection(once, "UserCollection", "User")

    def test_project_composition_stub(self, engine, model_source, project):
        project.stubs_path.mkdir()
        (project.stubs_path / "collection.composition.stub").write_text(
            "    // uses {{ class }}\n\n"
        )
        result = engine.compose_collection(model_source, "UserCollection")
        assert result.endswith("    use HasFactory;\n\n    // uses UserCollection\n}\n")


class TestComposeQueryBuilder:
    def test_adds_method_import_and_annotation(self, engine, model_source):
        result = engine.compose_query_builder(model_source, "UserQueryBuilder")
        assert "use App\\QueryBuilders\\UserQueryBuilder;" in result
        assert "public function newEloquentBuilder($query): UserQueryBuilder" in result
        assert (
            "/**\n * @method static UserQueryBuilder query()\n */\nclass User extends Model"
        ) in result

    def test_after_collection(self, engine, model_source):
        text = engine.compose_collection(model_source, "UserCollection")
        result = engine.compose_query_builder(text, "UserQueryBuilder")
        assert result.index(COLLECTION_MARKER) < result.index(QUERY_BUILDER_MARKER)
        assert result.endswith("        return new UserQueryBuilder($query);\n    }\n}\n")
        assert result.count("/**\n * @method static") == 1

    def test_merges_into_existing_block(self, engine):
        text = (FIXTURES / "Post.php").read_text()
        result = engine.compose_query_builder(text, "PostQueryBuilder")
        assert (
            "/**\n"
            " * @property int $id\n"
            " * @property string $title\n"
            " * @method static PostQueryBuilder query()\n"
            " */\n"
            "class Post extends Model"
        ) in result

    def test_twice_rejected(self, engine, model_source):
        once = engine.compose_query_builder(model_source, "UserQueryBuilder")
        with pytest.raises(DuplicateCompositionDetected):
            engine.compose_query_builder(once, "UserQueryBuilder")


class TestBuilders:
    def test_build_model(self, engine):
        text = engine.build_model("User")
        assert "namespace App\\Models;" in text
        assert "class User extends Model" in text

    def test_build_collection_plain(self, engine):
        text = engine.build_collection("UserCollection")
        assert "/**" not in text
        assert "class UserCollection extends Collection" in text

    def test_build_collection_for_model(self, engine):
        assert engine.build_collection("UserCollection", "User") == (
            "<?php\n\nnamespace App\\Collections;\n\n"
            "use App\\Models\\User;\n\n"
            "use Illuminate\\Database\\Eloquent\\Collection;\n\n"
            "/**\n * @method null|User first()\n */\n"
            "class UserCollection extends Collection\n{\n    //\n}\n"
        )

    def test_build_query_builder_for_model_and_collection(self, engine):
        text = engine.build_query_builder("UserQueryBuilder", "User", "UserCollection")
        assert "namespace App\\QueryBuilders;\n\nuse App\\Models\\User;\nuse App\\Collections\\UserCollection;\n" in text
        assert (
            "/**\n * @method null|User first()\n * @method UserCollection get()\n */\n"
            "class UserQueryBuilder extends Builder"
        ) in text

    def test_build_in_bare_project(self, bare_project):
        from eloquent_composition.engine import CompositionEngine

        text = CompositionEngine.for_layout(bare_project).build_collection("UserCollection", "User")
        assert "namespace App;" in text
        assert "use App\\User;" in text
