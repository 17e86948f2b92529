"""Tests for module registry and question loading."""

import json

import pytest

from platolearn.classroom import ModuleLoader
from platolearn.errors import ContentError
from platolearn.schemas import QuestionType


def write_module(root, module_id="demo", rounds=None, questions=None):
    module_dir = root / module_id
    module_dir.mkdir(parents=True, exist_ok=True)
    rounds = rounds if rounds is not None else [
        {"id": "a", "prerequisites": []},
        {"id": "b", "prerequisites": ["a"]},
    ]
    lines = [f"id: {module_id}", f"name: {module_id.title()}", "rounds:"]
    for rnd in rounds:
        lines.append(f"  - id: {rnd['id']}")
        lines.append(f"    prerequisites: {json.dumps(rnd['prerequisites'])}")
    (module_dir / "module.yaml").write_text("\n".join(lines) + "\n", encoding="utf-8")

    questions = questions if questions is not None else {
        "schema": {},
        "rounds": [{"id": "a", "questions": [{"q": "1?", "a": "1"}, {"q": "2?", "a": "2"}]}],
    }
    (module_dir / "questions.json").write_text(json.dumps(questions), encoding="utf-8")
    return module_dir


class TestPackagedContent:

    def test_sql_module_registered(self):
        loader = ModuleLoader()
        module = loader.get_module("sql")
        assert module is not None
        assert [r.id for r in module.rounds] == ["r1", "r2", "r3", "r4", "r5", "r6", "r7"]
        assert module.get_round("r1").prerequisites == []
        assert module.get_round("r4").prerequisites == ["r2", "r3"]
        assert module.get_round("r7").prerequisites == ["r5", "r6"]

    def test_sql_questions_cover_every_round(self):
        loader = ModuleLoader()
        for rnd in loader.get_module("sql").rounds:
            assert loader.get_round("sql", rnd.id).questions, rnd.id

    def test_sql_question_types(self):
        loader = ModuleLoader()
        r7 = loader.get_round("sql", "r7")
        assert r7.questions[0].type == QuestionType.CODE_ORDERING
        assert r7.questions[1].error_code is not None


class TestModuleLoader:

    def test_missing_content_dir(self, tmp_path):
        with pytest.raises(ContentError):
            ModuleLoader(tmp_path / "nope")

    def test_registry(self, tmp_path):
        write_module(tmp_path, "demo")
        write_module(tmp_path, "other")
        loader = ModuleLoader(tmp_path)
        assert [m.id for m in loader.get_all_modules()] == ["demo", "other"]
        assert loader.get_module("missing") is None

    def test_get_round_merges_questions(self, tmp_path):
        write_module(tmp_path)
        loader = ModuleLoader(tmp_path)
        rnd = loader.get_round("demo", "a")
        assert [q.a for q in rnd.questions] == ["1", "2"]
        assert loader.get_round("demo", "b").questions == []
        assert loader.get_round("demo", "zzz") is None

    def test_registry_round_not_modified(self, tmp_path):
        write_module(tmp_path)
        loader = ModuleLoader(tmp_path)
        loader.get_round("demo", "a")
        assert loader.get_module("demo").get_round("a").questions == []

    def test_questions_cached_until_cleared(self, tmp_path):
        module_dir = write_module(tmp_path)
        loader = ModuleLoader(tmp_path)
        first = loader.load_questions("demo")

        (module_dir / "questions.json").write_text(
            json.dumps({"rounds": [{"id": "a", "questions": []}]}), encoding="utf-8"
        )
        assert loader.load_questions("demo") is first

        loader.clear_cache()
        assert loader.load_questions("demo").rounds[0].questions == []

    def test_unknown_module(self, tmp_path):
        write_module(tmp_path)
        loader = ModuleLoader(tmp_path)
        with pytest.raises(ContentError):
            loader.load_questions("missing")

    def test_invalid_questions_file(self, tmp_path):
        module_dir = write_module(tmp_path)
        (module_dir / "questions.json").write_text("{oops", encoding="utf-8")
        loader = ModuleLoader(tmp_path)
        with pytest.raises(ContentError):
            loader.load_questions("demo")

    def test_missing_questions_file(self, tmp_path):
        module_dir = write_module(tmp_path)
        (module_dir / "questions.json").unlink()
        loader = ModuleLoader(tmp_path)
        with pytest.raises(ContentError):
            loader.get_round("demo", "a")

    def test_invalid_module_file(self, tmp_path):
        module_dir = tmp_path / "broken"
        module_dir.mkdir()
        (module_dir / "module.yaml").write_text("rounds: not-a-list\n", encoding="utf-8")
        with pytest.raises(ContentError):
            ModuleLoader(tmp_path)

    def test_duplicate_module_id(self, tmp_path):
        write_module(tmp_path, "demo")
        clash = tmp_path / "zzz"
        clash.mkdir()
        (clash / "module.yaml").write_text("id: demo\nname: Clash\n", encoding="utf-8")
        with pytest.raises(ContentError):
            ModuleLoader(tmp_path)
