"""Tests for module resolution."""

import pytest

from cqrsgen.parsing.errors import ImportPrefixError, ParseError, SourceModuleNotFoundError
from cqrsgen.parsing.resolver import ModuleReader, import_prefix


class TestImportPrefix:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("src/todo_app/domain/todo_list.py", "todo_app.domain.todo_list"),
            ("src/todo_app/domain/__init__.py", "todo_app.domain"),
            ("project/src/app/model.py", "app.model"),
            ("tests/fixtures/model.py", "fixtures.model"),
            ("src/app/src/model.py", "app.src.model"),
        ],
    )
    def test_derives_dotted_path(self, path, expected):
        assert import_prefix(path) == expected

    def test_requires_source_root(self):
        with pytest.raises(ImportPrefixError) as exc_info:
            import_prefix("lib/app/model.py")

        assert "needs to contain one of 'src/', 'tests/'" in str(exc_info.value)

    def test_requires_python_file(self):
        with pytest.raises(ImportPrefixError) as exc_info:
            import_prefix("src/app/model.txt")

        assert "doesn't end with a '.py' file: 'model.txt'" in str(exc_info.value)

    def test_rejects_bare_source_root_package(self):
        with pytest.raises(ImportPrefixError):
            import_prefix("src/__init__.py")

    def test_custom_source_roots(self):
        assert import_prefix("lib/app/model.py", source_roots=["lib"]) == "app.model"


class TestModuleReader:
    def test_reads_relative_to_base_dir(self, project_reader):
        source = project_reader.load("src/todo_app/domain/todo_list.py")

        assert source.import_prefix == "todo_app.domain.todo_list"
        assert "class TodoListModelLock" in source.text
        assert source.path == "src/todo_app/domain/todo_list.py"

    def test_missing_file(self, tmp_path):
        reader = ModuleReader(tmp_path)

        with pytest.raises(SourceModuleNotFoundError) as exc_info:
            reader.read("src/app/missing.py")

        message = str(exc_info.value)
        assert "Error loading the given file" in message
        assert "missing.py" in message
        assert "File paths need to start from the project root." in message
        assert exc_info.value.cwd is not None

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "src" / "app" / "m.py"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"# \xff\xfe bad\n")
        reader = ModuleReader(tmp_path)

        with pytest.raises(ParseError) as exc_info:
            reader.load("src/app/m.py")

        message = str(exc_info.value)
        assert "not valid UTF-8" in message
        assert "0xff at offset 2" in message
        assert exc_info.value.path == "src/app/m.py"
