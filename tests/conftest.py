"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from cqrsgen.config.models import GeneratorConfig
from cqrsgen.generator import analyze_source
from cqrsgen.parsing.parser import parse_module
from cqrsgen.parsing.resolver import ModuleReader, SourceModule

TODO_LIST_SOURCE = '''\
from __future__ import annotations

from dataclasses import dataclass, field

from cqrs_runtime import CqrsModel, CqrsModelLock
from result import Err, Ok, Result


@dataclass
class TodoListModel(CqrsModel):
    items: list[str] = field(default_factory=list)


class TodoListEffect:
    @dataclass(frozen=True)
    class RenderItems:
        items: list[str]

    @dataclass(frozen=True)
    class ItemRemoved:
        pos: int


class TodoListError:
    @dataclass(frozen=True)
    class ItemDoesNotExist:
        pos: int


class TodoListModelLock(CqrsModelLock[TodoListModel]):
    def __init__(self, model: TodoListModel):
        self.model = model

    def add_item(self, item: str) -> Result[tuple[bool, list[TodoListEffect]], TodoListError]:
        self.model.items.append(item)
        return Ok((True, [TodoListEffect.RenderItems(list(self.model.items))]))

    def remove_item(self, pos: int) -> Result[tuple[bool, list[TodoListEffect]], TodoListError]:
        if pos >= len(self.model.items):
            return Err(TodoListError.ItemDoesNotExist(pos))
        del self.model.items[pos]
        return Ok((True, [TodoListEffect.ItemRemoved(pos)]))

    def clean_list(self) -> Result[tuple[bool, list[TodoListEffect]], TodoListError]:
        if not self.model.items:
            return Ok((False, []))
        self.model.items.clear()
        return Ok((True, [TodoListEffect.RenderItems([])]))

    def get_all_items(self) -> Result[list[TodoListEffect], TodoListError]:
        return Ok([TodoListEffect.RenderItems(list(self.model.items))])
'''

SHOPPING_LIST_SOURCE = '''\
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cqrs_runtime import CqrsModel, CqrsModelLock
from result import Err, Ok, Result


@dataclass
class ShoppingListModel(CqrsModel):
    articles: list[str] = field(default_factory=list)


class ShoppingListEffect:
    @dataclass(frozen=True)
    class RenderItems:
        articles: list[str]


class ShoppingListError(Enum):
    ALREADY_LISTED = "already listed"


class ShoppingListModelLock(CqrsModelLock[ShoppingListModel]):
    def __init__(self, model: ShoppingListModel):
        self.model = model

    def command_add_article(self, article: str, *, quantity: int = 1) -> Result[tuple[bool, list[ShoppingListEffect]], ShoppingListError]:
        if article in self.model.articles:
            return Err(ShoppingListError.ALREADY_LISTED)
        self.model.articles.extend([article] * quantity)
        return Ok((True, [ShoppingListEffect.RenderItems(list(self.model.articles))]))
'''

LIFECYCLE_SOURCE = '''\
from cqrs_runtime import Lifecycle
from result import Err, Ok

from todo_app.domain.shopping_list import ShoppingListModel, ShoppingListModelLock
from todo_app.domain.todo_list import TodoListModel, TodoListModelLock


class AppState:
    def __init__(self):
        self.todo_list_model_lock = TodoListModelLock(TodoListModel())
        self.shopping_list_model_lock = ShoppingListModelLock(ShoppingListModel())
        self.dirty = False

    def mark_dirty(self):
        self.dirty = True


class LifecycleImpl(Lifecycle):
    def __init__(self, fail_persist=False):
        self.app_state = AppState()
        self.fail_persist = fail_persist
        self.persisted = 0

    def persist(self):
        if self.fail_persist:
            return Err(OSError("disk full"))
        self.persisted += 1
        return Ok(None)


def create_app():
    return LifecycleImpl()
'''

# Stand-ins for the runtime library the generated code imports.
RESULT_SOURCE = '''\
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Ok:
    value: Any


@dataclass(frozen=True)
class Err:
    error: Any


Result = Union[Ok, Err]
'''

RUNTIME_SOURCE = '''\
from typing import Generic, TypeVar

T = TypeVar("T")


class CqrsModel:
    pass


class CqrsModelLock(Generic[T]):
    pass


class Lifecycle:
    pass
'''

TODO_LIST_PATH = "src/todo_app/domain/todo_list.py"
SHOPPING_LIST_PATH = "src/todo_app/domain/shopping_list.py"
LIFECYCLE_PATH = "src/todo_app/lifecycle.py"


@pytest.fixture
def todo_list_source() -> str:
    """Return the todo list model module."""
    return TODO_LIST_SOURCE


@pytest.fixture
def shopping_list_source() -> str:
    """Return a second model module whose Effect also has RenderItems."""
    return SHOPPING_LIST_SOURCE


@pytest.fixture
def lifecycle_source() -> str:
    return LIFECYCLE_SOURCE


@pytest.fixture
def todo_list_module(todo_list_source):
    """Return the parsed todo list module."""
    return parse_module(todo_list_source, TODO_LIST_PATH)


@pytest.fixture
def analyzed_todo_list(todo_list_source):
    """Return the analysed todo list model."""
    return analyze_source(
        SourceModule(TODO_LIST_PATH, "todo_app.domain.todo_list", todo_list_source)
    )


@pytest.fixture
def analyzed_shopping_list(shopping_list_source):
    """Return the analysed shopping list model."""
    return analyze_source(
        SourceModule(SHOPPING_LIST_PATH, "todo_app.domain.shopping_list", shopping_list_source)
    )


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Write a project with two models, a lifecycle module and runtime stand-ins."""
    files = {
        "src/result.py": RESULT_SOURCE,
        "src/cqrs_runtime.py": RUNTIME_SOURCE,
        "src/todo_app/__init__.py": "",
        "src/todo_app/domain/__init__.py": "",
        TODO_LIST_PATH: TODO_LIST_SOURCE,
        SHOPPING_LIST_PATH: SHOPPING_LIST_SOURCE,
        LIFECYCLE_PATH: LIFECYCLE_SOURCE,
    }
    for relative, content in files.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return tmp_path


@pytest.fixture
def project_reader(project_dir) -> ModuleReader:
    return ModuleReader(project_dir)


@pytest.fixture
def project_config(project_dir) -> GeneratorConfig:
    """Return a configuration rooted at the project directory."""
    return GeneratorConfig(
        lifecycle=LIFECYCLE_PATH,
        models=[TODO_LIST_PATH, SHOPPING_LIST_PATH],
        base_dir=str(project_dir),
    )
