"""Tests for cross-model aggregation."""

from dataclasses import replace

import pytest

from cqrsgen.synthesis.aggregator import aggregate, check_conflicts
from cqrsgen.synthesis.errors import AggregationError


class TestAggregate:
    def test_effect_variants_are_prefixed_per_model(self, analyzed_todo_list, analyzed_shopping_list):
        api = aggregate([analyzed_todo_list, analyzed_shopping_list])

        assert [v.name for v in api.effect.variants] == [
            "TodoListModelRenderItems",
            "TodoListModelItemRemoved",
            "ShoppingListModelRenderItems",
        ]
        assert api.effect.get_variant("ShoppingListModelRenderItems").fields[0].name == "articles"

    def test_effect_count_is_sum_of_model_effects(self, analyzed_todo_list, analyzed_shopping_list):
        models = [analyzed_todo_list, analyzed_shopping_list]

        api = aggregate(models)

        assert len(api.effect.variants) == sum(len(m.effects.effect_variants) for m in models)

    def test_processing_error_variants(self, analyzed_todo_list, analyzed_shopping_list):
        api = aggregate([analyzed_todo_list, analyzed_shopping_list])

        variants = api.processing_error.variants
        assert [v.name for v in variants] == ["TodoListError", "ShoppingListError", "NotPersisted"]
        assert variants[0].fields[0].annotation == "TodoListError"
        assert variants[-1].docstring == "Processing was fine, but state could not be persisted."

    def test_imports(self, analyzed_todo_list, analyzed_shopping_list):
        api = aggregate([analyzed_todo_list, analyzed_shopping_list], result_module="returns.result")

        assert [statement.render() for statement in api.imports] == [
            "from dataclasses import dataclass",
            "from functools import singledispatch",
            "from returns.result import Err, Ok, Result",
            "from todo_app.domain.todo_list import *",
            "from todo_app.domain.shopping_list import *",
        ]

    def test_model_fragments(self, analyzed_todo_list, analyzed_shopping_list):
        api = aggregate([analyzed_todo_list, analyzed_shopping_list], lifecycle_type="LifecycleImpl")

        todo, shopping = api.models
        assert api.lifecycle_type == "LifecycleImpl"
        assert len(todo.dispatches) == 2
        assert shopping.query_dispatch is None
        assert [d.enumeration for d in shopping.dispatches] == ["ShoppingListModelCommand"]


class TestCheckConflicts:
    def test_same_model_twice(self, analyzed_todo_list):
        with pytest.raises(AggregationError) as exc_info:
            check_conflicts([analyzed_todo_list, analyzed_todo_list])

        assert "TodoListModel" in exc_info.value.conflicts

    def test_shared_error_type(self, analyzed_todo_list, analyzed_shopping_list):
        effects = replace(analyzed_shopping_list.effects, error_type="TodoListError")
        clashing = replace(analyzed_shopping_list, effects=effects)

        with pytest.raises(AggregationError) as exc_info:
            check_conflicts([analyzed_todo_list, clashing])

        assert "'TodoListError'" in str(exc_info.value)

    def test_reserved_name(self, analyzed_todo_list):
        effects = replace(analyzed_todo_list.effects, effect_type="Effect")

        with pytest.raises(AggregationError) as exc_info:
            check_conflicts([replace(analyzed_todo_list, effects=effects)])

        assert "generated API" in str(exc_info.value)

    def test_generated_effect_names_must_differ(self, analyzed_todo_list):
        # "Todo" + "ListModelRenderItems" == "TodoList" + "ModelRenderItems"
        first_model = replace(analyzed_todo_list.model, domain_type="Todo", handle_type="TodoLock")
        first = replace(
            analyzed_todo_list,
            effects=replace(
                analyzed_todo_list.effects,
                model=first_model,
                effect_type="TodoEffect",
                error_type="TodoError",
                effect_variants=(
                    replace(analyzed_todo_list.effects.effect_variants[0], name="ListModelRenderItems"),
                ),
            ),
        )
        second_model = replace(analyzed_todo_list.model, domain_type="TodoList", path="src/other.py")
        second = replace(
            analyzed_todo_list,
            effects=replace(
                analyzed_todo_list.effects,
                model=second_model,
                effect_variants=(
                    replace(analyzed_todo_list.effects.effect_variants[0], name="ModelRenderItems"),
                ),
            ),
        )

        with pytest.raises(AggregationError) as exc_info:
            check_conflicts([first, second])

        assert "TodoListModelRenderItems" in str(exc_info.value)

    @pytest.mark.parametrize("handle_type", ["Request", "AppState", "Lifecycle", "StateChanged"])
    def test_handle_attribute_must_not_shadow_dispatch_locals(self, analyzed_todo_list, handle_type):
        model = replace(analyzed_todo_list.model, handle_type=handle_type)
        clashing = replace(
            analyzed_todo_list, effects=replace(analyzed_todo_list.effects, model=model)
        )

        with pytest.raises(AggregationError) as exc_info:
            aggregate([clashing])

        assert handle_type in str(exc_info.value)
        assert exc_info.value.path == "src/todo_app/domain/todo_list.py"
