"""Tests for numericaltoolkit.core.engine: snapshot isolation, iteration cap, stop signals."""

from __future__ import annotations

import logging
from types import MappingProxyType

import pytest

from numericaltoolkit.config import DEFAULT_VARIABLE_NAME
from numericaltoolkit.core.engine import (
    IterationResult,
    IterativeEngine,
    Update,
    normalize_variables,
    run,
)
from numericaltoolkit.exceptions import InvalidInputError


# ── Variable declaration ──


class TestVariables:
    def test_empty_declaration_seeds_default_variable(self):
        assert normalize_variables(None) == {DEFAULT_VARIABLE_NAME: 0.0}
        assert normalize_variables({}) == {DEFAULT_VARIABLE_NAME: 0.0}
        assert normalize_variables([]) == {DEFAULT_VARIABLE_NAME: 0.0}

    def test_mapping(self):
        assert normalize_variables({"a": 1, "b": 2.5}) == {"a": 1.0, "b": 2.5}

    def test_pairs(self):
        assert normalize_variables([("b", 2.0), ("a", 1.0)]) == {"b": 2.0, "a": 1.0}

    def test_bare_names_start_at_zero(self):
        assert normalize_variables(["p", "q"]) == {"p": 0.0, "q": 0.0}

    def test_single_name_string(self):
        assert normalize_variables("y") == {"y": 0.0}

    def test_declaration_order_preserved(self):
        names = [f"v{i}" for i in range(20)]
        assert list(normalize_variables(names)) == names

    def test_duplicate_name_rejected(self):
        with pytest.raises(InvalidInputError, match="more than once"):
            normalize_variables([("a", 1.0), ("a", 2.0)])

    def test_non_string_name_rejected(self):
        with pytest.raises(InvalidInputError):
            normalize_variables([(1, 2.0)])

    def test_non_numeric_value_rejected(self):
        with pytest.raises(InvalidInputError):
            normalize_variables({"a": "zero"})

    def test_malformed_item_rejected(self):
        with pytest.raises(InvalidInputError):
            normalize_variables([("a", 1.0, 2.0)])


# ── Run contract ──


class TestRun:
    def test_default_variable_updated(self):
        result = run(3, update_rule=lambda v, name, x: x + 1.0)
        assert result.variables == {DEFAULT_VARIABLE_NAME: 3.0}
        assert result.value() == 3.0

    def test_zero_iterations_returns_initial_values(self):
        result = run(0, variables={"a": 4.0}, update_rule=lambda v, n, x: x * 100)
        assert result.variables == {"a": 4.0}
        assert result.iterations == 0
        assert result.stopped_early is False

    def test_negative_iterations_rejected(self):
        with pytest.raises(InvalidInputError, match="non-negative"):
            run(-1, update_rule=lambda v, n, x: x)

    def test_non_integer_iterations_rejected(self):
        with pytest.raises(InvalidInputError):
            run(2.5, update_rule=lambda v, n, x: x)
        with pytest.raises(InvalidInputError):
            run(True, update_rule=lambda v, n, x: x)

    def test_missing_update_rule_rejected(self):
        with pytest.raises(InvalidInputError):
            run(1)

    def test_each_commit_logged_at_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger="numericaltoolkit.core.engine")
        run(2, variables={"a": 0.0}, update_rule=lambda v, n, x: x + 1.0)

        committed = [r.getMessage() for r in caplog.records if "committed" in r.getMessage()]
        assert committed == ["Iteration 0 committed: {'a': 1.0}", "Iteration 1 committed: {'a': 2.0}"]
        assert all(r.levelno == logging.DEBUG for r in caplog.records)

    def test_non_callable_update_rule_rejected(self):
        with pytest.raises(InvalidInputError):
            IterativeEngine(update_rule=3.0)

    def test_values_in_declaration_order(self):
        result = run(1, variables=[("z", 1.0), ("a", 2.0), ("m", 3.0)], update_rule=lambda v, n, x: -x)
        assert result.values == [-1.0, -2.0, -3.0]
        assert list(result.variables) == ["z", "a", "m"]
        assert result["a"] == -2.0
        assert result.value("m") == -3.0

    def test_update_values_coerced_to_float(self):
        result = run(1, variables={"a": 1}, update_rule=lambda v, n, x: 7)
        assert isinstance(result["a"], float)


# ── Snapshot isolation ──


class TestAtomicity:
    def test_swap_uses_previous_values(self):
        # Each variable takes the other's value: only snapshot reads make this a swap
        def swap(v, name, x):
            return v["b"] if name == "a" else v["a"]

        result = run(1, variables={"a": 1.0, "b": 2.0}, update_rule=swap)
        assert result.variables == {"a": 2.0, "b": 1.0}

        result = run(2, variables={"a": 1.0, "b": 2.0}, update_rule=swap)
        assert result.variables == {"a": 1.0, "b": 2.0}

    def test_reads_never_see_same_iteration_commits(self):
        seen: list[tuple[int, str, dict]] = []
        history = [{"a": 0.0, "b": 10.0, "c": 100.0}]
        counter = {"iteration": 0}

        def rule(v, name, x):
            seen.append((counter["iteration"], name, dict(v)))
            return x + 1.0

        def hook(snapshot):
            history.append(dict(snapshot))
            counter["iteration"] += 1

        run(5, variables=history[0], update_rule=rule, post_update_hook=hook)

        assert len(seen) == 15
        for iteration, _, observed in seen:
            assert observed == history[iteration]

    def test_current_value_argument_matches_snapshot(self):
        def rule(v, name, x):
            assert x == v[name]
            return x * 2.0 + 1.0

        run(4, variables={"a": 1.0, "b": -3.0}, update_rule=rule)

    def test_snapshot_is_read_only(self):
        def rule(v, name, x):
            assert isinstance(v, MappingProxyType)
            with pytest.raises(TypeError):
                v[name] = 0.0
            return x

        run(1, variables={"a": 1.0}, update_rule=rule)

    def test_hook_receives_committed_values(self):
        snapshots = []
        run(3, variables={"a": 0.0}, update_rule=lambda v, n, x: x + 2.0,
            post_update_hook=lambda s: snapshots.append(dict(s)))
        assert snapshots == [{"a": 2.0}, {"a": 4.0}, {"a": 6.0}]

    def test_hook_snapshot_is_read_only(self):
        def hook(snapshot):
            with pytest.raises(TypeError):
                snapshot["a"] = 99.0

        result = run(1, variables={"a": 0.0}, update_rule=lambda v, n, x: 1.0, post_update_hook=hook)
        assert result["a"] == 1.0


# ── Iteration cap and early stop ──


class TestTermination:
    def test_exactly_n_commit_cycles_without_stop(self):
        commits = []
        result = run(7, update_rule=lambda v, n, x: x + 1.0, post_update_hook=commits.append,
                     stop_predicate=lambda: False)
        assert len(commits) == 7
        assert result.iterations == 7
        assert result.stopped_early is False

    @pytest.mark.parametrize("k", [0, 1, 4])
    def test_stop_after_commit_k_runs_k_plus_one_cycles(self, k):
        commits = []
        result = run(
            10,
            update_rule=lambda v, n, x: x + 1.0,
            post_update_hook=commits.append,
            stop_predicate=lambda: len(commits) > k,
        )
        assert len(commits) == k + 1
        assert result.iterations == k + 1
        assert result.value() == float(k + 1)
        assert result.stopped_early is True

    def test_predicate_evaluated_after_hook(self):
        order = []
        run(
            2,
            update_rule=lambda v, n, x: order.append("update") or x,
            post_update_hook=lambda s: order.append("hook"),
            stop_predicate=lambda: order.append("stop") or False,
        )
        assert order == ["update", "hook", "stop"] * 2

    def test_stop_on_last_iteration_is_not_early(self):
        result = run(3, update_rule=lambda v, n, x: x + 1.0, stop_predicate=lambda: True)
        assert result.iterations == 1
        assert result.stopped_early is True

        result = run(1, update_rule=lambda v, n, x: x + 1.0, stop_predicate=lambda: True)
        assert result.iterations == 1
        assert result.stopped_early is False

    def test_converged_update_stops_after_full_iteration(self):
        def rule(v, name, x):
            new = x + 1.0
            return Update(new, converged=(name == "a" and new >= 3.0))

        result = run(10, variables={"a": 0.0, "b": 0.0}, update_rule=rule)
        # The iteration that reported convergence is committed for every variable
        assert result.variables == {"a": 3.0, "b": 3.0}
        assert result.iterations == 3
        assert result.stopped_early is True

    def test_hook_driven_stop(self):
        # The hook inspects the committed snapshot and decides the predicate's answer
        state = {"done": False}

        def hook(snapshot):
            state["done"] = snapshot["x"] < 1e-3

        result = run(100, variables={"x": 1.0}, update_rule=lambda v, n, x: x / 2.0,
                     post_update_hook=hook, stop_predicate=lambda: state["done"])
        assert result.iterations == 10
        assert result.value() == pytest.approx(2.0 ** -10)

    def test_divergence_is_not_an_error(self):
        result = run(2000, update_rule=lambda v, n, x: (x + 1.0) * 10.0)
        assert result.iterations == 2000
        assert result.value() == float("inf")


# ── Engine reuse ──


class TestEngineReuse:
    def test_each_run_starts_from_initial_values(self):
        engine = IterativeEngine(update_rule=lambda v, n, x: x + 1.0, variables={"a": 5.0})
        assert engine.run(2)["a"] == 7.0
        assert engine.run(3)["a"] == 8.0
        assert engine.initial_variables == {"a": 5.0}

    def test_variable_names(self):
        engine = IterativeEngine(update_rule=lambda v, n, x: x, variables=["q", "r"])
        assert engine.variable_names == ["q", "r"]

    def test_engine_rejects_negative_iterations(self):
        engine = IterativeEngine(update_rule=lambda v, n, x: x)
        with pytest.raises(InvalidInputError):
            engine.run(-3)

    def test_result_is_dataclass(self):
        result = run(1, update_rule=lambda v, n, x: 1.0)
        assert isinstance(result, IterationResult)
