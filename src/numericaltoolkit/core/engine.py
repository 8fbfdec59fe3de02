"""
Iterative Update Engine
=======================
The mechanism behind bisection, Newton's method, gradient descent and
population-style updates.

An engine holds a set of named scalar variables. Each iteration it:

1. takes a read-only snapshot of the current values,
2. asks the update rule for every variable's new value against that snapshot,
3. commits all new values at once,
4. calls the post-update hook with the committed snapshot,
5. asks the stop predicate (and the update rule's own convergence flags)
   whether to stop.

No update rule call ever observes a value committed in the same iteration.
"""
from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, NamedTuple, Optional, Union

from numericaltoolkit.config import DEFAULT_VARIABLE_NAME, DEFAULT_VARIABLE_VALUE
from numericaltoolkit.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


class Update(NamedTuple):
    """
    New value of a variable, optionally flagged as converged.

    An update rule may return a plain float or an `Update`. A `converged`
    flag on any variable stops the run once the current iteration finishes.
    """
    value: float
    converged: bool = False


Snapshot = Mapping[str, float]
UpdateRule = Callable[[Snapshot, str, float], Union[float, Update]]
PostUpdateHook = Callable[[Snapshot], None]
StopPredicate = Callable[[], bool]
VariableSpec = Union[Mapping[str, float], Iterable[Union[str, tuple[str, float]]], None]


def _no_op(_: Snapshot) -> None:
    pass


def _never() -> bool:
    return False


@dataclass
class IterationResult:
    """
    Final state of an engine run.

    Attributes:
        variables: Final committed values in declaration order.
        iterations: Number of commit cycles that ran.
        stopped_early: True if the stop predicate or a converged update ended the run
            before the iteration cap.
    """
    variables: dict[str, float] = field(default_factory=dict)
    iterations: int = 0
    stopped_early: bool = False

    @property
    def values(self) -> list[float]:
        """Final values flattened in declaration order."""
        return list(self.variables.values())

    def value(self, name: Optional[str] = None) -> float:
        """Return one variable's final value (the first declared one by default)."""
        if name is None:
            return next(iter(self.variables.values()))
        return self.variables[name]

    def __getitem__(self, name: str) -> float:
        return self.variables[name]


def normalize_variables(variables: VariableSpec) -> dict[str, float]:
    """
    Build the initial variable set from any of the accepted declaration forms.

    Accepted forms are a mapping name -> value, an iterable of ``(name, value)``
    pairs, or an iterable of bare names (initialised to 0.0). An empty or
    missing declaration yields the single default variable.

    Raises:
        InvalidInputError: On a non-string name, a non-numeric value or a duplicate name.
    """
    declared: dict[str, float] = {}

    if variables is None:
        items: Iterable = ()
    elif isinstance(variables, Mapping):
        items = variables.items()
    elif isinstance(variables, str):
        items = (variables,)
    else:
        items = variables

    for item in items:
        if isinstance(item, str):
            name, value = item, DEFAULT_VARIABLE_VALUE
        else:
            try:
                name, value = item
            except (TypeError, ValueError):
                raise InvalidInputError(f"Variable declaration {item!r} is neither a name nor a (name, value) pair.")

        if not isinstance(name, str):
            raise InvalidInputError(f"Variable name must be a string, got {name!r}.")
        if not isinstance(value, numbers.Real):
            raise InvalidInputError(f"Initial value of '{name}' must be a real number, got {value!r}.")
        if name in declared:
            raise InvalidInputError(f"Variable '{name}' is declared more than once.")

        declared[name] = float(value)

    if not declared:
        declared[DEFAULT_VARIABLE_NAME] = DEFAULT_VARIABLE_VALUE

    return declared


def validate_iterations(iterations: int) -> None:
    """Reject iteration counts that are negative or not integers."""
    if isinstance(iterations, bool) or not isinstance(iterations, numbers.Integral):
        raise InvalidInputError(f"Iteration count must be an integer, got {iterations!r}.")
    if iterations < 0:
        raise InvalidInputError(f"Iteration count must be non-negative, got {iterations}.")


class IterativeEngine:
    """
    Reusable configuration of an iterative update process.

    Every call to `run` starts from a fresh copy of the declared variables, so
    one engine can be run several times with different iteration caps.
    """

    def __init__(
        self,
        update_rule: UpdateRule,
        variables: VariableSpec = None,
        post_update_hook: Optional[PostUpdateHook] = None,
        stop_predicate: Optional[StopPredicate] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            update_rule: f(snapshot, name, current_value) -> new value or `Update`.
            variables: Initial variable declaration (see `normalize_variables`).
            post_update_hook: Called once per iteration with the committed snapshot.
            stop_predicate: Zero-argument callable checked after the hook; True stops the run.
        """
        if not callable(update_rule):
            raise InvalidInputError("Update rule must be callable.")

        self.update_rule = update_rule
        self.post_update_hook = post_update_hook or _no_op
        self.stop_predicate = stop_predicate or _never
        self.initial_variables = normalize_variables(variables)

    @property
    def variable_names(self) -> list[str]:
        return list(self.initial_variables)

    def run(self, iterations: int) -> IterationResult:
        """
        Run at most `iterations` update cycles.

        Args:
            iterations: Iteration cap, a non-negative integer.

        Raises:
            InvalidInputError: If `iterations` is negative or not an integer.

        Returns:
            The final committed variable values and how the run ended.
        """
        validate_iterations(iterations)

        current = dict(self.initial_variables)
        completed = 0
        stopped_early = False

        logger.debug(f"Starting run: {iterations} iterations over variables {list(current)}.")

        for iteration in range(iterations):
            snapshot = MappingProxyType(dict(current))

            staged: dict[str, float] = {}
            converged = False
            for name, value in snapshot.items():
                new_value = self.update_rule(snapshot, name, value)
                if isinstance(new_value, Update):
                    converged = converged or bool(new_value.converged)
                    new_value = new_value.value
                staged[name] = float(new_value)

            # Commit the whole generation at once
            current.update(staged)
            completed += 1

            logger.debug(f"Iteration {iteration} committed: {staged}")

            self.post_update_hook(MappingProxyType(dict(current)))

            # The predicate runs every iteration, even after a converged update
            if self.stop_predicate() or converged:
                stopped_early = completed < iterations
                logger.debug(f"Stop requested after iteration {iteration}.")
                break

        logger.debug(f"Run finished after {completed} iterations: {current}")

        return IterationResult(variables=current, iterations=completed, stopped_early=stopped_early)


def run(
    iterations: int,
    variables: VariableSpec = None,
    update_rule: Optional[UpdateRule] = None,
    post_update_hook: Optional[PostUpdateHook] = None,
    stop_predicate: Optional[StopPredicate] = None,
) -> IterationResult:
    """
    Configure an `IterativeEngine` and run it once.

    Args:
        iterations: Iteration cap, a non-negative integer.
        variables: Initial variable declaration; empty seeds a single variable "x" = 0.0.
        update_rule: f(snapshot, name, current_value) -> new value or `Update`.
        post_update_hook: Called once per iteration with the committed snapshot.
        stop_predicate: Zero-argument callable checked after the hook.

    Returns:
        The final committed variable values and how the run ended.
    """
    if update_rule is None:
        raise InvalidInputError("An update rule is required.")

    validate_iterations(iterations)

    engine = IterativeEngine(
        update_rule=update_rule,
        variables=variables,
        post_update_hook=post_update_hook,
        stop_predicate=stop_predicate,
    )
    return engine.run(iterations)
