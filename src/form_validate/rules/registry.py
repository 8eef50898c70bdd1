"""Rule registry.

Maps rule names used in schemas to evaluator callables. An evaluator
receives a single RuleOptions and returns a message, a structured error
mapping, or a falsy value when the rule passes. It may be a coroutine
function; the engine awaits awaitable results.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from form_validate.exceptions import SchemaConfigurationError

if TYPE_CHECKING:
    from form_validate.schema.nodes import SchemaNode

RuleResult = str | Mapping[str, Any] | bool | None
Evaluator = Callable[["RuleOptions"], RuleResult | Awaitable[RuleResult]]
# Returns a description of what is wrong with a parameter, or None
ParamCheck = Callable[[Any], str | None]


@dataclass(slots=True, frozen=True)
class RuleOptions:
    """Everything a rule evaluator may look at.

    Attributes:
        value: Value at the node being validated
        schema: The node being validated
        param: The rule's bound parameter
        title: Effective title of the node
        root_value: Top-level value of the validation call (read-only)

    """

    value: Any
    schema: SchemaNode
    param: Any
    title: str
    root_value: Any


class RuleRegistry:
    """Named collection of rule evaluators."""

    def __init__(
        self,
        rules: Mapping[str, Evaluator] | None = None,
        param_checks: Mapping[str, ParamCheck] | None = None,
    ) -> None:
        """Initialize registry.

        Args:
            rules: Initial name to evaluator mapping
            param_checks: Parameter checks keyed by rule name, run by
                check_schema() before any evaluator

        """
        self._rules: dict[str, Evaluator] = dict(rules or {})
        self._param_checks: dict[str, ParamCheck] = {
            name: check
            for name, check in (param_checks or {}).items()
            if name in self._rules
        }

    def register(
        self,
        name: str,
        evaluator: Evaluator,
        *,
        replace: bool = False,
        check_param: ParamCheck | None = None,
    ) -> None:
        """Register an evaluator under ``name``.

        Args:
            name: Rule name as used in schemas
            evaluator: Callable taking RuleOptions
            replace: Allow overriding an existing rule
            check_param: Optional check of the rule's declared parameter.
                Replacing a rule drops the previous check.

        Raises:
            ValueError: If the name is taken and replace is False, or the
                evaluator is not callable

        """
        if not callable(evaluator):
            msg = f"Evaluator for rule '{name}' must be callable"
            raise ValueError(msg)
        if name in self._rules and not replace:
            msg = f"Rule '{name}' is already registered"
            raise ValueError(msg)
        self._rules[name] = evaluator
        self._param_checks.pop(name, None)
        if check_param is not None:
            self._param_checks[name] = check_param

    def rule(self, name: str) -> Callable[[Evaluator], Evaluator]:
        """Decorator form of register().

        Example:
            >>> @registry.rule("even")
            ... def even(options):
            ...     return options.value % 2 and f"{options.title} is odd"

        """

        def decorator(evaluator: Evaluator) -> Evaluator:
            self.register(name, evaluator)
            return evaluator

        return decorator

    def unregister(self, name: str) -> None:
        """Remove a rule.

        Raises:
            SchemaConfigurationError: If no such rule is registered

        """
        if name not in self._rules:
            msg = f"no rule named '{name}'"
            raise SchemaConfigurationError(msg)
        del self._rules[name]
        self._param_checks.pop(name, None)

    def get(self, name: str) -> Evaluator:
        """Return the evaluator registered under ``name``.

        Raises:
            SchemaConfigurationError: If no such rule is registered

        """
        try:
            return self._rules[name]
        except KeyError:
            msg = f"no rule named '{name}'"
            raise SchemaConfigurationError(msg) from None

    def names(self) -> list[str]:
        return list(self._rules)

    def copy(self) -> RuleRegistry:
        """Return an independent registry with the same rules."""
        return RuleRegistry(self._rules, self._param_checks)

    def check_schema(self, schema: SchemaNode) -> None:
        """Ensure every rule referenced by ``schema`` is usable.

        Each rule must be registered, and its parameter must pass the
        rule's parameter check when one was registered.

        Nodes are visited in declaration order so the reported rule is the
        first unknown one a reader of the schema would find.

        Raises:
            SchemaConfigurationError: For the first unknown rule name or
                rejected parameter

        """
        for node in schema.walk():
            target = node.title or node.type_name
            for rule_name, binding in node.rules.items():
                if rule_name not in self._rules:
                    msg = f"no rule named '{rule_name}'"
                    raise SchemaConfigurationError(msg, target=target)
                check = self._param_checks.get(rule_name)
                problem = check(binding.param) if check else None
                if problem:
                    msg = f"rule '{rule_name}': {problem}"
                    raise SchemaConfigurationError(msg, target=target)

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
