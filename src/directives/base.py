"""
Directive contract and argument model.

A directive is one row-transformation step in a recipe. The host pipeline
calls ``define`` to learn the arguments, ``initialize`` once with parsed
arguments, ``execute`` once per batch of rows, and ``destroy`` at shutdown.
Rows are plain dicts of column name to value and are modified in place.
"""

import enum
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from prometheus_client import Counter

from .errors import DirectiveParseError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


# Metrics
ROWS_PROCESSED = Counter(
    "directive_rows_processed_total",
    "Rows processed by directives",
    ["directive", "outcome"],
)

_TRUE_VALUES = {"true", "1", "yes", "y", "on"}
_FALSE_VALUES = {"false", "0", "no", "n", "off"}


class TokenType(enum.Enum):
    """Argument value kinds a directive can declare."""

    COLUMN_NAME = "column-name"
    TEXT = "text"
    TEXT_LIST = "text-list"
    IDENTIFIER = "identifier"
    NUMERIC = "numeric"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ArgumentDefinition:
    name: str
    token_type: TokenType
    optional: bool = False


@dataclass(frozen=True)
class UsageDefinition:
    """Name of a directive and the arguments it accepts, in order."""

    directive: str
    arguments: tuple[ArgumentDefinition, ...]

    def get(self, name: str) -> ArgumentDefinition | None:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None

    def __str__(self) -> str:
        parts = [self.directive]
        for argument in self.arguments:
            token = f"<{argument.name}:{argument.token_type.value}>"
            parts.append(f"[{token}]" if argument.optional else token)
        return " ".join(parts)


def _coerce(argument: ArgumentDefinition, value: Any) -> Any:
    token_type = argument.token_type

    if token_type is TokenType.TEXT_LIST:
        if isinstance(value, str):
            items = value.split(",")
        elif isinstance(value, (list, tuple)):
            items = value
        else:
            raise DirectiveParseError(
                f"Argument '{argument.name}' expects a comma-separated list, got {type(value).__name__}"
            )
        return tuple(str(item).strip() for item in items if str(item).strip())

    if token_type is TokenType.NUMERIC:
        if isinstance(value, bool):
            raise DirectiveParseError(f"Argument '{argument.name}' expects a number, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise DirectiveParseError(
                f"Argument '{argument.name}' expects a number, got {value!r}"
            ) from None

    if token_type is TokenType.BOOLEAN:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise DirectiveParseError(f"Argument '{argument.name}' expects true or false, got {value!r}")

    if not isinstance(value, str):
        raise DirectiveParseError(
            f"Argument '{argument.name}' expects text, got {type(value).__name__}"
        )
    if token_type is TokenType.COLUMN_NAME:
        # Recipes write columns as :name
        value = value.removeprefix(":")
        if not value:
            raise DirectiveParseError(f"Argument '{argument.name}' expects a column name")
    return value


class Arguments:
    """Parsed, type-coerced arguments of one directive invocation."""

    def __init__(self, directive: str, values: Mapping[str, Any]):
        self.directive = directive
        self._values = dict(values)

    @classmethod
    def parse(cls, usage: UsageDefinition, values: Mapping[str, Any]) -> "Arguments":
        """
        Check ``values`` against ``usage`` and coerce them by token type.

        ``None`` counts as not supplied.

        Raises:
            DirectiveParseError: On unknown, missing or ill-typed arguments
        """
        unknown = [name for name in values if usage.get(name) is None]
        if unknown:
            raise DirectiveParseError(
                f"Unknown argument(s) for '{usage.directive}': {', '.join(sorted(unknown))}"
            )

        parsed = {}
        for argument in usage.arguments:
            value = values.get(argument.name)
            if value is None:
                if not argument.optional:
                    raise DirectiveParseError(
                        f"Missing required argument '{argument.name}' for '{usage.directive}'. "
                        f"Usage: {usage}"
                    )
                continue
            parsed[argument.name] = _coerce(argument, value)

        return cls(usage.directive, parsed)

    def contains(self, name: str) -> bool:
        return name in self._values

    def value(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def __repr__(self) -> str:
        return f"Arguments({self.directive!r}, {self._values!r})"


class Directive(ABC):
    """Base class for recipe directives."""

    NAME: str = ""
    CATEGORIES: tuple[str, ...] = ()
    DESCRIPTION: str = ""

    @abstractmethod
    def define(self) -> UsageDefinition:
        """Return the arguments this directive accepts."""

    @abstractmethod
    def initialize(self, args: Arguments | Mapping[str, Any]) -> None:
        """
        Prepare the directive for execution.

        Args:
            args: Parsed arguments, or raw values to parse against ``define()``

        Raises:
            DirectiveParseError: If arguments are invalid or setup fails
        """

    @abstractmethod
    def execute(self, rows: list[Row], context: Mapping[str, Any] | None = None) -> list[Row]:
        """
        Process one batch of rows.

        Args:
            rows: Rows to process; modified in place
            context: Host execution context

        Returns:
            The processed rows, in input order
        """

    def destroy(self) -> None:
        """Release resources held by the directive."""

    def parse_arguments(self, args: Arguments | Mapping[str, Any]) -> Arguments:
        if isinstance(args, Arguments):
            return args
        return Arguments.parse(self.define(), args)

    def get_type(self) -> str:
        """Get directive type for metrics."""
        return self.NAME or self.__class__.__name__
