"""
Shared row handling for directives backed by Cloud DLP.

For every row the source column's text is sent through the configured
``DlpTransformService`` and the result is written to a derived column.
A missing column or a non-text value is not an error: the derived column
is set to None and processing continues. Remote failures propagate and
abort the batch.
"""

import logging
from abc import abstractmethod
from collections import Counter
from collections.abc import Mapping
from typing import Any

from dlp import DlpError, DlpServiceProvider, DlpTransformService, TransformConfig
from utils.tracing import add_span_attributes, trace_operation

from .base import ROWS_PROCESSED, Arguments, Directive, Row
from .errors import DirectiveExecutionError, DirectiveParseError

logger = logging.getLogger(__name__)


class SensitiveDataDirective(Directive):
    """Writes a DLP-transformed copy of one column to ``<column><SUFFIX>``."""

    SUFFIX: str = ""

    def __init__(self, provider: DlpServiceProvider | None = None, max_retries: int = 0):
        """
        Args:
            provider: DLP provider to use; the process-wide one is acquired
                during ``initialize`` when omitted
            max_retries: Retries for transient DLP failures (0 disables)
        """
        self.provider = provider
        self.max_retries = max_retries
        self.column: str | None = None
        self.service: DlpTransformService | None = None

    @property
    def derived_column(self) -> str:
        return f"{self.column}{self.SUFFIX}"

    @abstractmethod
    def build_config(self, args: Arguments) -> TransformConfig:
        """Build the transformation config from parsed arguments."""

    @abstractmethod
    def acquire_provider(self, args: Arguments) -> DlpServiceProvider:
        """Get the provider when none was injected."""

    def initialize(self, args: Arguments | Mapping[str, Any]) -> None:
        args = self.parse_arguments(args)

        try:
            config = self.build_config(args)
            provider = self.provider or self.acquire_provider(args)
            service = DlpTransformService(provider, config, max_retries=self.max_retries)
        except (DlpError, ValueError, TypeError) as e:
            raise DirectiveParseError(f"Unable to initialize '{self.NAME}': {e}") from e

        # Column and service change together; a failed re-initialize keeps both
        self.column = args.value("column")
        self.service = service

        logger.info(
            f"Initialized '{self.NAME}' on column '{self.column}'",
            extra={"info_types": ",".join(config.info_types)},
        )

    def execute(self, rows: list[Row], context: Mapping[str, Any] | None = None) -> list[Row]:
        if self.service is None:
            raise DirectiveExecutionError(f"Directive '{self.NAME}' has not been initialized")

        derived = self.derived_column
        outcomes: Counter[str] = Counter()

        with trace_operation(
            "directive.execute",
            directive=self.get_type(),
            column=self.column,
            row_count=len(rows),
        ):
            for row in rows:
                if self.column not in row:
                    row[derived] = None
                    outcome = "missing_column"
                else:
                    value = row[self.column]
                    if isinstance(value, str):
                        row[derived] = self.service.apply(value)
                        outcome = "transformed"
                    else:
                        row[derived] = None
                        outcome = "non_text"

                outcomes[outcome] += 1
                ROWS_PROCESSED.labels(directive=self.get_type(), outcome=outcome).inc()

            add_span_attributes(**{f"rows_{name}": count for name, count in outcomes.items()})

        return rows

    def destroy(self) -> None:
        # The DLP client belongs to the provider and outlives the directive
        pass
