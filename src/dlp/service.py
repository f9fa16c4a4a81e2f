"""
Redaction and masking through the Cloud DLP deidentify API.

A ``TransformConfig`` names the info types to look for, the minimum
likelihood for a finding to count, and one transformation mode:

- ``Redact()`` removes every finding from the text
- ``Mask(char, count, direction)`` overwrites findings with ``char``,
  optionally only ``count`` characters counted from one end

``DlpTransformService`` turns the config into DLP inspect/deidentify
configs once and reuses them for every value it is asked to transform.
"""

import enum
import logging
from dataclasses import dataclass
from typing import ClassVar

from google.api_core import exceptions as core_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import dlp_v2
from opentelemetry import trace
from prometheus_client import Counter, Histogram

from utils.retry import TRANSIENT_DLP_ERRORS, retry_with_backoff
from utils.tracing import trace_operation

from .errors import TransformError
from .provider import DlpServiceProvider

logger = logging.getLogger(__name__)


# Metrics
DLP_CALL_SECONDS = Histogram(
    "dlp_deidentify_seconds",
    "Latency of DLP deidentify calls",
    ["mode"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

DLP_CALL_ERRORS = Counter(
    "dlp_deidentify_errors_total",
    "Failed DLP deidentify calls",
    ["mode", "error_type"],
)

DLP_CALL_RETRIES = Counter(
    "dlp_deidentify_retries_total",
    "Retried DLP deidentify calls",
    ["mode", "error_type"],
)


class Direction(enum.Enum):
    """End of a finding that masking starts from."""

    FROM_START = "from_start"
    FROM_END = "from_end"


@dataclass(frozen=True)
class Redact:
    """Remove findings entirely."""

    name: ClassVar[str] = "redact"


@dataclass(frozen=True)
class Mask:
    """
    Overwrite findings with a masking character.

    Attributes:
        char: Single masking character
        count: Characters to mask per finding; None masks the whole finding.
            Findings shorter than ``count`` are masked completely.
        direction: Which end of the finding masking starts from
    """

    name: ClassVar[str] = "mask"

    char: str
    count: int | None = None
    direction: Direction = Direction.FROM_START

    def __post_init__(self):
        if not isinstance(self.char, str) or len(self.char) != 1:
            raise ValueError(f"Masking character must be a single character, got {self.char!r}")
        if self.count is not None and (
            isinstance(self.count, bool) or not isinstance(self.count, int) or self.count <= 0
        ):
            raise ValueError(f"Number of characters to mask must be a positive integer, got {self.count!r}")


TransformMode = Redact | Mask


def _to_likelihood(value: dlp_v2.Likelihood | str) -> dlp_v2.Likelihood:
    if isinstance(value, dlp_v2.Likelihood):
        return value
    try:
        return dlp_v2.Likelihood[str(value).upper()]
    except KeyError:
        raise ValueError(f"Unknown likelihood: {value}") from None


@dataclass(frozen=True)
class TransformConfig:
    """Immutable description of what to detect and how to transform it."""

    info_types: tuple[str, ...]
    mode: TransformMode
    likelihood: dlp_v2.Likelihood = dlp_v2.Likelihood.POSSIBLE

    @classmethod
    def redact(
        cls,
        info_types,
        likelihood: dlp_v2.Likelihood | str = dlp_v2.Likelihood.POSSIBLE,
    ) -> "TransformConfig":
        return cls(tuple(info_types), Redact(), _to_likelihood(likelihood))

    @classmethod
    def mask(
        cls,
        info_types,
        char: str,
        count: int | None = None,
        direction: Direction = Direction.FROM_START,
        likelihood: dlp_v2.Likelihood | str = dlp_v2.Likelihood.POSSIBLE,
    ) -> "TransformConfig":
        return cls(tuple(info_types), Mask(char, count, direction), _to_likelihood(likelihood))


def build_inspect_config(config: TransformConfig) -> dlp_v2.InspectConfig:
    return dlp_v2.InspectConfig(
        info_types=[dlp_v2.InfoType(name=name) for name in config.info_types],
        min_likelihood=config.likelihood,
    )


def build_primitive_transformation(mode: TransformMode) -> dlp_v2.PrimitiveTransformation:
    if isinstance(mode, Redact):
        return dlp_v2.PrimitiveTransformation(redact_config=dlp_v2.RedactConfig())

    if isinstance(mode, Mask):
        mask_config = dlp_v2.CharacterMaskConfig(
            masking_character=mode.char,
            reverse_order=mode.direction is Direction.FROM_END,
        )
        # Left unset (0), DLP masks the whole finding
        if mode.count is not None:
            mask_config.number_to_mask = mode.count
        return dlp_v2.PrimitiveTransformation(character_mask_config=mask_config)

    raise TypeError(f"Unsupported transformation mode: {mode!r}")


def build_deidentify_config(config: TransformConfig) -> dlp_v2.DeidentifyConfig:
    transformation = dlp_v2.InfoTypeTransformations.InfoTypeTransformation(
        primitive_transformation=build_primitive_transformation(config.mode),
    )
    return dlp_v2.DeidentifyConfig(
        info_type_transformations=dlp_v2.InfoTypeTransformations(
            transformations=[transformation],
        ),
    )


class DlpTransformService:
    """
    Applies one fixed ``TransformConfig`` to text values via DLP.

    Each ``apply`` call is one ``deidentify_content`` request. Remote failures
    surface as ``TransformError``; nothing is retried unless ``max_retries``
    is set, in which case only transient errors are retried.
    """

    def __init__(
        self,
        provider: DlpServiceProvider,
        config: TransformConfig,
        max_retries: int = 0,
    ):
        self.provider = provider
        self.config = config
        self._inspect_config = build_inspect_config(config)
        self._deidentify_config = build_deidentify_config(config)

        call = provider.client.deidentify_content
        if max_retries > 0:
            call = retry_with_backoff(
                max_retries=max_retries,
                retryable_exceptions=TRANSIENT_DLP_ERRORS,
                on_retry=self._record_retry,
            )(call)
        self._deidentify = call

        logger.debug(
            f"Configured DLP {config.mode.name} for {len(config.info_types)} info type(s)"
        )

    def _record_retry(self, attempt: int, error: Exception, delay: float) -> None:
        DLP_CALL_RETRIES.labels(
            mode=self.config.mode.name, error_type=type(error).__name__
        ).inc()

    def apply(self, text: str) -> str:
        """
        Transform the findings in ``text``.

        Empty text and configs without info types come back unchanged
        without a remote call.

        Raises:
            TransformError: If the DLP call fails
        """
        if not text or not self.config.info_types:
            return text

        mode = self.config.mode.name
        request = dlp_v2.DeidentifyContentRequest(
            parent=self.provider.parent,
            inspect_config=self._inspect_config,
            deidentify_config=self._deidentify_config,
            item=dlp_v2.ContentItem(value=text),
        )

        with trace_operation(
            "dlp.deidentify_content",
            kind=trace.SpanKind.CLIENT,
            mode=mode,
            info_type_count=len(self.config.info_types),
        ):
            with DLP_CALL_SECONDS.labels(mode=mode).time():
                try:
                    response = self._deidentify(request=request)
                except (core_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
                    DLP_CALL_ERRORS.labels(mode=mode, error_type=type(e).__name__).inc()
                    raise TransformError(
                        f"DLP {mode} call failed: {type(e).__name__}: {e}"
                    ) from e

        return response.item.value
