"""String sampling: patterns, formats and length-bounded placeholders."""

import logging
import re
from functools import lru_cache

from hypothesis import HealthCheck, find, settings
from hypothesis import strategies as st
from hypothesis.errors import InvalidArgument, NoSuchExample, Unsatisfiable

from apidoc2har.errors import SamplingError
from apidoc2har.sampler.numeric import read_count
from apidoc2har.sampler.policy import SamplingPolicy

logger = logging.getLogger(__name__)

# Derandomized search with no example database: the same pattern always
# shrinks to the same minimal string.
_PATTERN_SETTINGS = settings(
    database=None,
    derandomize=True,
    max_examples=500,
    suppress_health_check=list(HealthCheck),
)

# Python's `$` also matches before a trailing newline; ECMA-262 does not,
# and a line break is never valid in a header or query value.
_LINE_BREAKS = ("\n", "\r")


def sample_string(schema: dict, policy: SamplingPolicy) -> str:
    min_length = read_count(schema, "minLength") or 0
    max_length = read_count(schema, "maxLength")

    if max_length is not None and min_length > max_length:
        raise SamplingError(
            f"Cannot sample string by boundaries: {min_length} <= length <= {max_length}"
        )

    pattern = schema.get("pattern")
    if pattern and isinstance(pattern, str):
        value = sample_pattern(pattern, min_length, max_length)
        if value is not None:
            return value
        logger.debug("Falling back to placeholder for pattern %r", pattern)

    fmt = schema.get("format")
    if isinstance(fmt, str) and fmt in policy.formats and _within(policy.formats[fmt], min_length, max_length):
        return policy.formats[fmt]

    return _fit_length(policy.default_string, min_length, max_length)


@lru_cache(maxsize=256)
def sample_pattern(pattern: str, min_length: int = 0, max_length: int | None = None) -> str | None:
    """Find the minimal string that matches `pattern` within the length bounds.

    Returns None when no such string can be found; this is a best effort,
    not a full inversion of the regular expression.
    """

    def fits(value: str) -> bool:
        if any(brk in value for brk in _LINE_BREAKS):
            return False
        return _within(value, min_length, max_length)

    try:
        return find(st.from_regex(pattern), fits, settings=_PATTERN_SETTINGS)
    except (NoSuchExample, Unsatisfiable, InvalidArgument, re.error):
        return None


def _within(value: str, min_length: int, max_length: int | None) -> bool:
    return len(value) >= min_length and (max_length is None or len(value) <= max_length)


def _fit_length(placeholder: str, min_length: int, max_length: int | None) -> str:
    value = placeholder
    if len(value) < min_length:
        filler = value or "x"
        value = (filler * (min_length // len(filler) + 1))[:min_length]
    if max_length is not None:
        value = value[:max_length]
    return value
