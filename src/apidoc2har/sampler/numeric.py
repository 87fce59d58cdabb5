"""Numeric sampling for `number` and `integer` schemas.

Bounds and `multipleOf` are handled as exact fractions built from the
decimal text of each keyword, so `135` with `multipleOf: 13.3` samples
146.3 rather than a float neighbour of it.
"""

import math
from decimal import Decimal
from fractions import Fraction

from apidoc2har.errors import SamplingError
from apidoc2har.sampler.policy import SamplingPolicy


def sample_number(schema: dict, schema_type: str, policy: SamplingPolicy) -> int | float:
    """Return the smallest value the bounds allow, or the policy default when unbounded."""
    is_integer = schema_type == "integer"
    minimum, exclusive_min = _read_bound(schema, "minimum", "exclusiveMinimum", lower=True)
    maximum, exclusive_max = _read_bound(schema, "maximum", "exclusiveMaximum", lower=False)

    multiple_of = schema.get("multipleOf")
    step = _to_fraction(multiple_of) if _is_number(multiple_of) and multiple_of > 0 else None

    if minimum is None and maximum is None and step is None:
        return _to_python(_to_fraction(policy.default_number), is_integer)

    epsilon = Fraction(str(policy.number_epsilon))
    lo = _effective_lower(minimum, exclusive_min, is_integer, epsilon)
    hi = _effective_upper(maximum, exclusive_max, is_integer, epsilon)

    if lo is not None and hi is not None and lo > hi:
        raise SamplingError(_describe(minimum, exclusive_min, maximum, exclusive_max))

    if step is None:
        value = lo if lo is not None else hi
    else:
        if is_integer:
            # smallest multiple of p/q that is a whole number
            step = Fraction(step.numerator)
        if lo is not None:
            value = math.ceil(lo / step) * step
        elif hi is not None:
            value = math.floor(hi / step) * step
        else:
            value = step
        if hi is not None and value > hi:
            raise SamplingError(
                _describe(minimum, exclusive_min, maximum, exclusive_max, multiple_of)
            )

    return _to_python(value, is_integer)


def _read_bound(schema: dict, key: str, exclusive_key: str, lower: bool) -> tuple:
    value = schema.get(key) if _is_number(schema.get(key)) else None
    exclusive = schema.get(exclusive_key, False)

    # JSON Schema 2019+ and OAS 3.1 put the bound itself in exclusiveMinimum/Maximum
    if _is_number(exclusive):
        if value is None:
            return exclusive, True
        tighter = exclusive >= value if lower else exclusive <= value
        return (exclusive, True) if tighter else (value, False)

    return value, bool(exclusive) and value is not None


def _effective_lower(minimum, exclusive: bool, is_integer: bool, epsilon: Fraction) -> Fraction | None:
    if minimum is None:
        return None
    bound = _to_fraction(minimum)
    if is_integer:
        return Fraction(math.floor(bound) + 1 if exclusive else math.ceil(bound))
    return bound + epsilon if exclusive else bound


def _effective_upper(maximum, exclusive: bool, is_integer: bool, epsilon: Fraction) -> Fraction | None:
    if maximum is None:
        return None
    bound = _to_fraction(maximum)
    if is_integer:
        return Fraction(math.ceil(bound) - 1 if exclusive else math.floor(bound))
    return bound - epsilon if exclusive else bound


def _describe(minimum, exclusive_min, maximum, exclusive_max, multiple_of=None) -> str:
    parts = []
    if minimum is not None:
        parts.append(f"{_format(minimum)} {'<' if exclusive_min else '<='}")
    parts.append("x")
    if maximum is not None:
        parts.append(f"{'<' if exclusive_max else '<='} {_format(maximum)}")

    message = "Cannot sample numeric by boundaries: " + " ".join(parts)
    if multiple_of is not None:
        message += f", multipleOf: {_format(multiple_of)}"
    return message


def _format(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    # 1e-05 reads as 0.00001
    return format(Decimal(str(value)), "f")


def _to_fraction(value) -> Fraction:
    return Fraction(str(value))


def _to_python(value: Fraction, is_integer: bool) -> int | float:
    if is_integer or value.denominator == 1:
        return int(value)
    return float(value)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def read_count(schema: dict, key: str) -> int | None:
    """Read a length or item-count keyword; anything but a non-negative number is ignored."""
    value = schema.get(key)
    if not _is_number(value) or value < 0:
        return None
    return math.ceil(value) if key.startswith("min") else math.floor(value)
