"""
Input validation utilities for varsim.

These validators follow the "fail fast, fail loud" principle: a broken
configuration is rejected before a single trial is drawn, with a message
naming the parameter and the value that was supplied.

Design principles:
    - No silent clamping or coercion (except np.asarray on array-likes)
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import numbers
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from varsim.core.exceptions import ValidationError, InvalidParameterError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert a sample to a 1D float64 array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        1D float64 numpy array (a copy-free view where possible)

    Raises:
        ValidationError: If input is non-numeric or not one-dimensional
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object or not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if result.ndim != 1:
        raise ValidationError(
            f"{name}: expected 1D array, got {result.ndim}D with shape {result.shape}"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        InvalidParameterError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise InvalidParameterError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)",
            parameter=name,
        )


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of observations.

    Raises:
        InvalidParameterError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise InvalidParameterError(
            f"{name}: requires at least {min_samples} observations, got {n}",
            parameter=name,
            value=n,
        )


def check_real(value: Any, name: str) -> float:
    """
    Verify a scalar is a finite real number and return it as float.

    Raises:
        InvalidParameterError: If value is not a finite real number
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(
            f"{name}: expected a real number, got {type(value).__name__}",
            parameter=name,
            value=value,
        )
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(
            f"{name}: must be finite, got {value}",
            parameter=name,
            value=value,
        )
    return value


def check_positive(value: Any, name: str) -> float:
    """
    Verify a scalar is finite and strictly positive.

    Raises:
        InvalidParameterError: If value <= 0 or not finite
    """
    value = check_real(value, name)
    if value <= 0:
        raise InvalidParameterError(
            f"{name}: must be > 0, got {value}",
            parameter=name,
            value=value,
        )
    return value


def check_int_at_least(value: Any, minimum: int, name: str) -> int:
    """
    Verify a scalar is an integer >= minimum.

    Integral floats (e.g. 100.0 coming from a numeric grid) are accepted.

    Raises:
        InvalidParameterError: If value is not integral or below minimum
    """
    if isinstance(value, bool):
        raise InvalidParameterError(
            f"{name}: expected an integer, got bool",
            parameter=name,
            value=value,
        )
    if isinstance(value, numbers.Integral):
        value = int(value)
    elif isinstance(value, numbers.Real) and float(value).is_integer():
        value = int(value)
    else:
        raise InvalidParameterError(
            f"{name}: expected an integer, got {value!r}",
            parameter=name,
            value=value,
        )
    if value < minimum:
        raise InvalidParameterError(
            f"{name}: must be >= {minimum}, got {value}",
            parameter=name,
            value=value,
        )
    return value


def check_sample_size(n: Any, name: str = "n") -> int:
    """Verify a per-group sample size is an integer >= 2."""
    return check_int_at_least(n, 2, name)


def check_alpha(alpha: Any, name: str = "alpha") -> float:
    """
    Verify a significance level lies strictly inside (0, 1).

    Raises:
        InvalidParameterError: If alpha is outside (0, 1)
    """
    alpha = check_real(alpha, name)
    if not (0.0 < alpha < 1.0):
        raise InvalidParameterError(
            f"{name}: must be in (0, 1), got {alpha}",
            parameter=name,
            value=alpha,
        )
    return alpha
