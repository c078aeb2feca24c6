"""
Common types for the population samplers.

GroupParams describes one population; Dataset holds one draw of every
group for a single trial.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

import numpy as np
from numpy.typing import NDArray

from varsim.core.exceptions import InvalidParameterError
from varsim.core.validation import check_positive, check_real


VALID_DISTRIBUTIONS = ("normal", "exponential")


def validate_distribution(distribution: str) -> str:
    """Validate and return a distribution family name."""
    if distribution not in VALID_DISTRIBUTIONS:
        raise InvalidParameterError(
            f"distribution must be one of {VALID_DISTRIBUTIONS}, "
            f"got {distribution!r}",
            parameter="distribution",
            value=distribution,
        )
    return distribution


@dataclass(frozen=True)
class GroupParams:
    """
    Parameters of one group's population.

    Attributes:
        mean: Population mean. Must be > 0 for the exponential family.
        sd: Population standard deviation (normal family only). The
            exponential family's sd equals its mean and must be left None.
    """
    mean: float
    sd: float | None = None

    def validate(self, distribution: str) -> GroupParams:
        """
        Check these parameters against a family; return a normalised copy.

        Raises:
            InvalidParameterError: For a non-positive sd or exponential
                mean, a non-finite value, or an sd given to the
                exponential family.
        """
        validate_distribution(distribution)
        if distribution == "normal":
            if self.sd is None:
                raise InvalidParameterError(
                    "sd is required for the normal family",
                    parameter="sd",
                )
            return GroupParams(
                mean=check_real(self.mean, "mean"),
                sd=check_positive(self.sd, "sd"),
            )
        if self.sd is not None:
            raise InvalidParameterError(
                f"the exponential family is parameterised by its mean only, "
                f"got sd={self.sd!r}",
                parameter="sd",
                value=self.sd,
            )
        return GroupParams(mean=check_positive(self.mean, "mean"))

    def scale(self, distribution: str) -> float:
        """Scale parameter: sd for normal, mean for exponential."""
        return self.sd if distribution == "normal" else self.mean

    def with_scale(self, distribution: str, scale: float) -> GroupParams:
        """Copy with the family's scale parameter replaced."""
        if distribution == "normal":
            return replace(self, sd=scale)
        return replace(self, mean=scale)

    def variance(self, distribution: str) -> float:
        """Population variance implied by these parameters."""
        return self.scale(distribution) ** 2



def as_group_params(group: Any, name: str = "params") -> GroupParams:
    """
    Read one group's parameters.

    Accepts GroupParams, a (mean, sd) or (mean,) tuple, a mapping with
    'mean' and 'sd' keys, or a bare number taken as the mean. Values are
    not range-checked here; call GroupParams.validate() for that.

    Raises:
        InvalidParameterError: If `group` has none of these shapes
    """
    if isinstance(group, GroupParams):
        return group
    if isinstance(group, (int, float, np.number)) and not isinstance(group, bool):
        return GroupParams(mean=group)
    try:
        if isinstance(group, Mapping):
            return GroupParams(**group)
        return GroupParams(*group)
    except TypeError as e:
        raise InvalidParameterError(
            f"{name}: cannot interpret {group!r} as group parameters",
            parameter=name,
            value=group,
        ) from e


@dataclass(frozen=True)
class Dataset:
    """
    One trial's draw: an ordered tuple of samples, one per group.

    Attributes:
        samples: 1D float64 arrays, group order preserved
        distribution: Family the samples were drawn from
    """
    samples: tuple[NDArray[np.floating[Any]], ...]
    distribution: str

    @property
    def k(self) -> int:
        """Number of groups."""
        return len(self.samples)

    @property
    def sizes(self) -> tuple[int, ...]:
        """Observations per group."""
        return tuple(len(s) for s in self.samples)
