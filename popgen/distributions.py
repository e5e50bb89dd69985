import numpy as np
import numpy.random as npr

from popgen.constants import HOME_LEAVE_HOURS, HOME_LEAVE_TIME_PROBABILITIES
from popgen.constants import HOME_WORK_DISTANCE_RANKS, HOME_WORK_DISTANCE_SCORE


class EmpiricalDistribution:
    """
    Discrete distribution over integer buckets given by a table of weights.

    Weights need not sum to one, they are normalized on construction.

    Parameters
    ----------
    values : array-like of int
        Bucket indices.
    weights : array-like of float
        Non-negative weight of each bucket, at least one of them positive.
    """

    def __init__(self, values, weights):
        values = np.asarray(values, dtype=int)
        weights = np.asarray(weights, dtype=float)
        if values.shape != weights.shape or values.ndim != 1:
            raise ValueError(f"values and weights must be 1-d and of equal length, got {values.shape} and {weights.shape}")
        if (weights < 0).any() or not np.isfinite(weights).all():
            raise ValueError("weights must be finite and non-negative")
        total = weights.sum()
        if total <= 0:
            raise ValueError("at least one weight must be positive")
        self.values = values
        self.probabilities = weights / total

    def sample(self, rng=None, size=None):
        """
        Draws bucket values.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Source of randomness. A fresh unseeded generator is used if omitted.
        size : int, optional
            Number of draws. A single int is returned if omitted.
        """
        if rng is None:
            rng = npr.default_rng()
        drawn = rng.choice(self.values, size=size, p=self.probabilities)
        return int(drawn) if size is None else drawn

    def truncated(self, n):
        """
        Distribution restricted to the first `n` buckets and renormalized.
        """
        if n < 1:
            raise ValueError(f"Cannot truncate distribution to {n} buckets")
        if n >= len(self.values):
            return self
        return EmpiricalDistribution(self.values[:n], self.probabilities[:n])

    def __len__(self):
        return len(self.values)

    def __repr__(self):
        return f"EmpiricalDistribution({len(self)} buckets)"


HOME_LEAVE_TIME_DISTRIBUTION = EmpiricalDistribution(HOME_LEAVE_HOURS, HOME_LEAVE_TIME_PROBABILITIES)
HOME_WORK_DISTANCE_DISTRIBUTION = EmpiricalDistribution(HOME_WORK_DISTANCE_RANKS, HOME_WORK_DISTANCE_SCORE)
