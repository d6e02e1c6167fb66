"""Statistical distribution sampler for simulated processing delays."""

import logging
from typing import Any, Dict, Optional

import numpy as np

logger = logging.getLogger(__name__)


class DistributionSampler:
    """Samples non-negative values (seconds, probabilities) from configured distributions."""

    def __init__(self, seed: Optional[int] = None):
        """Initialize the sampler with optional random seed.

        Args:
            seed: Random seed for reproducibility
        """
        self.rng = np.random.RandomState(seed)

    def sample(self, distribution_config: Dict[str, Any]) -> float:
        """Sample a value from the specified distribution.

        Args:
            distribution_config: Configuration dict with 'type' and distribution parameters.
                Examples:
                - {'type': 'Constant', 'value': 0.05}
                - {'type': 'Exponential', 'rate': 5.0}
                - {'type': 'Uniform', 'low': 0.01, 'high': 0.1}
                - {'type': 'LogNormal', 'mean': -3.0, 'sigma': 0.5}

        Returns:
            Sampled value, never negative
        """
        dist_type = distribution_config.get("type", "Constant")

        if dist_type in ("Constant", "Fixed"):
            value = distribution_config.get("value", 0.0)

        elif dist_type == "Exponential":
            rate = distribution_config.get("rate", 1.0)
            value = self.rng.exponential(1.0 / rate)

        elif dist_type == "Uniform":
            low = distribution_config.get("low", 0.0)
            high = distribution_config.get("high", 1.0)
            value = self.rng.uniform(low, high)

        elif dist_type == "Normal":
            mean = distribution_config.get("mean", 0.0)
            std = distribution_config.get("std", distribution_config.get("sigma", 1.0))
            value = self.rng.normal(mean, std)

        elif dist_type == "LogNormal":
            # Parameters of the underlying normal distribution
            mean = distribution_config.get("mean", 0.0)
            sigma = distribution_config.get("sigma", 1.0)
            value = self.rng.lognormal(mean, sigma)

        elif dist_type == "Gamma":
            shape = distribution_config.get("shape", 2.0)
            scale = distribution_config.get("scale", 1.0)
            value = self.rng.gamma(shape, scale)

        else:
            logger.warning(f"Unknown distribution type: {dist_type}, using constant value 0.0")
            value = 0.0

        return max(0.0, float(value))

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        if probability <= 0:
            return False
        return self.rng.random_sample() < probability
