"""Configuration module for the package."""


class Config:
    """Configuration class for skcpd.

    Holds the numerical floors applied to degenerate segments and the defaults of
    the Monte Carlo threshold calibration.
    """

    def __init__(self):
        """Initialize the default configuration."""
        self._variance_floor = 1e-16
        self._probability_floor = 1e-10
        self._monte_carlo_chunk_size = 256
        self._min_tail_replicates = 10

    @property
    def variance_floor(self) -> float:
        """Smallest variance estimate used by likelihood-based costs."""
        return self._variance_floor

    @variance_floor.setter
    def variance_floor(self, value):
        if not isinstance(value, float) or value <= 0.0:
            raise ValueError("variance_floor must be a positive float")
        self._variance_floor = value

    @property
    def probability_floor(self) -> float:
        """Distance from 0 and 1 that empirical probabilities are clipped to."""
        return self._probability_floor

    @probability_floor.setter
    def probability_floor(self, value):
        if not isinstance(value, float) or not 0.0 < value < 0.5:
            raise ValueError("probability_floor must be a float in (0, 0.5)")
        self._probability_floor = value

    @property
    def monte_carlo_chunk_size(self) -> int:
        """Number of null replicates simulated from each child seed."""
        return self._monte_carlo_chunk_size

    @monte_carlo_chunk_size.setter
    def monte_carlo_chunk_size(self, value):
        if not isinstance(value, int) or value < 1:
            raise ValueError("monte_carlo_chunk_size must be a positive integer")
        self._monte_carlo_chunk_size = value

    @property
    def min_tail_replicates(self) -> int:
        """Expected number of tail exceedances below which calibration warns."""
        return self._min_tail_replicates

    @min_tail_replicates.setter
    def min_tail_replicates(self, value):
        if not isinstance(value, int) or value < 0:
            raise ValueError("min_tail_replicates must be a non-negative integer")
        self._min_tail_replicates = value

    def get(self, key=None):
        """Get the entire config or a specific key."""
        if key:
            return getattr(self, key, None)
        return {
            attr: getattr(self, attr)
            for attr in dir(self)
            if not callable(getattr(self, attr)) and not attr.startswith("_")
        }


config = Config()
