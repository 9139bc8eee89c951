"""Configuration classes for gasnet components."""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class NetworkConfig:
    """Configuration for pipe validation and capacity scaling."""

    # Pipe diameters (mm) accepted when creating pipes
    allowed_diameters: Tuple[int, ...] = (500, 700, 1000, 1400)

    # Divisor applied to sqrt(d^5 / l) before rounding
    capacity_divisor: float = 100.0

    # File used by the CLI when no path is given
    default_data_file: str = "network.yaml"

    def is_allowed_diameter(self, diameter: int) -> bool:
        """Return True if ``diameter`` is one of the allowed pipe diameters."""
        return diameter in self.allowed_diameters


# Global configuration instance
NETWORK_CONFIG = NetworkConfig()
