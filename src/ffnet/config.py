"""
Engine configuration
Caller-owned settings threaded into backward() and performance scoring,
stored as JSON or YAML.
"""
import json
import logging
import yaml
from pathlib import Path
from dataclasses import dataclass, asdict, fields
from typing import Dict, Any, Optional, Union

import numpy as np

from .network.performance import DEFAULT_PERFORMANCE_DECIMALS
from .network.propagation import DEFAULT_FLAT_SPOT

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = 'ffnet'


@dataclass
class EngineConfig:
    """Configuration for a training or evaluation run"""
    name: str = "default"
    description: str = ""

    # Backpropagation
    flat_spot: float = DEFAULT_FLAT_SPOT  # added to every activation derivative

    # Performance scoring
    performance_decimals: int = DEFAULT_PERFORMANCE_DECIMALS
    n_workers: Optional[int] = None  # thread pool size, None = executor default
    n_batches: Optional[int] = None  # pattern batches, None = CPU count

    # Initialization
    seed: Optional[int] = None

    # Logging
    log_level: str = "WARNING"

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Reject values the engine cannot use"""
        if self.flat_spot < 0:
            raise ValueError(f"flat_spot must be non-negative, got {self.flat_spot}")
        if self.performance_decimals < 0:
            raise ValueError(f"performance_decimals must be non-negative, "
                             f"got {self.performance_decimals}")
        for name in ('n_workers', 'n_batches'):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if (not isinstance(self.log_level, str)
                or not isinstance(logging.getLevelName(self.log_level.upper()), int)):
            raise ValueError(f"Unknown log level: {self.log_level}")

    def rng(self) -> np.random.Generator:
        """Random generator seeded from the configuration"""
        return np.random.default_rng(self.seed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EngineConfig':
        """Build from a dictionary, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    def save(self, filename: Union[str, Path]):
        """Save configuration to a .json, .yaml or .yml file"""
        filename = Path(filename)
        with open(filename, 'w') as f:
            if filename.suffix in ('.yaml', '.yml'):
                yaml.safe_dump(self.to_dict(), f, sort_keys=False)
            else:
                json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Configuration saved to {filename}")

    @classmethod
    def load(cls, filename: Union[str, Path]) -> 'EngineConfig':
        """Load configuration from a .json, .yaml or .yml file"""
        filename = Path(filename)
        with open(filename, 'r') as f:
            if filename.suffix in ('.yaml', '.yml'):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
        return cls.from_dict(data)

    def copy(self, **kwargs) -> 'EngineConfig':
        """Create a copy with modified parameters"""
        config_dict = self.to_dict()
        config_dict.update(kwargs)
        return EngineConfig.from_dict(config_dict)


def configure_logging(config: EngineConfig) -> logging.Logger:
    """Apply the configured level to the ffnet logger hierarchy"""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(config.log_level.upper())
    return package_logger
