"""
ffnet
=====

Feed-forward network numeric engine.

Forward inference and error backpropagation for fully-connected,
multi-layer networks. Training code (gradient descent, resilient
propagation, evolutionary search) lives outside this package and drives
it through the forward/backward records and the flat parameter views.

Key components:
- activation: Pluggable activation functions and their derivatives
- data: Labeled patterns and pattern sources used for scoring
- network: Network structure, forward/backward passes, utilities
- config: Engine configuration (flat spot, scoring, logging)
"""

from .errors import (
    NetworkError,
    LayerIndexError,
    ShapeMismatchError,
    NetworkStructureError,
)

from .config import (
    EngineConfig,
    configure_logging,
)

from .network import (
    Network,
    LayerType,
    Forward,
    Backward,
    forward,
    backward,
    DEFAULT_FLAT_SPOT,
)

__all__ = [
    'EngineConfig',
    'configure_logging',
    'NetworkError',
    'LayerIndexError',
    'ShapeMismatchError',
    'NetworkStructureError',
    'Network',
    'LayerType',
    'Forward',
    'Backward',
    'forward',
    'backward',
    'DEFAULT_FLAT_SPOT',
]

__version__ = '0.1.0'
