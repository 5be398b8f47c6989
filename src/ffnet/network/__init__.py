"""
Network
=======

Feed-forward network structure and numeric engine.

- network: Layered structure and configuration
- propagation: Forward/Backward records and the forward()/backward() passes
- utils: Storage builders, flat parameter views, randomization
- performance: Parallel exact-match scoring over a pattern source
"""

from .network import (
    Network,
    Layer,
    LayerType,
)

from .propagation import (
    Forward,
    Backward,
    forward,
    backward,
    DEFAULT_FLAT_SPOT,
)

from .utils import (
    create_layer_vectors,
    create_layer_matrices,
    count_weights,
    get_weights,
    set_weights,
    get_biases,
    set_biases,
    get_activations,
    set_activations,
    randomize_weights,
    randomize_biases,
)

from .performance import (
    get_performance,
    count_matches,
    round_half_up,
)

__all__ = [
    # Structure
    'Network',
    'Layer',
    'LayerType',

    # Propagation
    'Forward',
    'Backward',
    'forward',
    'backward',
    'DEFAULT_FLAT_SPOT',

    # Utilities
    'create_layer_vectors',
    'create_layer_matrices',
    'count_weights',
    'get_weights',
    'set_weights',
    'get_biases',
    'set_biases',
    'get_activations',
    'set_activations',
    'randomize_weights',
    'randomize_biases',

    # Performance
    'get_performance',
    'count_matches',
    'round_half_up',
]
