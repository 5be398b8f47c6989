"""
Network Performance
===================

Fraction of patterns whose network output reproduces the expected output
exactly, computed in parallel over the batches of a pattern source.

Each batch is scored by an independent task that only reads the network
and returns its own match count; counts are summed after every task has
finished, so no counter is shared between threads. The network must not
be modified while scoring runs.
"""

import logging
import numpy as np
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING, Optional

from ..data import PatternSource
from ..errors import ShapeMismatchError
from .network import Network
from .propagation import forward

if TYPE_CHECKING:
    from ..config import EngineConfig

logger = logging.getLogger(__name__)

# Decimal places of a performance result when neither argument nor config give them
DEFAULT_PERFORMANCE_DECIMALS = 4


def round_half_up(value: float, decimals: int) -> float:
    """Round to ``decimals`` places, ties away from zero"""
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative, got {decimals}")
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def count_matches(network: Network, source: PatternSource) -> int:
    """Patterns of ``source`` whose outputs the network reproduces exactly"""
    matches = 0
    for i in range(source.size()):
        pattern = source.get(i)
        outputs = forward(network, pattern.get_inputs()).output
        expected = pattern.get_outputs()
        if expected is not None and np.shape(expected) != outputs.shape:
            raise ShapeMismatchError(f"Pattern {i} expects outputs of shape {np.shape(expected)}, "
                                     f"network produces {outputs.shape}")
        if np.array_equal(outputs, expected):
            matches += 1
    return matches


def get_performance(network: Network,
                    source: PatternSource,
                    decimals: Optional[int] = None,
                    max_workers: Optional[int] = None,
                    n_batches: Optional[int] = None,
                    config: Optional["EngineConfig"] = None) -> float:
    """
    Network performance over a pattern source.

    Args:
        network: The network, read-only during scoring
        source: Labeled patterns
        decimals: Decimal places of the result
        max_workers: Thread pool size (None lets the executor decide)
        n_batches: Number of batches requested from the source
            (None uses the source default)
        config: Supplies performance_decimals, n_workers and n_batches
            for any of the above left as None

    Returns:
        matches / total rounded half-up to ``decimals``, or 0.0 for an
        empty source
    """
    if config is not None:
        if decimals is None:
            decimals = config.performance_decimals
        if max_workers is None:
            max_workers = config.n_workers
        if n_batches is None:
            n_batches = config.n_batches
    if decimals is None:
        decimals = DEFAULT_PERFORMANCE_DECIMALS
    if decimals < 0:
        raise ValueError(f"Decimals must be non-negative, got {decimals}")

    batches = source.get_batches() if n_batches is None else source.get_batches(n_batches)

    total = sum(batch.size() for batch in batches)
    if total != source.size():
        raise ValueError(f"Batches hold {total} patterns, source holds {source.size()}")
    if total == 0:
        logger.warning("Performance requested on an empty pattern source, reporting 0.0")
        return 0.0

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(count_matches, network, batch) for batch in batches]
        matches = sum(future.result() for future in futures)

    performance = round_half_up(matches / total, decimals)
    logger.info(f"Performance {performance} ({matches}/{total} matches, "
                f"{len(batches)} batches)")
    return performance
