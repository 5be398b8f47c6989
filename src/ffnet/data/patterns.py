"""
Patterns and Pattern Sources
============================

A pattern is one labeled example: the inputs fed to a network and,
optionally, the outputs it is expected to produce. A pattern source is an
indexed collection of patterns that can be split into batches for
parallel work (see ``ffnet.network.performance.get_performance``).
"""

import os
import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence


@dataclass(eq=False)
class Pattern:
    """Labeled input/expected-output example"""

    inputs: np.ndarray
    outputs: Optional[np.ndarray] = None
    label: Optional[str] = None

    # Free-form metadata attached by the producer of the pattern
    properties: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.inputs = np.asarray(self.inputs, dtype=float)
        if self.outputs is not None:
            self.outputs = np.asarray(self.outputs, dtype=float)

    def get_inputs(self) -> np.ndarray:
        return self.inputs

    def get_outputs(self) -> Optional[np.ndarray]:
        return self.outputs

    def get_errors(self, network_outputs: np.ndarray) -> Optional[np.ndarray]:
        """
        Expected minus produced outputs.

        Returns None when the pattern carries no expected outputs.
        """
        if self.outputs is None:
            return None
        network_outputs = np.asarray(network_outputs, dtype=float)
        if network_outputs.shape != self.outputs.shape:
            raise ValueError(f"Network outputs shape {network_outputs.shape} "
                             f"does not match expected {self.outputs.shape}")
        return self.outputs - network_outputs

    @property
    def has_outputs(self) -> bool:
        return self.outputs is not None

    def __str__(self) -> str:
        if self.label is not None:
            return self.label
        if self.outputs is not None:
            return str(self.outputs.tolist())
        return super().__str__()


class PatternSource(ABC):
    """
    Abstract indexed source of patterns
    """

    @abstractmethod
    def get(self, index: int) -> Pattern:
        """Pattern at ``index``"""
        pass

    @abstractmethod
    def size(self) -> int:
        """Number of patterns"""
        pass

    @abstractmethod
    def get_batches(self, size: Optional[int] = None) -> List['PatternSource']:
        """
        Partition the source into batches.

        The batch sizes must sum to ``self.size()``.
        """
        pass

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def __iter__(self):
        for i in range(self.size()):
            yield self.get(i)


class ListPatternSource(PatternSource):
    """
    Pattern source backed by an in-memory list

    Usage:
        source = ListPatternSource([Pattern([0, 1], [1]), Pattern([1, 1], [0])])
        for batch in source.get_batches(4):
            ...
    """

    def __init__(self, patterns: Sequence[Pattern]):
        self.patterns: List[Pattern] = list(patterns)

    def get(self, index: int) -> Pattern:
        return self.patterns[index]

    def size(self) -> int:
        return len(self.patterns)

    def get_batches(self, size: Optional[int] = None) -> List[PatternSource]:
        """
        Split into at most ``size`` contiguous batches.

        Args:
            size: Number of batches (defaults to the CPU count)

        Returns:
            Batches whose lengths differ by at most one. When ``size``
            exceeds the number of patterns the source itself is the
            only batch.
        """
        if size is None:
            size = os.cpu_count() or 1
        if size <= 0:
            raise ValueError(f"Number of batches must be positive, got {size}")

        n = len(self.patterns)
        if size > n:
            return [self]

        segment, remainder = divmod(n, size)
        batches: List[PatternSource] = []
        start = 0
        for i in range(size):
            stop = start + segment + (1 if i < remainder else 0)
            batches.append(ListPatternSource(self.patterns[start:stop]))
            start = stop
        return batches

    def __repr__(self) -> str:
        return f"ListPatternSource(size={self.size()})"
