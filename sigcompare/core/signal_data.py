from dataclasses import dataclass, field
import numpy as np
from typing import List, Optional, Sequence, Tuple
from abc import ABC, abstractmethod


@dataclass
class SignalMatrix:
    """A set of signals stored as (channels, samples), with its source orientation."""
    data: np.ndarray
    signals_in_rows: bool = True

    @classmethod
    def from_array(cls, arr) -> 'SignalMatrix':
        """
        Wrap a 1-D or 2-D numeric array.

        The longer dimension is interpreted as the sample axis and the shorter one
        as the channel axis. If both are equal, rows are channels.
        """
        data = np.asarray(arr)
        if data.dtype == object or not (np.issubdtype(data.dtype, np.number) or data.dtype == bool):
            raise TypeError(f"Signals must be numeric. Got dtype: {data.dtype}")
        if data.ndim == 1:
            data = data[np.newaxis, :]
        if data.ndim != 2:
            raise ValueError(f"Signals must be a 1D or 2D array. Got shape: {data.shape}")
        if data.size == 0:
            raise ValueError(f"Signals must not be empty. Got shape: {data.shape}")

        n_rows, n_cols = data.shape
        if n_rows > n_cols:
            return cls(data=data.T, signals_in_rows=False)
        return cls(data=data, signals_in_rows=True)

    @property
    def n_channels(self) -> int:
        return self.data.shape[0]

    @property
    def n_samples(self) -> int:
        return self.data.shape[1]

    def channel(self, idx: int) -> np.ndarray:
        return self.data[idx, :]


@dataclass
class EventSpec(ABC):
    """Abstract base class for per-channel event data (markers or vertical lines)."""

    @abstractmethod
    def for_channel(self, channel_idx: int) -> Optional[np.ndarray]:
        pass

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        pass

@dataclass
class NoEvents(EventSpec):
    """No events in any channel."""

    def for_channel(self, channel_idx: int) -> Optional[np.ndarray]:
        return None

    @property
    def is_empty(self) -> bool:
        return True

@dataclass
class SharedEvents(EventSpec):
    """A single event vector applied to every channel."""
    values: np.ndarray

    def for_channel(self, channel_idx: int) -> Optional[np.ndarray]:
        return self.values

    @property
    def is_empty(self) -> bool:
        return False

@dataclass
class PerChannelEvents(EventSpec):
    """One event vector (or None) per channel."""
    values: List[Optional[np.ndarray]]

    def for_channel(self, channel_idx: int) -> Optional[np.ndarray]:
        return self.values[channel_idx]

    @property
    def is_empty(self) -> bool:
        return all(v is None for v in self.values)


@dataclass
class XAxisSpec(ABC):
    """Abstract base class for the x-axis source of each subplot."""

    @abstractmethod
    def for_channel(self, channel_idx: int, n_samples: int) -> np.ndarray:
        pass

@dataclass
class IndexAxis(XAxisSpec):
    """Plot against the 1-based sample index."""

    def for_channel(self, channel_idx: int, n_samples: int) -> np.ndarray:
        return np.arange(1, n_samples + 1)

@dataclass
class SharedAxis(XAxisSpec):
    """One x vector shared by all channels."""
    values: np.ndarray

    def for_channel(self, channel_idx: int, n_samples: int) -> np.ndarray:
        return self.values

@dataclass
class PerChannelAxis(XAxisSpec):
    """One x vector per channel."""
    values: List[np.ndarray]

    def for_channel(self, channel_idx: int, n_samples: int) -> np.ndarray:
        return self.values[channel_idx]


@dataclass
class ReferenceOverlay:
    """Reference signals drawn together with one primary channel."""
    signals: np.ndarray # Shape: (n_refs, n_samples)
    labels: Tuple[str, ...]
    primary_label: str = field(default="1", kw_only=True)

    @property
    def n_refs(self) -> int:
        return self.signals.shape[0]

    @classmethod
    def from_block(cls, block, n_samples: int, labels: Optional[Sequence[str]] = None) -> 'ReferenceOverlay':
        """
        Build an overlay from a 1D vector or a 2D (n_refs, n_samples) block.

        Args:
            block: Reference signal(s) for one channel
            n_samples: Sample count of the primary channel
            labels: Legend labels for the primary line followed by one per reference.
                Defaults to "1", "2", ...

        Returns:
            The overlay
        """
        signals = np.asarray(block)
        if signals.dtype == object or not np.issubdtype(signals.dtype, np.number):
            raise TypeError(f"Reference signals must be numeric. Got dtype: {signals.dtype}")
        if signals.ndim == 1:
            signals = signals[np.newaxis, :]
        if signals.ndim != 2:
            raise ValueError(f"Reference signals must be 1D or 2D. Got shape: {signals.shape}")
        if signals.shape[1] != n_samples and signals.shape[0] == n_samples:
            signals = signals.T
        if signals.shape[1] != n_samples:
            raise ValueError(
                f"Reference signals must have {n_samples} samples. Got shape: {signals.shape}"
            )

        n_lines = signals.shape[0] + 1
        if labels is None or len(labels) == 0:
            labels = [str(i + 1) for i in range(n_lines)]
        if len(labels) != n_lines:
            raise ValueError(
                f"Expected {n_lines} line labels (primary plus {n_lines - 1} references), got {len(labels)}."
            )
        labels = [str(label) for label in labels]
        return cls(signals=signals, labels=tuple(labels[1:]), primary_label=labels[0])
