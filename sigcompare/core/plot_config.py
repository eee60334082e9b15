import math
import numbers
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .signal_data import (
    SignalMatrix, EventSpec, NoEvents, SharedEvents, PerChannelEvents,
    XAxisSpec, IndexAxis, SharedAxis, PerChannelAxis, ReferenceOverlay,
)

DEFAULT_LINESPEC = '-'
DEFAULT_LINK_AXES = 'x'
SUBPLOT_SIZE = (8.0, 2.5)  # inches per subplot (width, height)
VLINE_WARN_THRESHOLD = 500


class LinkAxes(Enum):
    NONE = ''
    X = 'x'
    Y = 'y'
    XY = 'xy'

    @property
    def links_x(self) -> bool:
        return self in (LinkAxes.X, LinkAxes.XY)

    @property
    def links_y(self) -> bool:
        return self in (LinkAxes.Y, LinkAxes.XY)

    @classmethod
    def parse(cls, value) -> 'LinkAxes':
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise TypeError(f"link_axes must be a string such as 'x', 'y', 'xy' or ''. Got: {value!r}")
        key = value.strip().lower()
        if key in ('', 'none'):
            return cls.NONE
        if set(key) == {'x', 'y'} and len(key) == 2:
            return cls.XY
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown link_axes mode: {value!r}. Use 'x', 'y', 'xy' or ''.")


@dataclass(frozen=True)
class PlotConfiguration:
    """Validated plotting options for one call. Built by build_plot_config()."""
    x_axis: XAxisSpec = field(default_factory=IndexAxis)
    channel_labels: Tuple[str, ...] = ()
    xlab: Optional[str] = None
    plot_title: Optional[str] = None
    fig_title: Optional[str] = None
    num_plot_cols: int = 1
    plot_by_rows: bool = True
    markers: EventSpec = field(default_factory=NoEvents)
    vlines: EventSpec = field(default_factory=NoEvents)
    vline_labels: Tuple[Tuple[str, ...], ...] = ()
    logy: Tuple[int, ...] = ()
    link_axes: LinkAxes = LinkAxes.X
    linespec: str = DEFAULT_LINESPEC
    references: Tuple[ReferenceOverlay, ...] = ()
    figsize: Optional[Tuple[float, float]] = None

    @property
    def window_title(self) -> Optional[str]:
        return self.fig_title or self.plot_title

    def grid_shape(self, n_channels: int) -> Tuple[int, int]:
        n_cols = min(self.num_plot_cols, n_channels)
        return math.ceil(n_channels / n_cols), n_cols

    def grid_position(self, channel_idx: int, n_channels: int) -> Tuple[int, int]:
        n_rows, n_cols = self.grid_shape(n_channels)
        if self.plot_by_rows:
            return channel_idx // n_cols, channel_idx % n_cols
        return channel_idx % n_rows, channel_idx // n_rows

    def resolved_figsize(self, n_channels: int) -> Tuple[float, float]:
        if self.figsize is not None:
            return self.figsize
        n_rows, n_cols = self.grid_shape(n_channels)
        return SUBPLOT_SIZE[0] * n_cols, SUBPLOT_SIZE[1] * n_rows


def _is_empty(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ''
    try:
        return len(value) == 0
    except TypeError:
        return False


def _as_vector(value, name: str) -> np.ndarray:
    vec = np.asarray(value)
    if vec.dtype == object or not (np.issubdtype(vec.dtype, np.number) or vec.dtype == bool):
        raise TypeError(f"{name} must be numeric. Got dtype: {vec.dtype}")
    vec = vec.squeeze() if vec.ndim > 1 else vec
    if vec.ndim == 0:
        vec = vec.reshape(1)
    if vec.ndim != 1:
        raise ValueError(f"{name} must be a vector. Got shape: {vec.shape}")
    return vec


def _is_per_channel(value) -> bool:
    """A list/tuple of vectors (or None placeholders), or a 2D array, is per channel."""
    if isinstance(value, np.ndarray):
        return value.ndim == 2 and 1 not in value.shape
    if isinstance(value, (list, tuple)):
        return any(v is None or np.ndim(v) > 0 for v in value)
    return False


def _resolve_x_axis(time, signals: SignalMatrix) -> XAxisSpec:
    n_samples = signals.n_samples
    if _is_empty(time):
        return IndexAxis()

    if _is_per_channel(time):
        entries = list(time)
        if len(entries) != signals.n_channels:
            raise ValueError(
                f"Per-channel time must have one entry per channel ({signals.n_channels}), got {len(entries)}."
            )
        vectors = []
        for i, entry in enumerate(entries):
            if _is_empty(entry):
                vectors.append(np.arange(1, n_samples + 1))
                continue
            vec = _as_vector(entry, f"time[{i}]")
            if vec.shape[0] != n_samples:
                raise ValueError(f"time[{i}] has length {vec.shape[0]}, expected {n_samples} samples.")
            vectors.append(vec)
        return PerChannelAxis(values=vectors)

    vec = _as_vector(time, "time")
    if vec.shape[0] != n_samples:
        raise ValueError(f"time has length {vec.shape[0]}, expected {n_samples} samples.")
    return SharedAxis(values=vec)


def _resolve_channel_labels(signal_labels, n_channels: int) -> Tuple[str, ...]:
    if _is_empty(signal_labels):
        return tuple(str(i + 1) for i in range(n_channels))
    if isinstance(signal_labels, str):
        return tuple(f"{signal_labels}_{i + 1}" for i in range(n_channels))
    if not isinstance(signal_labels, (list, tuple)):
        raise TypeError(f"signal_labels must be a string or a list of strings. Got: {type(signal_labels).__name__}")
    if len(signal_labels) != n_channels:
        raise ValueError(f"signal_labels must have {n_channels} entries, got {len(signal_labels)}.")
    return tuple(str(label) for label in signal_labels)


def _resolve_events(value, signals: SignalMatrix, name: str, per_sample: bool) -> EventSpec:
    """
    Turn a vector, a per-channel list of vectors or an empty value into an EventSpec.

    Marker vectors (per_sample=True) must have one entry per sample. Vline vectors
    hold x positions and can have any length.
    """
    if _is_empty(value):
        return NoEvents()

    def check(vec: np.ndarray, label: str) -> np.ndarray:
        if per_sample and vec.shape[0] != signals.n_samples:
            raise ValueError(f"{label} has length {vec.shape[0]}, expected {signals.n_samples} samples.")
        return vec

    if _is_per_channel(value):
        entries = list(value)
        if len(entries) != signals.n_channels:
            raise ValueError(
                f"Per-channel {name} must have one entry per channel ({signals.n_channels}), got {len(entries)}."
            )
        vectors = [
            None if _is_empty(entry) else check(_as_vector(entry, f"{name}[{i}]"), f"{name}[{i}]")
            for i, entry in enumerate(entries)
        ]
        return PerChannelEvents(values=vectors)

    return SharedEvents(values=check(_as_vector(value, name), name))


def _count_events(spec: EventSpec, n_channels: int) -> int:
    if isinstance(spec, SharedEvents):
        return len(spec.values) * n_channels
    if isinstance(spec, PerChannelEvents):
        return sum(0 if v is None else len(v) for v in spec.values)
    return 0


def _resolve_vline_labels(vline_labels, vlines: EventSpec) -> Tuple[Tuple[str, ...], ...]:
    if _is_empty(vline_labels):
        return ()
    if vlines.is_empty:
        raise ValueError("vline_labels were given without vlines.")
    if not isinstance(vline_labels, (list, tuple)):
        raise TypeError("vline_labels must be a list of strings, or a list with one list of strings per channel.")

    if isinstance(vlines, SharedEvents):
        if len(vline_labels) != len(vlines.values):
            raise ValueError(
                f"vline_labels must have one label per vline ({len(vlines.values)}), got {len(vline_labels)}."
            )
        return (tuple(str(label) for label in vline_labels),)

    if len(vline_labels) != len(vlines.values):
        raise ValueError(
            f"Per-channel vline_labels must have one entry per channel ({len(vlines.values)}), got {len(vline_labels)}."
        )
    resolved = []
    for i, (labels, lines) in enumerate(zip(vline_labels, vlines.values)):
        if _is_empty(labels):
            resolved.append(())
            continue
        if isinstance(labels, str):
            labels = [labels]
        n_lines = 0 if lines is None else len(lines)
        if len(labels) != n_lines:
            raise ValueError(f"vline_labels[{i}] must have {n_lines} labels, got {len(labels)}.")
        resolved.append(tuple(str(label) for label in labels))
    return tuple(resolved)


def _resolve_logy(logy, n_channels: int) -> Tuple[int, ...]:
    if _is_empty(logy):
        return ()
    indices = np.atleast_1d(np.asarray(logy))
    if indices.ndim != 1 or not np.issubdtype(indices.dtype, np.integer):
        raise TypeError(f"logy must be a list of integer channel indices. Got: {logy!r}")
    for idx in indices:
        if not 0 <= idx < n_channels:
            raise ValueError(f"logy channel index {idx} is out of range for {n_channels} channels.")
    return tuple(sorted(set(int(idx) for idx in indices)))


def _resolve_references(ref_sigs, mat_labels, signals: SignalMatrix) -> Tuple[ReferenceOverlay, ...]:
    if _is_empty(ref_sigs):
        return ()
    if len(ref_sigs) != signals.n_channels:
        raise ValueError(
            f"ref_sigs must have one entry per channel ({signals.n_channels}), got {len(ref_sigs)}."
        )
    labels = None if _is_empty(mat_labels) else list(mat_labels)
    return tuple(
        ReferenceOverlay.from_block(block, signals.n_samples, labels) for block in ref_sigs
    )


def build_plot_config(signals: SignalMatrix,
                      time: Any = None,
                      signal_labels: Any = None,
                      xlab: Optional[str] = None,
                      plot_title: Optional[str] = None,
                      *,
                      mat_labels: Optional[Sequence[str]] = None,
                      num_plot_cols: int = 1,
                      plot_by_rows: bool = True,
                      markers: Any = None,
                      vlines: Any = None,
                      vline_labels: Any = None,
                      fig_title: Optional[str] = None,
                      logy: Any = None,
                      link_axes: Any = DEFAULT_LINK_AXES,
                      linespec: str = DEFAULT_LINESPEC,
                      ref_sigs: Any = None,
                      references: Sequence[ReferenceOverlay] = (),
                      figsize: Optional[Tuple[float, float]] = None) -> PlotConfiguration:
    """
    Validate caller options against a signal matrix and build a PlotConfiguration.

    Raises TypeError for arguments of the wrong kind and ValueError for length
    mismatches or conflicting options. Nothing is drawn.
    """
    for name, value in (('xlab', xlab), ('plot_title', plot_title), ('fig_title', fig_title)):
        if value is not None and not isinstance(value, str):
            raise TypeError(f"{name} must be a string. Got: {type(value).__name__}")
    if not isinstance(linespec, str):
        raise TypeError(f"linespec must be a string. Got: {type(linespec).__name__}")
    if isinstance(num_plot_cols, bool) or not isinstance(num_plot_cols, numbers.Integral):
        raise TypeError(f"num_plot_cols must be an integer. Got: {num_plot_cols!r}")
    if num_plot_cols < 1:
        raise ValueError(f"num_plot_cols must be at least 1. Got: {num_plot_cols}")
    if not isinstance(plot_by_rows, (bool, np.bool_)):
        raise TypeError(f"plot_by_rows must be a boolean. Got: {plot_by_rows!r}")
    if mat_labels is not None and not isinstance(mat_labels, (list, tuple)):
        raise TypeError("mat_labels must be a list of strings.")

    n_channels = signals.n_channels
    link_mode = LinkAxes.parse(link_axes)
    logy_channels = _resolve_logy(logy, n_channels)
    if link_mode.links_y and logy_channels:
        raise ValueError("Linking the y axes is not possible when logy is non-empty.")

    vline_spec = _resolve_events(vlines, signals, 'vlines', per_sample=False)
    n_vlines = _count_events(vline_spec, n_channels)
    if n_vlines > VLINE_WARN_THRESHOLD:
        warnings.warn(f"Drawing {n_vlines} vertical lines; the figure may become very slow.")

    if references and not _is_empty(ref_sigs):
        raise ValueError("Pass either ref_sigs or precomputed references, not both.")
    if references:
        if len(references) != n_channels:
            raise ValueError(f"references must have one entry per channel ({n_channels}), got {len(references)}.")
        overlays = tuple(references)
    else:
        overlays = _resolve_references(ref_sigs, mat_labels, signals)

    if figsize is not None:
        figsize = tuple(float(v) for v in figsize)
        if len(figsize) != 2:
            raise ValueError(f"figsize must be a (width, height) pair. Got: {figsize}")

    return PlotConfiguration(
        x_axis=_resolve_x_axis(time, signals),
        channel_labels=_resolve_channel_labels(signal_labels, n_channels),
        xlab=xlab or None,
        plot_title=plot_title or None,
        fig_title=fig_title or None,
        num_plot_cols=int(num_plot_cols),
        plot_by_rows=bool(plot_by_rows),
        markers=_resolve_events(markers, signals, 'markers', per_sample=True),
        vlines=vline_spec,
        vline_labels=_resolve_vline_labels(vline_labels, vline_spec),
        logy=logy_channels,
        link_axes=link_mode,
        linespec=linespec,
        references=overlays,
        figsize=figsize,
    )
