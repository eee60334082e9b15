import dataclasses
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from typing import Any, List, Optional, Sequence, Tuple

from .plot_config import PlotConfiguration, build_plot_config
from .plotting import SignalGridPlotter
from .signal_data import SignalMatrix, ReferenceOverlay
from ..utils.logging import get_logger

logger = get_logger(__name__)


def as_signal_set(signal_sets: Sequence[Any]) -> List[SignalMatrix]:
    """
    Orient every matrix of a comparison the same way as the first one.

    Args:
        signal_sets: Non-empty sequence of 1D/2D numeric arrays of identical shape

    Returns:
        One SignalMatrix per input, all shaped (channels, samples)
    """
    if isinstance(signal_sets, np.ndarray) or not isinstance(signal_sets, (list, tuple)):
        raise TypeError("signal_sets must be a list of arrays.")
    if len(signal_sets) == 0:
        raise ValueError("signal_sets must contain at least one array.")

    primary = SignalMatrix.from_array(signal_sets[0])
    first_shape = np.shape(signal_sets[0])

    matrices = [primary]
    for i, arr in enumerate(signal_sets[1:], start=1):
        if np.shape(arr) != first_shape:
            raise ValueError(
                f"All signal sets must have the same shape. signal_sets[{i}] has shape "
                f"{np.shape(arr)}, expected {first_shape}."
            )
        matrices.append(SignalMatrix.from_array(arr))
    return matrices


class SignalSetComparator:
    def __init__(self, plotter: Optional[SignalGridPlotter] = None):
        self.plotter = plotter or SignalGridPlotter()

    def build_references(self, matrices: List[SignalMatrix],
                         mat_labels: Optional[Sequence[str]] = None) -> Tuple[ReferenceOverlay, ...]:
        """Collect, for every channel, that channel of all non-primary sets."""
        n_sets = len(matrices)
        primary = matrices[0]

        if mat_labels is not None and not isinstance(mat_labels, (list, tuple)):
            raise TypeError("mat_labels must be a list of strings.")
        if mat_labels is not None and len(mat_labels) > 0:
            if len(mat_labels) != n_sets:
                raise ValueError(f"mat_labels must have one label per signal set ({n_sets}), got {len(mat_labels)}.")
            labels = [str(label) for label in mat_labels]
        else:
            labels = [str(i + 1) for i in range(n_sets)]

        references = []
        for ch in range(primary.n_channels):
            block = np.empty((n_sets - 1, primary.n_samples), dtype=np.result_type(*[m.data for m in matrices]))
            for ref_idx, matrix in enumerate(matrices[1:]):
                block[ref_idx, :] = matrix.channel(ch)
            references.append(ReferenceOverlay(signals=block, labels=tuple(labels[1:]), primary_label=labels[0]))
        return tuple(references)

    def compare(self, signal_sets: Sequence[Any], config: PlotConfiguration,
                mat_labels: Optional[Sequence[str]] = None) -> Tuple[Figure, List[Axes]]:
        """
        Plot the first set with the corresponding signals of all other sets overlaid.

        `config` must have been built for the first set and must not carry references
        of its own.
        """
        if config.references:
            raise ValueError("The comparison config must not carry references; they are built from signal_sets.")
        matrices = as_signal_set(signal_sets)
        if len(config.channel_labels) != matrices[0].n_channels:
            raise ValueError(
                f"Config was built for {len(config.channel_labels)} signals, "
                f"but the signal sets have {matrices[0].n_channels}."
            )
        references = self.build_references(matrices, mat_labels)
        logger.debug(f"Comparing {len(matrices)} signal sets of {matrices[0].n_channels} signals each.")
        return self.plotter.plot(matrices[0], dataclasses.replace(config, references=references))


def compare_signals(signal_sets: Sequence[Any], time: Any = None, signal_labels: Any = None,
                    xlab: Optional[str] = None, plot_title: Optional[str] = None,
                    *, mat_labels: Optional[Sequence[str]] = None,
                    **options) -> Tuple[Figure, List[Axes]]:
    """
    Compare two or more sets of signals in a single figure.

    Every entry of `signal_sets` is a matrix of identical shape. One subplot is
    created per signal (the shorter dimension), and in each subplot the
    corresponding signal of every set is drawn. The first set is the primary one.

    Args:
        signal_sets: List of 1D/2D numeric arrays of identical shape
        time, signal_labels, xlab, plot_title: As for plot_signals()
        mat_labels: Legend labels, one per signal set. Defaults to "1", "2", ...
        **options: Forwarded to plot_signals(): num_plot_cols, plot_by_rows, markers,
            vlines, vline_labels, fig_title, logy, link_axes, linespec, figsize.

    Returns:
        (figure, subplot_handles)

    Example:
        >>> t = np.arange(1, 1001)
        >>> mat1 = np.vstack([t, np.sin(2 * np.pi * t / 100)])
        >>> mat2 = np.vstack([t[::-1], np.cos(2 * np.pi * t / 100)])
        >>> fig, axes = compare_signals([mat1, mat2], t, ['Signal A', 'Signal B'], 'Time (s)',
        ...                             vlines=np.arange(100, 1000, 100), mat_labels=['mat1', 'mat2'])
    """
    if 'ref_sigs' in options or 'references' in options:
        raise TypeError("compare_signals builds the reference signals itself; do not pass ref_sigs.")
    matrices = as_signal_set(signal_sets)
    config = build_plot_config(matrices[0], time, signal_labels, xlab, plot_title, **options)
    return SignalSetComparator().compare(signal_sets, config, mat_labels=mat_labels)
