import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from typing import Any, Dict, List, Optional, Tuple

from .plot_config import PlotConfiguration, build_plot_config
from .signal_data import SignalMatrix, SharedEvents
from ..utils.logging import get_logger

logger = get_logger(__name__)

# gids used to tell the drawn artists apart
SIGNAL_GID = 'signal'
REFERENCE_GID = 'reference'
MARKER_GID = 'marker'
VLINE_GID = 'vline'


class SignalGridPlotter:
    def __init__(self, color_theme: Optional[Dict[str, str]] = None):
        self.color_theme = {
            'marker': '#d62728',  # Brick red
            'vline': '#7f7f7f',   # Middle grey
            'grid': '#cccccc'     # Light grey
        }
        if color_theme:
            self.color_theme.update(color_theme)

    def plot(self, signals: SignalMatrix, config: PlotConfiguration) -> Tuple[Figure, List[Axes]]:
        """
        Draw every channel of `signals` in its own subplot.

        Args:
            signals: Signal matrix, already oriented as (channels, samples)
            config: Validated options, see build_plot_config()

        Returns:
            The figure and the subplot axes, index-aligned with the channels
        """
        n_channels = signals.n_channels
        n_rows, n_cols = config.grid_shape(n_channels)
        logger.debug(f"Plotting {n_channels} channels on a {n_rows}x{n_cols} grid "
                     f"({'row' if config.plot_by_rows else 'column'}-major, link='{config.link_axes.value}').")

        fig, grid = plt.subplots(n_rows, n_cols, figsize=config.resolved_figsize(n_channels), squeeze=False)
        try:
            positions = [config.grid_position(i, n_channels) for i in range(n_channels)]
            subplot_handles = [grid[row, col] for row, col in positions]

            used = set(positions)
            for row in range(n_rows):
                for col in range(n_cols):
                    if (row, col) not in used:
                        fig.delaxes(grid[row, col])

            # bottom-most occupied cell of every column carries the x label
            bottom_rows = {}
            for row, col in positions:
                bottom_rows[col] = max(row, bottom_rows.get(col, row))

            for i, ax in enumerate(subplot_handles):
                row, col = positions[i]
                self._plot_channel(ax, signals, i, config, show_xlabel=(row == bottom_rows[col]))

            self._link_axes(subplot_handles, config)
            self._set_titles(fig, config)
            fig.tight_layout()
        except Exception:
            plt.close(fig)
            raise

        return fig, subplot_handles

    def _plot_channel(self, ax: Axes, signals: SignalMatrix, channel_idx: int,
                      config: PlotConfiguration, show_xlabel: bool):
        trace = signals.channel(channel_idx)
        x_axis = config.x_axis.for_channel(channel_idx, signals.n_samples)
        overlay = config.references[channel_idx] if config.references else None

        ax.plot(x_axis, trace, config.linespec, gid=SIGNAL_GID,
                label=overlay.primary_label if overlay is not None else None)

        if overlay is not None:
            for ref_trace, label in zip(overlay.signals, overlay.labels):
                ax.plot(x_axis, ref_trace, config.linespec, gid=REFERENCE_GID, label=label)

        if channel_idx in config.logy:
            ax.set_yscale('log')

        markers = config.markers.for_channel(channel_idx)
        if markers is not None:
            mask = markers != 0
            ax.plot(x_axis[mask], trace[mask], linestyle='none', marker='o',
                    color=self.color_theme['marker'], gid=MARKER_GID)

        vlines = config.vlines.for_channel(channel_idx)
        if vlines is not None:
            labels = self._vline_labels(config, channel_idx)
            for j, x_pos in enumerate(vlines):
                ax.axvline(x=x_pos, color=self.color_theme['vline'], linestyle='--', alpha=0.7, linewidth=1,
                           gid=VLINE_GID, label=labels[j] if labels else None)

        ax.set_ylabel(config.channel_labels[channel_idx])
        if show_xlabel and config.xlab:
            ax.set_xlabel(config.xlab)

        ax.grid(True, color=self.color_theme['grid'], linestyle='--')
        ax.spines['top'].set_visible(False)
        ax.spines['right'].set_visible(False)

        handles, _ = ax.get_legend_handles_labels()
        if handles:
            ax.legend()

    @staticmethod
    def _vline_labels(config: PlotConfiguration, channel_idx: int) -> Tuple[str, ...]:
        if not config.vline_labels:
            return ()
        if isinstance(config.vlines, SharedEvents):
            return config.vline_labels[0]
        return config.vline_labels[channel_idx]

    @staticmethod
    def _link_axes(subplot_handles: List[Axes], config: PlotConfiguration):
        anchor = subplot_handles[0]
        for ax in subplot_handles[1:]:
            if config.link_axes.links_x:
                ax.sharex(anchor)
            if config.link_axes.links_y:
                ax.sharey(anchor)
        # shared limits must cover the data of every linked subplot
        for ax in subplot_handles:
            ax.relim()
            ax.autoscale_view()

    @staticmethod
    def _set_titles(fig: Figure, config: PlotConfiguration):
        if config.plot_title:
            fig.suptitle(config.plot_title)
        window_title = config.window_title
        if window_title:
            fig.set_label(window_title)
            if fig.canvas.manager is not None:
                fig.canvas.manager.set_window_title(window_title)


def plot_signals(signals: Any, time: Any = None, signal_labels: Any = None,
                 xlab: Optional[str] = None, plot_title: Optional[str] = None,
                 **options) -> Tuple[Figure, List[Axes]]:
    """
    Plot each signal (row or column) of a matrix in its own subplot.

    The longer dimension of `signals` is the sample axis; one subplot is created per
    entry of the shorter one. Equal dimensions are read as one signal per row.

    Args:
        signals: 1D or 2D numeric array
        time: x vector with one entry per sample, or a list with one x vector per
            signal. Defaults to the sample index 1..N.
        signal_labels: A base name (y labels become "<name>_1", "<name>_2", ...), a list
            with one label per signal, or None for the plain index.
        xlab: x axis label, shown on the bottom subplots only
        plot_title: Title over the whole figure
        **options: mat_labels, num_plot_cols, plot_by_rows, markers, vlines,
            vline_labels, fig_title, logy, link_axes, linespec, ref_sigs, figsize.
            See build_plot_config().

    Returns:
        (figure, subplot_handles)
    """
    matrix = SignalMatrix.from_array(signals)
    logger.debug(f"Detected {matrix.n_channels} signals of {matrix.n_samples} samples "
                 f"(signals in {'rows' if matrix.signals_in_rows else 'columns'}).")
    config = build_plot_config(matrix, time, signal_labels, xlab, plot_title, **options)
    return SignalGridPlotter().plot(matrix, config)
