# sigcompare/core/__init__.py
from .signal_data import SignalMatrix, ReferenceOverlay
from .plot_config import PlotConfiguration, LinkAxes, build_plot_config
from .plotting import SignalGridPlotter, plot_signals
from .comparison import SignalSetComparator, compare_signals

__all__ = [
    "SignalMatrix",
    "ReferenceOverlay",
    "PlotConfiguration",
    "LinkAxes",
    "build_plot_config",
    "SignalGridPlotter",
    "SignalSetComparator",
    "plot_signals",
    "compare_signals",
]
