import logging

from .core.signal_data import (
    SignalMatrix,
    ReferenceOverlay,
    EventSpec,
    NoEvents,
    SharedEvents,
    PerChannelEvents,
    IndexAxis,
    SharedAxis,
    PerChannelAxis,
)
from .core.plot_config import PlotConfiguration, LinkAxes, build_plot_config
from .core import SignalGridPlotter, SignalSetComparator, plot_signals, compare_signals
from .utils.logging import configure_logging, get_logger

# Logs stay silent until an application or script calls configure_logging()
_logger = logging.getLogger("sigcompare")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__version__ = "0.0.1"
__all__ = [
    "plot_signals",
    "compare_signals",
    "SignalGridPlotter",
    "SignalSetComparator",
    "SignalMatrix",
    "ReferenceOverlay",
    "EventSpec",
    "NoEvents",
    "SharedEvents",
    "PerChannelEvents",
    "IndexAxis",
    "SharedAxis",
    "PerChannelAxis",
    "PlotConfiguration",
    "LinkAxes",
    "build_plot_config",
    "configure_logging",
    "get_logger",
]
