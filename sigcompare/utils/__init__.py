# sigcompare/utils/__init__.py
from .generate_signals import demo_signal_sets, generate_pulse_train
from .logging import configure_logging, get_logger

__all__ = [
    "demo_signal_sets",
    "generate_pulse_train",
    "configure_logging",
    "get_logger",
]
