"""
procsignal - send a signal to processes by name
"""

from .core import ProcessHandle, ProcessSource, SignalDeliveryError, SignalDispatcher, signal_procs

__version__ = "1.0.0"

__all__ = [
    "ProcessHandle", "ProcessSource", "SignalDeliveryError",
    "SignalDispatcher", "signal_procs", "__version__"
]
