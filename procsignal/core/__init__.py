from .models import ProcessHandle, SignalDeliveryError
from .process_source import ProcessSource
from .signal_dispatcher import SignalDispatcher, signal_procs

__all__ = [
    'ProcessHandle', 'SignalDeliveryError',
    'ProcessSource', 'SignalDispatcher', 'signal_procs'
]
