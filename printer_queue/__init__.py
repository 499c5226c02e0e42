"""
printer-queue package

Discrete-event simulation of print jobs dispatched to a pool of printers,
routed to whichever printer has the least outstanding work.
"""

from .clock import Clock
from .dispatcher import Dispatcher, select_printer
from .errors import InvalidConfiguration, InvalidPages, InvariantViolation, PrinterQueueError
from .events import EventLog, SimEvent, TextSink
from .jobs import Job, JobFactory, SizeTier, random_page_count
from .printer import Printer, PrinterState
from .simulation import Simulation

__all__ = [
    "Clock",
    "Dispatcher",
    "EventLog",
    "InvalidConfiguration",
    "InvalidPages",
    "InvariantViolation",
    "Job",
    "JobFactory",
    "Printer",
    "PrinterQueueError",
    "PrinterState",
    "SimEvent",
    "Simulation",
    "SizeTier",
    "TextSink",
    "random_page_count",
    "select_printer",
]
__version__ = "0.1.0"
