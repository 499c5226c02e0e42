"""Exceptions raised by the printer-queue simulation."""


class PrinterQueueError(Exception):
    pass


class InvalidPages(PrinterQueueError, ValueError):
    """A job was created with a page count that is not a positive integer."""


class InvalidConfiguration(PrinterQueueError, ValueError):
    """A simulation setting is outside its valid range."""


class InvariantViolation(PrinterQueueError, RuntimeError):
    """Internal bookkeeping went inconsistent. Always a bug, never handled."""
