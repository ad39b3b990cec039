"""Errors raised by future matchers outside the mismatch channel."""


class InterruptedTestError(KeyboardInterrupt):
    """
    The thread waiting on a future was interrupted.

    Subclasses KeyboardInterrupt so the interrupt keeps propagating and
    pytest aborts the run instead of recording an ordinary failure.
    """

    def __init__(self, message: str = "interrupted test"):
        super().__init__(message)
