"""segpath — segmented filesystem paths with shell-style glob discovery."""

__version__ = "0.1.0"


class SegpathError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, missing directories, and aborted
    walks. The message is printed to stderr and the process exits
    with code 1.
    """
