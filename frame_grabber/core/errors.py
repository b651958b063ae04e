# File: frame_grabber/core/errors.py

from typing import Optional


class FrameGrabberError(Exception):
    """Base class for every failure the tool reports to the user."""


class ValidationError(FrameGrabberError):
    """
    Bad user input. Raised before any external process is started.

    Args:
        flag: The option (or positional name) that was rejected, e.g. "--fps".
        message: Human readable reason.
    """

    def __init__(self, flag: Optional[str], message: str):
        self.flag = flag
        self.message = message
        super().__init__(f"{flag}: {message}" if flag else message)


class OrchestrationError(FrameGrabberError):
    """
    A step of the download -> extract pipeline failed.
    `stderr` carries the external tool's diagnostic text, untouched.
    """

    def __init__(self, message: str, stderr: str = ""):
        self.message = message
        self.stderr = stderr
        super().__init__(message)

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.message}\n{self.stderr.rstrip()}"
        return self.message


class DownloadFailed(OrchestrationError):
    pass


class ExtractionFailed(OrchestrationError):
    pass


class OutputDirectoryError(OrchestrationError):
    """The frames directory could not be created."""


class ToolNotFoundError(OrchestrationError):
    def __init__(self, tool: str, hint: str = ""):
        self.tool = tool
        message = f"{tool} not found on PATH."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class ExtractionCancelled(OrchestrationError):
    """The user interrupted a running external process."""

    def __init__(self, stage: str, stderr: str = ""):
        self.stage = stage
        super().__init__(f"Cancelled while {stage}.", stderr)
