"""Error taxonomy for conversion jobs.

Every error aborts the current job. A size gate rejection is not an error;
it is reported as a value on ConversionResult.
"""

from __future__ import annotations


class AtemError(Exception):
    """Base class for all atem errors."""

    pass


class ExternalToolError(AtemError):
    """Raised when an external tool fails to launch or exits non-zero."""

    def __init__(
        self,
        program: str,
        message: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.program = program
        self.returncode = returncode
        self.stderr = stderr


class ParseError(AtemError):
    """Raised when probe output is not in the expected numeric form."""

    pass


class NoFileStemError(AtemError):
    """Raised when an input path has no base name to derive defaults from."""

    def __init__(self, path: object) -> None:
        super().__init__(f"No file name in input path: {path!s}")
        self.path = path


class UnsupportedPlatformError(AtemError):
    """Raised when file reveal is requested on a platform without a strategy."""

    def __init__(self, os_family: str) -> None:
        super().__init__(
            f"Opening a file browser is unsupported on {os_family}"
        )
        self.os_family = os_family


class JobCancelledError(AtemError):
    """Raised when a conversion job is cancelled through its token."""

    pass
