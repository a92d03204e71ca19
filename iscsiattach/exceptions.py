"""
Exception classes for iSCSI initiator operations.

This module defines the exception hierarchy used throughout the iscsiattach
library for consistent error handling.
"""


class ISCSIError(Exception):
    """Base exception class for all iscsiattach errors.

    Callers that do not care about the specific failure should catch ISCSIError
    rather than generic exceptions.
    """

    pass


class MalformedPathError(ISCSIError):
    """A mount path lacks the structural markers of the plugin layout."""

    pass


class MalformedDeviceError(ISCSIError):
    """A device descriptor is not of the form <portal>-<target>-lun-<n>."""

    pass


class InvalidRecordLineError(ISCSIError):
    """A line of iscsiadm output is not a 'key = value' pair.

    Attributes:
        line_number: 1-based line number within the parsed output
        line: The offending line with surrounding whitespace stripped
    """

    def __init__(self, line_number: int, line: str):
        super().__init__(f"Invalid record line at {line_number}: '{line}'")
        self.line_number = line_number
        self.line = line


class ExternalToolError(ISCSIError):
    """An external command failed, timed out or could not be started.

    Attributes:
        command: Executable name
        command_args: Arguments passed to the executable
        returncode: Exit status, or None if the process never completed
        output: Combined stdout/stderr captured from the process
        rollback_error: Error raised by a compensating action that ran after
            this failure, if any. It never replaces this error.
    """

    def __init__(self, message: str, command: str = "", args=None,
                 returncode=None, output: str = ""):
        super().__init__(message)
        self.command = command
        self.command_args = list(args or [])
        self.returncode = returncode
        self.output = output
        self.rollback_error = None


class FilesystemError(ISCSIError):
    """An I/O failure other than 'not found' while reading the filesystem."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
