#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the md2toc library.

The table-of-contents engine itself never raises for document input: every
boundary condition is reported as "no outline produced". These exceptions
belong to the outer surfaces (configuration loading, file input and the
command-line interface).

Exception Hierarchy
-------------------
- Md2TocError (base exception)

  - ValidationError (configuration value validation)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, undecodable content)

  - DependencyError (missing optional packages)

"""

from typing import Any


class Md2TocError(Exception):
    """Base exception class for all md2toc-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Md2TocError):
    """Exception raised for invalid configuration values.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class FileError(Md2TocError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when an input file cannot be read.

    This includes permission errors and content that is not valid UTF-8.
    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class DependencyError(Md2TocError):
    """Exception raised when an optional dependency is not installed.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring the dependency
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    message : str, optional
        Custom error message. If not provided, generates one with an
        install hint

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        self.original_import_error = original_import_error
        if message is None:
            pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
            packages = " ".join(f'"{name}{spec}"' for name, spec in missing_packages)
            message = (
                f"{feature_name} requires the following packages: {pkg_list}. Install with: pip install {packages}"
            )
        super().__init__(message, original_error=original_import_error)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
