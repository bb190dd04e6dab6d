#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the mdattrs library.

Attribute resolution itself never fails: every attribute fragment either
attaches to a node or degrades to literal text. The exceptions below cover
the surfaces around it (configuration, mdast input, and the optional
post-condition check).

Exception Hierarchy
-------------------
- MdAttrsError (base exception)

  - ValidationError (option validation)

  - ParsingError (malformed mdast input)

  - TransformError (attribute fragments left in a resolved tree)

"""

from typing import Any


class MdAttrsError(Exception):
    """Base exception class for all mdattrs-specific errors.

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


class ValidationError(MdAttrsError):
    """Exception raised for invalid option values.

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


class ParsingError(MdAttrsError):
    """Exception raised when an mdast tree cannot be converted to the AST.

    Parameters
    ----------
    message : str
        Description of the problem
    node_type : str, optional
        The mdast ``type`` of the offending node, when known
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, node_type: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error with the offending node type."""
        super().__init__(message, original_error=original_error)
        self.node_type = node_type


class TransformError(MdAttrsError):
    """Exception raised when a resolved tree still holds attribute fragments.

    Parameters
    ----------
    message : str
        Description of the failure
    remaining : int, default = 0
        Number of attribute fragments found in the tree

    """

    def __init__(self, message: str, remaining: int = 0, original_error: Exception | None = None):
        """Initialize the transform error with the number of surviving fragments."""
        super().__init__(message, original_error=original_error)
        self.remaining = remaining


__all__ = [
    "MdAttrsError",
    "ValidationError",
    "ParsingError",
    "TransformError",
]
