"""Unified error handling for utilkit.

- ErrorCode: Standard error codes for utility failures
- UtilError/UtilException: Structured errors and exceptions
- AssertionFailure: Raised by failed preconditions
"""

from .errors import AssertionFailure, ErrorCode, UtilError, UtilException

__all__ = ["AssertionFailure", "ErrorCode", "UtilError", "UtilException"]
