"""
Custom Exceptions Module
Defines all custom exceptions used across the upload store
"""
from typing import Dict, Any, Optional


class UploadStoreException(Exception):
    """Base exception for the upload store"""

    # Non-fatal exceptions report a problem after the requested work was done
    fatal: bool = True

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# File-related exceptions
class NotFoundError(UploadStoreException):
    """Raised when a source file does not exist"""
    def __init__(self, message: str = "File not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=404, details=details)


class InvalidInputError(UploadStoreException):
    """Raised when a path is not a regular file or a manager is used out of order"""
    def __init__(self, message: str = "Invalid input", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=400, details=details)


class FilenameNotAssignedError(InvalidInputError):
    """Raised when a path is requested from a manager that has no filename yet"""
    def __init__(self, message: str = "Filename has not been assigned", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class StorageIOError(UploadStoreException):
    """Raised when a stat, open, copy or sync operation fails"""
    def __init__(self, message: str = "Storage operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=500, details=details)


class CleanupWarning(UploadStoreException):
    """
    Raised when the source could not be removed after a committed copy.

    The destination file is complete; only the source was left behind.
    """
    fatal = False

    def __init__(self, message: str = "Source cleanup failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=200, details=details)


# Validation exceptions
class ValidationError(UploadStoreException):
    """Raised when request input validation fails"""
    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=422, details=details)


class FileSizeTooLarge(UploadStoreException):
    """Raised when file size exceeds limit"""
    def __init__(self, message: str = "File size too large", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=413, details=details)


class ConfigurationError(UploadStoreException):
    """Raised when configuration is invalid"""
    def __init__(self, message: str = "Configuration error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=500, details=details)
