# didadmin/utils/exceptions.py
# -*- coding: utf-8 -*-
"""
Custom Exception Classes for the Application.

These exceptions are used to signal specific error conditions from the service layer
(and the CSV import pipeline) to the API layer (routes), allowing for specific error
handling and mapping to appropriate HTTP status codes.
"""


class ServiceError(Exception):
    """Base class for service layer exceptions."""
    status_code = 500  # Default to Internal Server Error
    message = "An unexpected service error occurred."

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "message": str(self), "error": type(self).__name__}


class ResourceNotFound(ServiceError):
    """Raised when a requested resource is not found."""
    status_code = 404
    message = "The requested resource was not found."


class ValidationError(ServiceError):
    """Raised for general data validation errors (beyond schema validation)."""
    status_code = 400
    message = "Validation failed."


class ConflictError(ServiceError):
    """Raised when an operation conflicts with the current state (e.g., duplicate business key)."""
    status_code = 409
    message = "A conflict occurred with the current state of the resource."


class StorageError(ServiceError):
    """Raised by a persistence backend when a blob cannot be read or written."""
    status_code = 500
    message = "The storage backend rejected the operation."


# --- CSV import errors ---
# Parse errors block an import before anything is written.

class CsvImportError(ValidationError):
    """Base class for problems found while reading an uploaded CSV file."""
    message = "The CSV file could not be processed."


class HeaderNotFound(CsvImportError):
    message = ("Could not identify header row in CSV file. "
               "Please ensure your CSV has proper column headers.")


class EmptyDataset(CsvImportError):
    message = "No valid data rows found in CSV file."


class HeaderMismatch(CsvImportError):
    """Raised when a fixed-format CSV is missing one of its expected headers."""

    def __init__(self, expected, message=None):
        self.expected = list(expected)
        super().__init__(message or
                         "CSV headers do not match expected format. Expected: " + ", ".join(self.expected))


class UnsupportedFileType(CsvImportError):
    message = "Only CSV files can be imported."
