"""
Custom exceptions for the forestry simulation.
Provides domain-specific error handling with informative messages.
"""


class ForestryError(Exception):
    """Base exception for all forestry errors."""
    pass


class ConfigurationError(ForestryError):
    """Raised when there are configuration-related issues."""
    pass


class DataError(ForestryError):
    """Raised when there are data-related issues."""
    pass


class ForestFileNotFoundError(DataError):
    """Raised when a required forest file is not found."""
    def __init__(self, file_path: str, file_type: str = "file"):
        self.file_path = file_path
        self.file_type = file_type
        super().__init__(f"Required {file_type} not found: {file_path}")


class InvalidDataError(DataError):
    """Raised when data is malformed or invalid."""
    def __init__(self, data_description: str, reason: str):
        self.data_description = data_description
        self.reason = reason
        super().__init__(f"Invalid {data_description}: {reason}")


class PersistenceError(ForestryError):
    """Raised when a saved forest cannot be read or written."""
    def __init__(self, forest_name: str, reason: str):
        self.forest_name = forest_name
        self.reason = reason
        super().__init__(f"Forest '{forest_name}' storage failed: {reason}")
