"""Base exception classes for Tether error handling"""


class TetherException(Exception):
    """Base exception for all Tether errors"""
    
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(TetherException):
    """Raised when a record or care-plan operation fails validation"""
    pass


class CatalogError(TetherException):
    """Raised when a resource catalog cannot be read or parsed"""
    pass


class ConfigurationError(TetherException):
    """Raised when configuration is invalid or missing"""
    pass
