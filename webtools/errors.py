"""
Exceptions raised by the tool calculators and their external clients.
"""


class ToolError(Exception):
    """Base exception for tool-related errors."""


class UnknownToolError(ToolError):
    """Raised when a tool id is not registered in the catalog."""


class UnknownUnitError(ToolError):
    """Raised when a unit or unit category is not known to the converter."""



class InvalidCronExpressionError(ToolError):
    """Raised when a cron expression is malformed or out of range."""


class ExternalServiceError(ToolError):
    """Raised when an outbound call to an external service fails."""
