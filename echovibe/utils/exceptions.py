"""
Custom exception classes for error categorization in the EchoVibe service.
"""


class EchoVibeError(Exception):
    """Base exception for all EchoVibe errors."""

    def __init__(self, message: str, context: dict = None):
        """
        Initialize exception with message and optional context.

        Args:
            message: Error message
            context: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class TransientError(EchoVibeError):
    """
    Exception for transient errors that should be retried.

    Examples:
        - SMTP server dropped the connection
        - Network timeouts
    """
    pass


class PermanentError(EchoVibeError):
    """
    Exception for permanent errors that should not be retried.

    Examples:
        - Missing API keys
        - Model output that does not match the declared JSON shape
        - SMTP authentication failures
    """
    pass


class ConfigurationError(PermanentError):
    """Exception for configuration errors (e.g. no LLM provider available)."""
    pass


class APIError(EchoVibeError):
    """Base exception for external API errors."""
    pass


class LLMError(APIError):
    """Exception raised when every configured LLM provider failed."""
    pass


class LLMResponseError(PermanentError):
    """Exception for LLM output that cannot be decoded or validated."""

    def __init__(
        self,
        message: str,
        raw_response: str = "",
        validation_errors: list = None,
        context: dict = None
    ):
        """
        Initialize LLM response error.

        Args:
            message: Error message
            raw_response: Text returned by the model
            validation_errors: List of specific validation errors
            context: Additional error context
        """
        super().__init__(message, context)
        self.raw_response = raw_response
        self.validation_errors = validation_errors or []


class MailDeliveryError(APIError):
    """Exception for quote emails that could not be delivered."""
    pass
