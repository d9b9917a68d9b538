"""Custom exceptions for Email Productivity Agent."""


class EmailAgentError(Exception):
    """Base exception for all Email Productivity Agent errors."""


class ConfigurationError(EmailAgentError):
    """Exception raised for configuration related errors."""


class DatabaseError(EmailAgentError):
    """Exception raised when the database collaborator fails."""


class PromptNotFoundError(EmailAgentError):
    """Exception raised when a required task template is not stored."""

    def __init__(self, *names: str) -> None:
        self.names = names
        super().__init__(
            f"Prompt(s) not found: {', '.join(names)}. Please configure prompts first."
        )


class LLMError(EmailAgentError):
    """Base exception for Gemini request failures."""


class LLMTimeoutError(LLMError):
    """Exception raised when every attempt timed out."""


class LLMNetworkError(LLMError):
    """Exception raised when every attempt failed at the transport level."""


class LLMAPIError(LLMError):
    """Exception raised when Gemini answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(message)


class LLMResponseError(LLMError):
    """Exception raised when a successful response carries no extractable text."""


class RecordNotFoundError(DatabaseError, LookupError):
    """Exception raised when an update targets a row that does not exist."""
