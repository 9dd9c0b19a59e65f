class VeoscopeError(Exception):
    """Base class for errors raised while analyzing a video."""


class FormatError(VeoscopeError):
    """Raised when an encoded payload is not a single-part data URL or has no MIME type."""


class ValidationError(VeoscopeError):
    """Raised when the uploaded file is not a video."""


class RemoteCallError(VeoscopeError):
    """Raised when the Gemini API call fails."""


class AuthenticationError(RemoteCallError):
    """Raised when the Gemini API key is missing or rejected."""


class RateLimitError(RemoteCallError):
    """Raised when the Gemini API quota or rate limit is hit."""


class ParseFailure(VeoscopeError):
    """Raised when no section could be extracted from the model's reply."""


class AnalysisInProgressError(VeoscopeError):
    """Raised when an analysis is requested while another one is running."""
