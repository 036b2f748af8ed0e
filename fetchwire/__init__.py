"""HTTP client with fluent request building, default headers, multipart forms and typed errors."""

__version__ = "0.1.0"
__all__ = ["body", "client", "errors", "headers", "multipart", "request", "response"]