class InterpreterError(Exception):
    """Base error for the scene interpreter."""


class ProviderNotConfiguredError(InterpreterError):
    """Raised when the image-generation provider has no credentials."""


class ImageGenerationError(InterpreterError):
    """Raised when the image-generation provider fails to return an image."""


class StorageError(InterpreterError):
    """Raised when object storage or the texture cache rejects a request."""
