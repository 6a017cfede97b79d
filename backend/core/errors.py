class InvalidDataURLError(ValueError):
    """Raised when an image string is not a `data:<mime>;base64,<payload>` URL."""

    def __init__(self, message: str = "Invalid image data URL format"):
        super().__init__(message)
