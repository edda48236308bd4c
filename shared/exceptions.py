class ResourceNotFoundException(Exception):
    """Raised when a referenced document does not exist in its collection."""

    def __init__(self, message: str = "Resource not found on server"):
        super().__init__(message)
        self.message = message


class RemoteServiceError(Exception):
    """A peer service answered, but with a body we cannot use."""

    def __init__(self, service: str, message: str):
        super().__init__(f"[{service}] {message}")
        self.service = service
