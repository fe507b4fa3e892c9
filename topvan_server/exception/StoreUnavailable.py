from topvan_server.exception.StoreError import StoreError


class StoreUnavailable(StoreError):
    """Raised when the document store cannot be reached or rejects an operation."""
    def __init__(self, message, cause=None):
        self.cause = cause
        super().__init__(message)
