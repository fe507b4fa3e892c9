class StoreError(Exception):
    """Base class for failures raised by a document store."""
    def __init__(self, message):
        super().__init__(message)
