class CategorizationUnavailable(Exception):
    """Raised when the AI categorization call fails. Callers may retry."""
    def __init__(self, message, cause=None):
        self.cause = cause
        super().__init__(message)
