class ValidationError(ValueError):
    """Raised when a request payload fails validation before reaching a repository.

    `errors` maps field names to human readable messages.
    """
    def __init__(self, errors, message=None):
        if isinstance(errors, str):
            errors = {'_': errors}
        self.errors = dict(errors)
        super().__init__(message or '; '.join(f'{k}: {v}' for k, v in self.errors.items()))
