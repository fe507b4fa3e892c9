from .ValidationError import ValidationError
from .StoreError import StoreError
from .NotFoundError import NotFoundError
from .StoreUnavailable import StoreUnavailable
from .PartialReconciliationFailure import PartialReconciliationFailure
from .CategorizationUnavailable import CategorizationUnavailable

__all__ = [
    'ValidationError', 'StoreError', 'NotFoundError', 'StoreUnavailable',
    'PartialReconciliationFailure', 'CategorizationUnavailable',
]
