"""Field-level parsing helpers shared by the DTOs.

Each helper reads one field from a request payload, records a message in
`errors` when the value is unusable and returns the parsed value (or None).
DTOs collect all errors for a payload and raise a single ValidationError.
"""
import math
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional

from topvan_server.exception.ValidationError import ValidationError


def to_decimal(value: Any) -> Optional[float]:
    """Parse a money/quantity value. Accepts numbers and strings with ',' or '.' as decimal separator."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            value = float(value)
        except OverflowError:
            return None
        return value if math.isfinite(value) else None
    s = str(value).strip().replace(' ', '')
    if not s:
        return None
    if ',' in s:
        # "1.234,56" -> "1234.56"
        s = s.replace('.', '').replace(',', '.')
    try:
        value = float(s)
    except ValueError:
        return None
    # inf and nan are not amounts
    return value if math.isfinite(value) else None


def parse_decimal(data: Dict[str, Any], field: str, errors: Dict[str, str], required: bool = True,
                  allow_zero: bool = False) -> Optional[float]:
    raw = data.get(field)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if required:
            errors[field] = f'{field} is required.'
        return None
    value = to_decimal(raw)
    if value is None or not math.isfinite(value):
        errors[field] = f'{field} must be a number.'
        return None
    if value < 0 or (value == 0 and not allow_zero):
        errors[field] = f'{field} must be {"zero or positive" if allow_zero else "positive"}.'
        return None
    return value


def parse_positive_int(data: Dict[str, Any], field: str, errors: Dict[str, str], required: bool = False,
                       default: Optional[int] = None) -> Optional[int]:
    raw = data.get(field)
    if raw is None or raw == '':
        if required:
            errors[field] = f'{field} is required.'
        return default
    if isinstance(raw, bool):
        errors[field] = f'{field} must be a positive integer.'
        return None
    try:
        as_float = float(str(raw).replace(',', '.'))
    except ValueError:
        errors[field] = f'{field} must be a positive integer.'
        return None
    if not math.isfinite(as_float) or as_float != int(as_float) or as_float < 1:
        errors[field] = f'{field} must be a positive integer.'
        return None
    return int(as_float)


def to_iso_date(value: Any) -> Optional[str]:
    """Normalize a date/datetime or ISO string to 'YYYY-MM-DD'."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    s = str(value).strip()
    if not s:
        return None
    if s.endswith('Z'):
        s = s[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(s).date().isoformat()
    except ValueError:
        pass
    try:
        return datetime.strptime(s[:10], '%Y-%m-%d').date().isoformat()
    except ValueError:
        return None


def parse_date(data: Dict[str, Any], field: str, errors: Dict[str, str], required: bool = True) -> Optional[str]:
    raw = data.get(field)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if required:
            errors[field] = f'{field} is required.'
        return None
    value = to_iso_date(raw)
    if value is None:
        errors[field] = f'{field} must be an ISO date (YYYY-MM-DD).'
    return value


def parse_text(data: Dict[str, Any], field: str, errors: Dict[str, str], required: bool = True,
               min_length: int = 1) -> Optional[str]:
    raw = data.get(field)
    if raw is None or not str(raw).strip():
        if required:
            errors[field] = f'{field} is required.'
        return None if raw is None else ''
    text = str(raw).strip()
    if len(text) < min_length:
        errors[field] = f'{field} must have at least {min_length} characters.'
        return None
    return text


def parse_choice(data: Dict[str, Any], field: str, choices: Iterable[str], errors: Dict[str, str],
                 required: bool = True, default: Optional[str] = None) -> Optional[str]:
    raw = data.get(field)
    if raw is None or raw == '':
        if required and default is None:
            errors[field] = f'{field} is required.'
        return default
    choices = list(choices)
    if raw not in choices:
        errors[field] = f'{field} must be one of: {", ".join(choices)}.'
        return None
    return raw


def parse_bool(data: Dict[str, Any], field: str, errors: Dict[str, str]) -> Optional[bool]:
    raw = data.get(field)
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    s = str(raw).strip().lower()
    if s in ('1', 'true', 'yes', 'sim'):
        return True
    if s in ('0', 'false', 'no', 'nao', 'não'):
        return False
    errors[field] = f'{field} must be a boolean.'
    return None


def raise_if_errors(errors: Dict[str, str]) -> None:
    if errors:
        raise ValidationError(errors)
