from typing import Optional, Dict, Any

from topvan_server.utils.validation import parse_text, raise_if_errors


class InstitutionDTO:
    """Data Transfer Object for Institutions."""

    def __init__(self, institution_id: Optional[str] = None, name: Optional[str] = None):
        self.institution_id = institution_id
        self.name = name

    @classmethod
    def from_request(cls, payload: Dict[str, Any]) -> 'InstitutionDTO':
        errors: Dict[str, str] = {}
        name = parse_text(payload or {}, 'name', errors)
        raise_if_errors(errors)
        return cls(name=name)

    def to_db_doc(self) -> Dict[str, Any]:
        return {'name': self.name}
