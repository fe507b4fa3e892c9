"""Student DTO: monthly payers driven to an institution on a shift (turno)."""
from typing import Optional, Dict, Any, List

from topvan_server.dto.common import PaymentStatus, strip_none
from topvan_server.utils.validation import (
    parse_choice, parse_decimal, parse_text, raise_if_errors,
)


class Turno:
    MANHA = 'Manhã'
    NOITE = 'Noite'

    @classmethod
    def all(cls) -> List[str]:
        return [cls.MANHA, cls.NOITE]


class StudentDTO:
    """Data Transfer Object for Students."""

    def __init__(
        self,
        student_id: Optional[str] = None,
        name: Optional[str] = None,
        institution_id: Optional[str] = None,
        valor_mensalidade: Optional[float] = None,
        observacoes: str = '',
        status_pagamento: str = PaymentStatus.PENDENTE,
        turno: Optional[str] = None,
    ):
        self.student_id = student_id
        self.name = name
        self.institution_id = institution_id
        self.valor_mensalidade = float(valor_mensalidade) if valor_mensalidade is not None else None
        self.observacoes = observacoes or ''
        self.status_pagamento = status_pagamento
        self.turno = turno

    @classmethod
    def from_request(cls, payload: Dict[str, Any]) -> 'StudentDTO':
        """Validate a full create payload."""
        payload = payload or {}
        errors: Dict[str, str] = {}
        dto = cls(
            name=parse_text(payload, 'name', errors),
            institution_id=parse_text(payload, 'institutionId', errors),
            valor_mensalidade=parse_decimal(payload, 'valorMensalidade', errors),
            observacoes=parse_text(payload, 'observacoes', errors, required=False) or '',
            status_pagamento=parse_choice(payload, 'statusPagamento', PaymentStatus.student_values(), errors,
                                          default=PaymentStatus.PENDENTE),
            turno=parse_choice(payload, 'turno', Turno.all(), errors),
        )
        raise_if_errors(errors)
        return dto

    @staticmethod
    def parse_update(payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a partial update; only supplied fields are returned."""
        payload = payload or {}
        errors: Dict[str, str] = {}
        fields: Dict[str, Any] = {}
        if 'name' in payload:
            fields['name'] = parse_text(payload, 'name', errors)
        if 'institutionId' in payload:
            fields['institutionId'] = parse_text(payload, 'institutionId', errors)
        if 'valorMensalidade' in payload:
            fields['valorMensalidade'] = parse_decimal(payload, 'valorMensalidade', errors)
        if 'observacoes' in payload:
            fields['observacoes'] = parse_text(payload, 'observacoes', errors, required=False) or ''
        if 'statusPagamento' in payload:
            fields['statusPagamento'] = parse_choice(payload, 'statusPagamento', PaymentStatus.student_values(), errors)
        if 'turno' in payload:
            fields['turno'] = parse_choice(payload, 'turno', Turno.all(), errors)
        raise_if_errors(errors)
        return fields

    def to_db_doc(self) -> Dict[str, Any]:
        return strip_none({
            'name': self.name,
            'institutionId': self.institution_id,
            'valorMensalidade': self.valor_mensalidade,
            'observacoes': self.observacoes,
            'statusPagamento': self.status_pagamento,
            'turno': self.turno,
        })
