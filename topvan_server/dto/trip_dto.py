"""Trip DTO.

A trip is a one-off revenue event. When it has a return date (dataVolta)
the service creates a second "return leg" trip linked through idaTripId:

- outbound: idaTripId == its own id, temVolta == True
- return leg: isReturnTrip == True, idaTripId == outbound id, valor == 0
"""
from typing import Optional, Dict, Any

from topvan_server.dto.common import PaymentStatus, strip_none
from topvan_server.utils.validation import (
    parse_bool, parse_choice, parse_date, parse_decimal, parse_text, raise_if_errors,
)

RETURN_PREFIX = 'Volta de '


class TripDTO:
    """Data Transfer Object for Trips."""

    def __init__(
        self,
        trip_id: Optional[str] = None,
        destino: Optional[str] = None,
        contratante: Optional[str] = None,
        data: Optional[str] = None,
        valor: Optional[float] = None,
        status_pagamento: str = PaymentStatus.PENDENTE,
        data_volta: Optional[str] = None,
        is_return_trip: Optional[bool] = None,
        ida_trip_id: Optional[str] = None,
        tem_volta: Optional[bool] = None,
    ):
        self.trip_id = trip_id
        self.destino = destino
        self.contratante = contratante
        self.data = data
        self.valor = float(valor) if valor is not None else None
        self.status_pagamento = status_pagamento
        self.data_volta = data_volta
        self.is_return_trip = is_return_trip
        self.ida_trip_id = ida_trip_id
        self.tem_volta = tem_volta

    @property
    def wants_return(self) -> bool:
        return bool(self.data_volta) and self.tem_volta is not False

    @classmethod
    def from_request(cls, payload: Dict[str, Any]) -> 'TripDTO':
        """Validate a create payload. New trips always start as Pendente."""
        payload = payload or {}
        errors: Dict[str, str] = {}
        data = parse_date(payload, 'data', errors)
        data_volta = parse_date(payload, 'dataVolta', errors, required=False)
        tem_volta = parse_bool(payload, 'temVolta', errors)
        if tem_volta and not data_volta:
            errors['dataVolta'] = 'dataVolta is required when temVolta is true.'
        if data and data_volta and data_volta < data:
            errors['dataVolta'] = 'dataVolta cannot be before data.'
        if tem_volta is False:
            data_volta = None
        dto = cls(
            destino=parse_text(payload, 'destino', errors),
            contratante=parse_text(payload, 'contratante', errors, required=False) or None,
            data=data,
            valor=parse_decimal(payload, 'valor', errors, allow_zero=True),
            data_volta=data_volta,
            tem_volta=bool(data_volta),
        )
        raise_if_errors(errors)
        return dto

    @staticmethod
    def parse_update(payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a partial edit. Pairing fields (idaTripId, isReturnTrip) are not editable."""
        payload = payload or {}
        errors: Dict[str, str] = {}
        fields: Dict[str, Any] = {}
        if 'destino' in payload:
            fields['destino'] = parse_text(payload, 'destino', errors)
        if 'contratante' in payload:
            fields['contratante'] = parse_text(payload, 'contratante', errors, required=False) or None
        if 'data' in payload:
            fields['data'] = parse_date(payload, 'data', errors)
        if 'valor' in payload:
            fields['valor'] = parse_decimal(payload, 'valor', errors, allow_zero=True)
        if 'statusPagamento' in payload:
            fields['statusPagamento'] = parse_choice(payload, 'statusPagamento', PaymentStatus.all(), errors)
        if 'dataVolta' in payload:
            fields['dataVolta'] = parse_date(payload, 'dataVolta', errors, required=False)
        if 'temVolta' in payload:
            fields['temVolta'] = parse_bool(payload, 'temVolta', errors)
            if fields['temVolta'] is None and 'temVolta' not in errors:
                errors['temVolta'] = 'temVolta must be a boolean.'
        if fields.get('data') and fields.get('dataVolta') and fields['dataVolta'] < fields['data']:
            errors['dataVolta'] = 'dataVolta cannot be before data.'
        raise_if_errors(errors)
        return fields

    @classmethod
    def return_leg_for(cls, outbound_id: str, destino: str, data_volta: str) -> 'TripDTO':
        return cls(
            destino=f'{RETURN_PREFIX}{destino}',
            data=data_volta,
            valor=0,
            status_pagamento=PaymentStatus.PENDENTE,
            is_return_trip=True,
            ida_trip_id=outbound_id,
            tem_volta=False,
        )

    def to_db_doc(self) -> Dict[str, Any]:
        return strip_none({
            'destino': self.destino,
            'contratante': self.contratante,
            'data': self.data,
            'valor': self.valor,
            'statusPagamento': self.status_pagamento,
            'dataVolta': self.data_volta,
            'isReturnTrip': self.is_return_trip,
            'idaTripId': self.ida_trip_id,
            'temVolta': self.tem_volta,
        })
