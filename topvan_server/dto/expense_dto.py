"""Expense DTOs: fuel expenses and general (categorised) expenses.

General expenses paid with anything other than PIX are installment
purchases: `valor` is the total and each period costs
`valor / totalInstallments`. The monthly reset advances
`currentInstallment` until the last one is consumed.
"""
import unicodedata
from typing import Optional, Dict, Any, List

from topvan_server.dto.common import strip_none
from topvan_server.utils.validation import (
    parse_choice, parse_date, parse_decimal, parse_positive_int, parse_text, raise_if_errors,
)


class ExpenseCategory:
    ALIMENTACAO = 'Alimentação'
    MANUTENCAO_VEICULO = 'Manutenção do Veículo'
    SAUDE = 'Saúde'
    LAZER = 'Lazer'
    PESSOAL = 'Pessoal'
    EDUCACAO = 'Educação'
    OUTROS = 'Outros'

    @classmethod
    def all(cls) -> List[str]:
        return [cls.ALIMENTACAO, cls.MANUTENCAO_VEICULO, cls.SAUDE, cls.LAZER,
                cls.PESSOAL, cls.EDUCACAO, cls.OUTROS]

    @classmethod
    def normalize(cls, label: Optional[str]) -> str:
        """Map a free-form label onto the closed set, falling back to Outros."""
        if not label:
            return cls.OUTROS
        wanted = _fold(label)
        for category in cls.all():
            if _fold(category) == wanted:
                return category
        return cls.OUTROS


class PaymentMethod:
    PIX = 'PIX'
    CARTAO_BANCO_BRASIL = 'Cartão Banco Brasil'
    CARTAO_NUBANK = 'Cartão Nubank'
    CARTAO_NAZA = 'Cartão Naza'
    OUTRO = 'Outro'

    @classmethod
    def all(cls) -> List[str]:
        return [cls.PIX, cls.CARTAO_BANCO_BRASIL, cls.CARTAO_NUBANK, cls.CARTAO_NAZA, cls.OUTRO]

    @classmethod
    def is_installment(cls, method: Optional[str]) -> bool:
        return method is not None and method != cls.PIX


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize('NFKD', str(text))
    return ''.join(c for c in decomposed if not unicodedata.combining(c)).strip().strip('."\'').lower()


class FuelExpenseDTO:
    """Data Transfer Object for fuel expenses."""

    def __init__(self, expense_id: Optional[str] = None, data: Optional[str] = None,
                 valor: Optional[float] = None, litros: Optional[float] = None):
        self.expense_id = expense_id
        self.data = data
        self.valor = float(valor) if valor is not None else None
        self.litros = float(litros) if litros is not None else None

    @classmethod
    def from_request(cls, payload: Dict[str, Any]) -> 'FuelExpenseDTO':
        payload = payload or {}
        errors: Dict[str, str] = {}
        dto = cls(
            data=parse_date(payload, 'data', errors),
            valor=parse_decimal(payload, 'valor', errors),
            litros=parse_decimal(payload, 'litros', errors, required=False),
        )
        raise_if_errors(errors)
        return dto

    def to_db_doc(self) -> Dict[str, Any]:
        return strip_none({'data': self.data, 'valor': self.valor, 'litros': self.litros})


class GeneralExpenseDTO:
    """Data Transfer Object for general expenses."""

    def __init__(
        self,
        expense_id: Optional[str] = None,
        data: Optional[str] = None,
        valor: Optional[float] = None,
        description: Optional[str] = None,
        payment_method: Optional[str] = None,
        category: Optional[str] = None,
        current_installment: Optional[int] = None,
        total_installments: Optional[int] = None,
    ):
        self.expense_id = expense_id
        self.data = data
        self.valor = float(valor) if valor is not None else None
        self.description = description
        self.payment_method = payment_method
        self.category = category
        self.current_installment = current_installment
        self.total_installments = total_installments

    @property
    def has_installments(self) -> bool:
        return bool(self.total_installments)

    @classmethod
    def from_request(cls, payload: Dict[str, Any]) -> 'GeneralExpenseDTO':
        """Validate a create payload.

        `category` is optional here; when absent the caller asks the
        categorization service. PIX purchases never carry installments.
        """
        payload = payload or {}
        errors: Dict[str, str] = {}
        method = parse_choice(payload, 'paymentMethod', PaymentMethod.all(), errors)
        current = total = None
        if PaymentMethod.is_installment(method):
            total = parse_positive_int(payload, 'totalInstallments', errors, default=1)
            current = 1 if total else None
        category = None
        if payload.get('category'):
            category = parse_choice(payload, 'category', ExpenseCategory.all(), errors)
        dto = cls(
            data=parse_date(payload, 'data', errors),
            valor=parse_decimal(payload, 'valor', errors),
            description=parse_text(payload, 'description', errors, min_length=3),
            payment_method=method,
            category=category,
            current_installment=current,
            total_installments=total,
        )
        raise_if_errors(errors)
        return dto

    def to_db_doc(self) -> Dict[str, Any]:
        return strip_none({
            'data': self.data,
            'valor': self.valor,
            'description': self.description,
            'paymentMethod': self.payment_method,
            'category': self.category,
            'currentInstallment': self.current_installment,
            'totalInstallments': self.total_installments,
        })
