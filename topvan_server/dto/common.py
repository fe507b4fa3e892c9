from typing import List


class PaymentStatus:
    PAGO = 'Pago'
    PENDENTE = 'Pendente'
    ARQUIVADO = 'Arquivado'

    @classmethod
    def all(cls) -> List[str]:
        return [cls.PAGO, cls.PENDENTE, cls.ARQUIVADO]

    @classmethod
    def student_values(cls) -> List[str]:
        return [cls.PAGO, cls.PENDENTE]

    @classmethod
    def toggled(cls, status: str) -> str:
        return cls.PENDENTE if status == cls.PAGO else cls.PAGO


def strip_none(doc):
    return {k: v for k, v in doc.items() if v is not None}
