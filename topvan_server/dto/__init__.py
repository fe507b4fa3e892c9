from . import common as _common
from . import institution_dto as _institution_dto
from . import student_dto as _student_dto
from . import trip_dto as _trip_dto
from . import expense_dto as _expense_dto

PaymentStatus = _common.PaymentStatus
InstitutionDTO = _institution_dto.InstitutionDTO
StudentDTO = _student_dto.StudentDTO
Turno = _student_dto.Turno
TripDTO = _trip_dto.TripDTO
FuelExpenseDTO = _expense_dto.FuelExpenseDTO
GeneralExpenseDTO = _expense_dto.GeneralExpenseDTO
ExpenseCategory = _expense_dto.ExpenseCategory
PaymentMethod = _expense_dto.PaymentMethod

__all__ = [
    'PaymentStatus', 'InstitutionDTO', 'StudentDTO', 'Turno', 'TripDTO',
    'FuelExpenseDTO', 'GeneralExpenseDTO', 'ExpenseCategory', 'PaymentMethod'
]
