import logging
from typing import Any, Dict

from topvan_server.dto.expense_dto import FuelExpenseDTO, GeneralExpenseDTO

logger = logging.getLogger(__name__)


def create_fuel_expense(fuel_repo: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and insert a fuel expense. Returns the stored document."""
    dto = FuelExpenseDTO.from_request(payload)
    expense_id = fuel_repo.create(dto.to_db_doc())
    return fuel_repo.get(expense_id)


def create_general_expense(expense_repo: Any, categorizer: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Validate and insert a general expense.

    When no category is supplied the description is sent to the
    categorizer; if that call fails nothing is stored and the error
    propagates so the caller can retry.
    """
    dto = GeneralExpenseDTO.from_request(payload)
    if not dto.category:
        dto.category = categorizer.categorize(dto.description)
    expense_id = expense_repo.create(dto.to_db_doc())
    if dto.has_installments:
        logger.info('General expense %s in %s installments', expense_id, dto.total_installments)
    return expense_repo.get(expense_id)
