"""Expense categorization: free-text description -> one ExpenseCategory label."""
import json
import logging
from typing import Optional

from topvan_server.dto.expense_dto import ExpenseCategory
from topvan_server.exception.CategorizationUnavailable import CategorizationUnavailable

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    'Você é um assistente financeiro. Sua tarefa é categorizar um gasto com base em sua descrição.'
)

PROMPT_TEMPLATE = (
    'As categorias disponíveis são: {categories}.\n\n'
    'Analise a descrição do gasto e atribua a categoria mais apropriada. '
    'Se nenhuma categoria se encaixar perfeitamente, use "Outros".\n'
    'Responda apenas com o nome exato da categoria.\n\n'
    'Descrição do Gasto: {description}'
)


class CategorizationService:

    def __init__(self, ai_service):
        self.ai = ai_service

    def categorize(self, description: str) -> str:
        """Return one of ExpenseCategory.all(); Outros when unsure or AI is not configured.

        Raises CategorizationUnavailable when the AI call itself fails.
        """
        if not description or not description.strip():
            return ExpenseCategory.OUTROS
        if not self.ai.is_configured():
            logger.info('AI categorization not configured; using %s', ExpenseCategory.OUTROS)
            return ExpenseCategory.OUTROS

        prompt = PROMPT_TEMPLATE.format(
            categories=', '.join(ExpenseCategory.all()),
            description=description.strip(),
        )
        try:
            result = self.ai.query(prompt, system_prompt=SYSTEM_PROMPT, max_tokens=20, temperature=0)
        except Exception as e:
            raise CategorizationUnavailable(f'Expense categorization failed: {e}', cause=e) from e

        category = ExpenseCategory.normalize(_extract_label(result.get('content')))
        logger.info('Categorized %r as %s', description, category)
        return category


def _extract_label(content: Optional[str]) -> Optional[str]:
    if not content:
        return None
    text = content.strip()
    if text.startswith('{'):
        try:
            return json.loads(text).get('category')
        except (ValueError, AttributeError):
            return None
    return text.splitlines()[0]
