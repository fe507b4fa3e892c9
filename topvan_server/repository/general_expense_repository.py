import logging

from topvan_server.repository.base_repository import BaseRepository
from topvan_server.repository.patch import Patch

logger = logging.getLogger(__name__)


class GeneralExpenseRepository(BaseRepository):
    collection_name = 'generalExpenses'
    default_sort = [('data', -1)]

    def reset_installments(self):
        """Roll general expenses over to the next month in one batch.

        - no installment fields: deleted
        - currentInstallment < totalInstallments: currentInstallment += 1
        - last installment consumed: deleted

        Returns {'advanced': n, 'deleted': n}.
        """
        expenses = self.find()
        advanced = deleted = 0
        if not expenses:
            return {'advanced': 0, 'deleted': 0}
        batch = self.store.batch()
        for expense in expenses:
            current = expense.get('currentInstallment')
            total = expense.get('totalInstallments')
            if current is not None and total and int(current) < int(total):
                batch.update(self.collection_name, expense['id'],
                             Patch().set('currentInstallment', int(current) + 1))
                advanced += 1
            else:
                batch.delete(self.collection_name, expense['id'])
                deleted += 1
        batch.commit()
        logger.info('General expenses reset: %s advanced, %s deleted', advanced, deleted)
        return {'advanced': advanced, 'deleted': deleted}
