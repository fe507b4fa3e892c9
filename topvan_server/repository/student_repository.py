import logging

from topvan_server.dto.common import PaymentStatus
from topvan_server.repository.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class StudentRepository(BaseRepository):
    collection_name = 'students'
    default_sort = [('name', 1)]

    def toggle_payment(self, student_id):
        """Flip Pago <-> Pendente and return the new status."""
        student = self.get(student_id)
        new_status = PaymentStatus.toggled(student.get('statusPagamento'))
        self.update(student_id, {'statusPagamento': new_status})
        return new_status

    def reset_all_payments(self):
        """Force statusPagamento = Pendente on every student in one batch.

        Applied unconditionally, so running it twice leaves the same state.
        Returns the number of students written.
        """
        students = self.find()
        if not students:
            return 0
        batch = self.store.batch()
        for student in students:
            batch.update(self.collection_name, student['id'], {'statusPagamento': PaymentStatus.PENDENTE})
        batch.commit()
        logger.info('Reset payment status of %s students', len(students))
        return len(students)
