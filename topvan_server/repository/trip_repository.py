import logging

from topvan_server.dto.common import PaymentStatus
from topvan_server.exception.ValidationError import ValidationError
from topvan_server.repository.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TripRepository(BaseRepository):
    collection_name = 'trips'
    default_sort = [('data', -1)]

    def find_return_leg(self, outbound_id):
        """Return the return leg paired with `outbound_id`, or None."""
        legs = self.find({'idaTripId': outbound_id, 'isReturnTrip': True})
        if len(legs) > 1:
            logger.warning('Trip %s has %s return legs', outbound_id, len(legs))
        return legs[0] if legs else None

    def find_return_legs(self, outbound_id):
        return self.find({'idaTripId': outbound_id, 'isReturnTrip': True})

    def toggle_payment(self, trip_id):
        """Flip Pago <-> Pendente and return the new status.

        Archived trips only leave Arquivado through a manual edit.
        """
        trip = self.get(trip_id)
        status = trip.get('statusPagamento')
        if status == PaymentStatus.ARQUIVADO:
            raise ValidationError({'statusPagamento': 'Archived trips cannot be toggled; edit the trip instead.'})
        new_status = PaymentStatus.toggled(status)
        self.update(trip_id, {'statusPagamento': new_status})
        return new_status

    def archive_paid_trips(self):
        """Move every Pago trip to Arquivado in one batch. Returns the count."""
        paid = self.find({'statusPagamento': PaymentStatus.PAGO})
        if not paid:
            return 0
        batch = self.store.batch()
        for trip in paid:
            batch.update(self.collection_name, trip['id'], {'statusPagamento': PaymentStatus.ARQUIVADO})
        batch.commit()
        logger.info('Archived %s paid trips', len(paid))
        return len(paid)

    def delete_all_trips(self):
        return self.delete_all()
