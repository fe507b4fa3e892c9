"""Trip pairing rules (outbound "ida" / return "volta" legs).

The store has no transactions, so multi-record changes are ordered such
that a failure half way never leaves a return leg without its parent.
"""
import logging
from typing import Any, Dict, Optional

from topvan_server.dto.trip_dto import RETURN_PREFIX, TripDTO
from topvan_server.exception.ValidationError import ValidationError
from topvan_server.repository.patch import Patch
from topvan_server.services import report_service
from topvan_server.utils.time_utils import today_local

logger = logging.getLogger(__name__)

_UNSET = object()


class TripService:

    def __init__(self, trip_repo, tz_name: Optional[str] = None):
        self.trips = trip_repo
        self.tz_name = tz_name

    # ------------------------------------------------------------------ reads

    def list_trips(self, view: Optional[str] = None, status: Optional[str] = None, today=None):
        query = {'statusPagamento': status} if status else None
        trips = self.trips.find(query)
        if not view:
            return trips
        if view not in ('upcoming', 'completed'):
            raise ValidationError({'view': 'view must be upcoming or completed.'})
        split = report_service.split_trips_by_date(trips, today or today_local(self.tz_name))
        return split[view]

    # ----------------------------------------------------------------- create

    def create_trip(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create a trip; with a return date, also create its paired return leg.

        The outbound id is only known after the first insert, so the
        outbound's idaTripId is patched in a second write.
        """
        dto = TripDTO.from_request(payload)
        outbound_id = self.trips.create(dto.to_db_doc())
        if not dto.wants_return:
            return {'trip': self.trips.get(outbound_id), 'returnTrip': None}

        try:
            leg_id = self._create_return_leg(outbound_id, dto.destino, dto.data_volta)
        except Exception:
            logger.exception('Failed to create return leg for trip %s; removing outbound', outbound_id)
            self._rollback_outbound(outbound_id)
            raise
        return {'trip': self.trips.get(outbound_id), 'returnTrip': self.trips.get(leg_id)}

    def _create_return_leg(self, outbound_id, destino, data_volta):
        if self.trips.find_return_leg(outbound_id) is not None:
            raise ValidationError({'dataVolta': f'Trip {outbound_id} already has a return leg.'})
        leg = TripDTO.return_leg_for(outbound_id, destino, data_volta)
        leg_id = self.trips.create(leg.to_db_doc())
        try:
            self.trips.update(outbound_id, {'idaTripId': outbound_id, 'temVolta': True})
        except Exception:
            self._delete_quietly(leg_id)
            raise
        logger.info('Paired trip %s with return leg %s', outbound_id, leg_id)
        return leg_id

    def _rollback_outbound(self, outbound_id):
        """Remove a half created pair: return legs first, then the outbound."""
        try:
            legs = self.trips.find_return_legs(outbound_id)
        except Exception:
            logger.exception('Could not look up return legs of trip %s during rollback', outbound_id)
            legs = []
        for leg in legs:
            self._delete_quietly(leg['id'])
        self._delete_quietly(outbound_id)

    def _delete_quietly(self, trip_id):
        try:
            self.trips.delete(trip_id)
        except Exception:
            logger.exception('Rollback delete of trip %s failed', trip_id)

    # ------------------------------------------------------------------- edit

    def update_trip(self, trip_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        fields = TripDTO.parse_update(payload)
        trip = self.trips.get(trip_id)

        if trip.get('isReturnTrip'):
            if 'dataVolta' in fields or fields.get('temVolta'):
                raise ValidationError({'dataVolta': 'A return leg cannot have its own return trip.'})
            # valor stays 0 and destino follows the outbound
            derived = {name: 'Set by the outbound trip; edit the outbound instead.'
                       for name in ('valor', 'destino') if name in fields}
            if derived:
                raise ValidationError(derived)
            fields.pop('temVolta', None)
            self.trips.update(trip_id, self._plain_patch(fields))
            return {'trip': self.trips.get(trip_id), 'returnTrip': None}

        tem_volta = fields.pop('temVolta', None)
        data_volta = fields.pop('dataVolta', _UNSET)
        patch = self._plain_patch(fields)

        turning_off = tem_volta is False or (data_volta is None and tem_volta is not True)
        if turning_off:
            # field removed, not nulled; the return leg is left for an explicit delete
            patch.set('temVolta', False).delete('dataVolta')
            self.trips.update(trip_id, patch)
            return {'trip': self.trips.get(trip_id), 'returnTrip': self.trips.find_return_leg(trip_id)}

        if data_volta is _UNSET or data_volta is None:
            data_volta = trip.get('dataVolta') if tem_volta else None
            if tem_volta and not data_volta:
                raise ValidationError({'dataVolta': 'dataVolta is required when temVolta is true.'})

        data = fields.get('data') or trip.get('data')
        stored_volta = trip.get('dataVolta') if trip.get('temVolta') else None
        return_date = data_volta or stored_volta
        if return_date and data and return_date < data:
            raise ValidationError({'dataVolta': 'dataVolta cannot be before data.'})

        if data_volta:
            patch.set('dataVolta', data_volta).set('temVolta', True)
        self.trips.update(trip_id, patch)

        destino = fields.get('destino') or trip.get('destino')
        leg = self.trips.find_return_leg(trip_id)
        if data_volta and leg is None:
            self._create_return_leg(trip_id, destino, data_volta)
        elif leg is not None:
            self._sync_return_leg(leg, destino, data_volta)
        return {'trip': self.trips.get(trip_id), 'returnTrip': self.trips.find_return_leg(trip_id)}

    def _sync_return_leg(self, leg, destino, data_volta):
        leg_patch = Patch()
        if data_volta and leg.get('data') != data_volta:
            leg_patch.set('data', data_volta)
        wanted = f'{RETURN_PREFIX}{destino}'
        if destino and leg.get('destino') != wanted:
            leg_patch.set('destino', wanted)
        if leg_patch:
            self.trips.update(leg['id'], leg_patch)

    @staticmethod
    def _plain_patch(fields):
        patch = Patch()
        for name, value in fields.items():
            if value is None:
                patch.delete(name)
            else:
                patch.set(name, value)
        return patch

    # ----------------------------------------------------------------- delete

    def delete_trip(self, trip_id: str) -> Dict[str, Any]:
        """Delete a trip while keeping the pairing consistent.

        - return leg: the parent stops claiming a return (temVolta=False,
          dataVolta removed) before the leg is deleted
        - outbound: its return leg is deleted first, then the outbound itself
        """
        trip = self.trips.get(trip_id)
        if trip.get('isReturnTrip'):
            parent_id = trip.get('idaTripId')
            parent = self.trips.find_one(parent_id) if parent_id else None
            if parent is not None:
                self.trips.update(parent_id, Patch().set('temVolta', False).delete('dataVolta'))
            else:
                logger.warning('Return leg %s references missing trip %s', trip_id, parent_id)
            self.trips.delete(trip_id)
            return {'deleted': [trip_id], 'updated': [parent_id] if parent is not None else []}

        deleted = []
        for leg in self.trips.find_return_legs(trip_id):
            self.trips.delete(leg['id'])
            deleted.append(leg['id'])
        self.trips.delete(trip_id)
        deleted.append(trip_id)
        return {'deleted': deleted, 'updated': []}

    # ---------------------------------------------------------------- payment

    def toggle_payment(self, trip_id: str) -> str:
        return self.trips.toggle_payment(trip_id)

    def archive_paid_trips(self) -> int:
        return self.trips.archive_paid_trips()
