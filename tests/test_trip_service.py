from datetime import date

import pytest

from topvan_server.dto.common import PaymentStatus
from topvan_server.exception import StoreUnavailable, ValidationError
from topvan_server.services.trip_service import TripService


@pytest.fixture
def service(registry):
    return TripService(registry.trip)


def _paired(service, **overrides):
    payload = {'destino': 'Santos', 'data': '2024-05-01', 'valor': '1.500,00', 'dataVolta': '2024-05-03'}
    payload.update(overrides)
    return service.create_trip(payload)


class TestCreate:

    def test_with_return_date_creates_exactly_two_records(self, service, registry):
        result = _paired(service)
        trips = registry.trip.find()
        assert len(trips) == 2

        outbound, leg = result['trip'], result['returnTrip']
        assert outbound['idaTripId'] == outbound['id']
        assert outbound['temVolta'] is True
        assert outbound['dataVolta'] == '2024-05-03'
        assert outbound['valor'] == 1500.0
        assert leg['isReturnTrip'] is True
        assert leg['idaTripId'] == outbound['id']
        assert leg['destino'] == 'Volta de Santos'
        assert leg['valor'] == 0
        assert leg['temVolta'] is False
        assert leg['data'] == '2024-05-03'
        assert leg['statusPagamento'] == PaymentStatus.PENDENTE

    def test_without_return_date_is_standalone(self, service, registry):
        result = service.create_trip({'destino': 'Campinas', 'data': '2024-05-01', 'valor': 800})
        assert result['returnTrip'] is None
        trip = result['trip']
        assert trip['temVolta'] is False
        assert 'dataVolta' not in trip
        assert 'idaTripId' not in trip
        assert len(registry.trip.find()) == 1

    def test_new_trips_are_always_pending(self, service):
        result = service.create_trip({'destino': 'Campinas', 'data': '2024-05-01', 'valor': 800,
                                      'statusPagamento': PaymentStatus.PAGO})
        assert result['trip']['statusPagamento'] == PaymentStatus.PENDENTE

    def test_return_before_departure_rejected(self, service, registry):
        with pytest.raises(ValidationError) as exc:
            _paired(service, dataVolta='2024-04-30')
        assert 'dataVolta' in exc.value.errors
        assert registry.trip.find() == []

    def test_failed_return_leg_removes_outbound(self, service, registry, monkeypatch):
        original = registry.trip.create
        calls = []

        def flaky_create(data):
            calls.append(data)
            if len(calls) == 2:
                raise StoreUnavailable('down')
            return original(data)

        monkeypatch.setattr(registry.trip, 'create', flaky_create)
        with pytest.raises(StoreUnavailable):
            _paired(service)
        assert registry.trip.find() == []

    def test_failed_pairing_update_removes_leg_and_outbound(self, service, registry, monkeypatch):
        def broken_update(doc_id, fields):
            raise StoreUnavailable('down')

        monkeypatch.setattr(registry.trip, 'update', broken_update)
        with pytest.raises(StoreUnavailable):
            _paired(service)
        assert registry.trip.find() == []

    def test_failed_pairing_update_on_edit_removes_new_leg(self, service, registry, monkeypatch):
        trip_id = service.create_trip({'destino': 'Campinas', 'data': '2024-05-01', 'valor': 800})['trip']['id']
        original = registry.trip.update
        calls = []

        def flaky_update(doc_id, fields):
            calls.append(doc_id)
            if len(calls) == 2:
                raise StoreUnavailable('down')
            return original(doc_id, fields)

        monkeypatch.setattr(registry.trip, 'update', flaky_update)
        with pytest.raises(StoreUnavailable):
            service.update_trip(trip_id, {'dataVolta': '2024-05-02'})
        assert registry.trip.find({'isReturnTrip': True}) == []


class TestUpdate:

    def test_turning_off_return_deletes_data_volta(self, service, registry):
        result = _paired(service)
        outbound_id = result['trip']['id']
        updated = service.update_trip(outbound_id, {'temVolta': False})
        trip = registry.trip.get(outbound_id)
        assert trip['temVolta'] is False
        assert 'dataVolta' not in trip
        # the leg stays until explicitly deleted
        assert updated['returnTrip']['id'] == result['returnTrip']['id']

    def test_adding_return_date_creates_leg(self, service, registry):
        trip_id = service.create_trip({'destino': 'Campinas', 'data': '2024-05-01', 'valor': 800})['trip']['id']
        result = service.update_trip(trip_id, {'dataVolta': '2024-05-02'})
        assert result['trip']['temVolta'] is True
        assert result['trip']['idaTripId'] == trip_id
        assert result['returnTrip']['destino'] == 'Volta de Campinas'
        assert len(registry.trip.find()) == 2

    def test_adding_return_date_twice_keeps_one_leg(self, service, registry):
        trip_id = service.create_trip({'destino': 'Campinas', 'data': '2024-05-01', 'valor': 800})['trip']['id']
        service.update_trip(trip_id, {'dataVolta': '2024-05-02'})
        service.update_trip(trip_id, {'dataVolta': '2024-05-04'})
        legs = registry.trip.find({'isReturnTrip': True})
        assert len(legs) == 1
        assert legs[0]['data'] == '2024-05-04'

    def test_renaming_outbound_renames_leg(self, service):
        outbound_id = _paired(service)['trip']['id']
        result = service.update_trip(outbound_id, {'destino': 'Rio de Janeiro'})
        assert result['trip']['dataVolta'] == '2024-05-03'
        assert result['returnTrip']['destino'] == 'Volta de Rio de Janeiro'

    def test_manual_edit_may_set_any_status(self, service):
        outbound_id = _paired(service)['trip']['id']
        result = service.update_trip(outbound_id, {'statusPagamento': PaymentStatus.ARQUIVADO})
        assert result['trip']['statusPagamento'] == PaymentStatus.ARQUIVADO

    def test_return_leg_cannot_get_return_date(self, service):
        leg_id = _paired(service)['returnTrip']['id']
        with pytest.raises(ValidationError):
            service.update_trip(leg_id, {'dataVolta': '2024-05-10'})

    def test_return_leg_keeps_derived_fields(self, service, registry):
        leg_id = _paired(service)['returnTrip']['id']
        with pytest.raises(ValidationError) as exc:
            service.update_trip(leg_id, {'valor': 500, 'destino': 'Outro lugar'})
        assert set(exc.value.errors) == {'valor', 'destino'}
        leg = registry.trip.get(leg_id)
        assert leg['valor'] == 0
        assert leg['destino'] == 'Volta de Santos'

    def test_return_leg_status_still_editable(self, service):
        leg_id = _paired(service)['returnTrip']['id']
        result = service.update_trip(leg_id, {'statusPagamento': PaymentStatus.PAGO})
        assert result['trip']['statusPagamento'] == PaymentStatus.PAGO

    def test_moving_departure_after_stored_return_rejected(self, service, registry):
        outbound_id = _paired(service)['trip']['id']
        with pytest.raises(ValidationError) as exc:
            service.update_trip(outbound_id, {'data': '2024-05-10'})
        assert 'dataVolta' in exc.value.errors
        assert registry.trip.get(outbound_id)['data'] == '2024-05-01'


class TestDelete:

    def test_deleting_outbound_leaves_no_reference(self, service, registry):
        result = _paired(service)
        outbound_id = result['trip']['id']
        outcome = service.delete_trip(outbound_id)
        assert set(outcome['deleted']) == {outbound_id, result['returnTrip']['id']}
        assert registry.trip.find({'idaTripId': outbound_id}) == []

    def test_deleting_return_leg_clears_parent(self, service, registry):
        result = _paired(service)
        outbound_id = result['trip']['id']
        outcome = service.delete_trip(result['returnTrip']['id'])
        assert outcome['updated'] == [outbound_id]
        parent = registry.trip.get(outbound_id)
        assert parent['temVolta'] is False
        assert 'dataVolta' not in parent
        assert len(registry.trip.find()) == 1

    def test_deleting_return_leg_with_missing_parent(self, service, registry):
        leg_id = registry.trip.create({'destino': 'Volta de X', 'isReturnTrip': True, 'idaTripId': 'gone'})
        assert service.delete_trip(leg_id) == {'deleted': [leg_id], 'updated': []}
        assert registry.trip.find() == []


class TestList:

    def test_split_by_view(self, service, registry):
        for day in ('2024-05-01', '2024-06-10', '2024-04-01', '2024-06-01'):
            registry.trip.create({'destino': day, 'data': day, 'valor': 0.0})
        today = date(2024, 5, 15)
        upcoming = service.list_trips(view='upcoming', today=today)
        completed = service.list_trips(view='completed', today=today)
        assert [t['data'] for t in upcoming] == ['2024-06-01', '2024-06-10']
        assert [t['data'] for t in completed] == ['2024-05-01', '2024-04-01']

    def test_unknown_view_rejected(self, service):
        with pytest.raises(ValidationError):
            service.list_trips(view='someday')
