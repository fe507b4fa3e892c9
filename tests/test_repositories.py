import pytest

from topvan_server.dto.common import PaymentStatus
from topvan_server.exception import NotFoundError, ValidationError
from topvan_server.repository.patch import DELETE_FIELD


def test_update_applies_only_supplied_fields(registry):
    repo = registry.student
    student_id = repo.create({'name': 'Ana', 'valorMensalidade': 450.0, 'statusPagamento': 'Pago'})
    repo.update(student_id, {'valorMensalidade': 500.0})
    assert repo.get(student_id) == {
        'id': student_id, 'name': 'Ana', 'valorMensalidade': 500.0, 'statusPagamento': 'Pago',
    }


def test_delete_field_removes_key(registry):
    repo = registry.trip
    trip_id = repo.create({'destino': 'Santos', 'dataVolta': '2024-05-02'})
    repo.delete_field(trip_id, 'dataVolta')
    assert 'dataVolta' not in repo.get(trip_id)


def test_update_with_delete_marker(registry):
    repo = registry.trip
    trip_id = repo.create({'destino': 'Santos', 'dataVolta': '2024-05-02', 'temVolta': True})
    repo.update(trip_id, {'temVolta': False, 'dataVolta': DELETE_FIELD})
    trip = repo.get(trip_id)
    assert trip['temVolta'] is False
    assert 'dataVolta' not in trip


def test_get_missing_raises_not_found(registry):
    with pytest.raises(NotFoundError) as exc:
        registry.student.get('404')
    assert exc.value.collection == 'students'


def test_listing_ordered_by_date_desc(registry):
    for day in ('2024-01-05', '2024-03-05', '2024-02-05'):
        registry.fuel_expense.create({'data': day, 'valor': 100.0})
    assert [f['data'] for f in registry.fuel_expense.find()] == ['2024-03-05', '2024-02-05', '2024-01-05']


class TestInstitutions:

    def test_create_and_list_sorted(self, registry):
        registry.institution.create_institution('UNIP')
        registry.institution.create_institution('Anhanguera')
        assert [i['name'] for i in registry.institution.find()] == ['Anhanguera', 'UNIP']

    def test_duplicate_name_ignores_case(self, registry):
        registry.institution.create_institution('UNIP')
        with pytest.raises(ValidationError) as exc:
            registry.institution.create_institution('  unip ')
        assert 'name' in exc.value.errors

    def test_blank_name_rejected(self, registry):
        with pytest.raises(ValidationError):
            registry.institution.create_institution('   ')


class TestStudents:

    def test_toggle_payment_flips_status(self, registry):
        student_id = registry.student.create({'name': 'Ana', 'statusPagamento': PaymentStatus.PENDENTE})
        assert registry.student.toggle_payment(student_id) == PaymentStatus.PAGO
        assert registry.student.toggle_payment(student_id) == PaymentStatus.PENDENTE

    def test_reset_all_payments_is_idempotent(self, registry):
        registry.student.create({'name': 'Ana', 'statusPagamento': PaymentStatus.PAGO})
        registry.student.create({'name': 'Bruno', 'statusPagamento': PaymentStatus.PENDENTE})
        assert registry.student.reset_all_payments() == 2
        first = registry.student.find()
        registry.student.reset_all_payments()
        assert registry.student.find() == first
        assert {s['statusPagamento'] for s in first} == {PaymentStatus.PENDENTE}

    def test_reset_with_no_students(self, registry):
        assert registry.student.reset_all_payments() == 0


class TestTrips:

    def test_toggle_archived_trip_rejected(self, registry):
        trip_id = registry.trip.create({'destino': 'Santos', 'statusPagamento': PaymentStatus.ARQUIVADO})
        with pytest.raises(ValidationError):
            registry.trip.toggle_payment(trip_id)

    def test_archive_paid_trips(self, registry):
        paid = registry.trip.create({'destino': 'A', 'statusPagamento': PaymentStatus.PAGO})
        pending = registry.trip.create({'destino': 'B', 'statusPagamento': PaymentStatus.PENDENTE})
        assert registry.trip.archive_paid_trips() == 1
        assert registry.trip.get(paid)['statusPagamento'] == PaymentStatus.ARQUIVADO
        assert registry.trip.get(pending)['statusPagamento'] == PaymentStatus.PENDENTE

    def test_find_return_leg(self, registry):
        outbound = registry.trip.create({'destino': 'Santos'})
        registry.trip.update(outbound, {'idaTripId': outbound})
        leg = registry.trip.create({'destino': 'Volta de Santos', 'idaTripId': outbound, 'isReturnTrip': True})
        assert registry.trip.find_return_leg(outbound)['id'] == leg
        assert registry.trip.find_return_leg(leg) is None


class TestGeneralExpenses:

    def test_reset_installments(self, registry):
        repo = registry.general_expense
        single = repo.create({'description': 'Almoço', 'valor': 30.0, 'paymentMethod': 'PIX'})
        running = repo.create({'description': 'Pneus', 'valor': 300.0, 'currentInstallment': 1,
                               'totalInstallments': 3, 'category': 'Manutenção do Veículo'})
        last = repo.create({'description': 'Curso', 'valor': 200.0, 'currentInstallment': 2,
                            'totalInstallments': 2})

        assert repo.reset_installments() == {'advanced': 1, 'deleted': 2}
        assert repo.find_one(single) is None
        assert repo.find_one(last) is None
        assert repo.get(running) == {
            'id': running, 'description': 'Pneus', 'valor': 300.0, 'currentInstallment': 2,
            'totalInstallments': 3, 'category': 'Manutenção do Veículo',
        }

    def test_fuel_delete_all(self, registry):
        registry.fuel_expense.create({'data': '2024-01-01', 'valor': 100.0})
        registry.fuel_expense.create({'data': '2024-01-02', 'valor': 120.0})
        assert registry.fuel_expense.delete_all() == 2
        assert registry.fuel_expense.find() == []
