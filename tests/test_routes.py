from topvan_server.dto.common import PaymentStatus
from topvan_server.exception import CategorizationUnavailable, StoreUnavailable
from topvan_server.repository.memory_store import InMemoryStore


def _student(client, institution_id, **overrides):
    payload = {'name': 'Ana Silva', 'institutionId': institution_id, 'valorMensalidade': '450,00',
               'turno': 'Manhã'}
    payload.update(overrides)
    resp = client.post('/api/students', json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()['student']


def test_health(client):
    resp = client.get('/api/health')
    body = resp.get_json()
    assert resp.status_code == 200
    assert body['success'] is True
    assert body['status'] == 'ok'
    assert 'api_key' not in body['config']['openai']


class TestInstitutions:

    def test_create_list_and_duplicate(self, client):
        assert client.post('/api/institutions', json={'name': 'UNIP'}).status_code == 201
        dup = client.post('/api/institutions', json={'name': 'unip'})
        assert dup.status_code == 400
        assert 'name' in dup.get_json()['errors']
        names = [i['name'] for i in client.get('/api/institutions').get_json()['institutions']]
        assert names == ['UNIP']

    def test_non_json_body_rejected(self, client):
        resp = client.post('/api/institutions', data='name=UNIP')
        assert resp.status_code == 400
        assert resp.get_json()['success'] is False


class TestStudents:

    def test_list_includes_institution_name_and_filters(self, client):
        unip = client.post('/api/institutions', json={'name': 'UNIP'}).get_json()['institution']
        _student(client, unip['id'])
        _student(client, 'deleted-institution', name='Carlos Dias', turno='Noite')

        students = client.get('/api/students').get_json()['students']
        assert {s['name']: s['institutionName'] for s in students} == {
            'Ana Silva': 'UNIP', 'Carlos Dias': 'N/A',
        }
        night = client.get('/api/students?turno=Noite').get_json()['students']
        assert [s['name'] for s in night] == ['Carlos Dias']
        assert client.get('/api/students?turno=Tarde').status_code == 400

        grouped = client.get('/api/students?groupBy=turno').get_json()['byTurno']
        assert [s['name'] for s in grouped['Manhã']] == ['Ana Silva']
        assert [s['name'] for s in grouped['Noite']] == ['Carlos Dias']

    def test_partial_update_and_toggle(self, client):
        student = _student(client, 'i1')
        resp = client.patch(f"/api/students/{student['id']}", json={'observacoes': 'Portão 2'})
        updated = resp.get_json()['student']
        assert updated['observacoes'] == 'Portão 2'
        assert updated['valorMensalidade'] == 450.0

        toggled = client.post(f"/api/students/{student['id']}/toggle-payment").get_json()
        assert toggled['statusPagamento'] == PaymentStatus.PAGO

    def test_reset_payments(self, client):
        student = _student(client, 'i1', statusPagamento='Pago')
        assert client.post('/api/students/reset-payments').get_json()['studentsReset'] == 1
        listed = client.get('/api/students').get_json()['students']
        assert listed[0]['id'] == student['id']
        assert listed[0]['statusPagamento'] == PaymentStatus.PENDENTE

    def test_missing_student_is_404(self, client):
        assert client.delete('/api/students/999').status_code == 404
        assert client.patch('/api/students/999', json={'name': 'X'}).status_code == 404

    def test_invalid_payload_lists_field_errors(self, client):
        resp = client.post('/api/students', json={'name': 'Ana', 'valorMensalidade': 'quatrocentos'})
        assert resp.status_code == 400
        assert {'institutionId', 'valorMensalidade', 'turno'} <= set(resp.get_json()['errors'])


class TestTrips:

    def test_paired_lifecycle(self, client, registry_of):
        resp = client.post('/api/trips', json={'destino': 'Santos', 'data': '2024-05-01', 'valor': 900,
                                               'dataVolta': '2024-05-03'})
        assert resp.status_code == 201
        body = resp.get_json()
        outbound_id = body['trip']['id']
        assert body['returnTrip']['idaTripId'] == outbound_id

        assert len(client.get('/api/trips').get_json()['trips']) == 2

        edited = client.put(f'/api/trips/{outbound_id}', json={'temVolta': False}).get_json()
        assert 'dataVolta' not in edited['trip']

        deleted = client.delete(f'/api/trips/{outbound_id}').get_json()
        assert len(deleted['deleted']) == 2
        assert registry_of.trip.find() == []

    def test_toggle_and_archive(self, client):
        trip = client.post('/api/trips', json={'destino': 'Campinas', 'data': '2024-05-01',
                                               'valor': 500}).get_json()['trip']
        assert client.post(f"/api/trips/{trip['id']}/toggle-payment").get_json()['statusPagamento'] == 'Pago'
        assert client.post('/api/trips/archive-paid').get_json()['tripsArchived'] == 1
        assert client.post(f"/api/trips/{trip['id']}/toggle-payment").status_code == 400
        archived = client.get('/api/trips?statusPagamento=Arquivado').get_json()['trips']
        assert [t['id'] for t in archived] == [trip['id']]

    def test_view_filter(self, client):
        client.post('/api/trips', json={'destino': 'Passado', 'data': '2000-01-01', 'valor': 100})
        client.post('/api/trips', json={'destino': 'Futuro', 'data': '2999-01-01', 'valor': 100})
        upcoming = client.get('/api/trips?view=upcoming').get_json()['trips']
        completed = client.get('/api/trips?view=completed').get_json()['trips']
        assert [t['destino'] for t in upcoming] == ['Futuro']
        assert [t['destino'] for t in completed] == ['Passado']
        assert client.get('/api/trips?view=later').status_code == 400


class TestExpenses:

    def test_fuel_create_list_delete(self, client):
        resp = client.post('/api/fuel', json={'data': '2024-05-02', 'valor': '250,00', 'litros': '42'})
        assert resp.status_code == 201
        fuel_id = resp.get_json()['fuelExpense']['id']
        assert len(client.get('/api/fuel').get_json()['fuelExpenses']) == 1
        assert client.delete(f'/api/fuel/{fuel_id}').status_code == 200
        assert client.get('/api/fuel').get_json()['fuelExpenses'] == []

    def test_fuel_with_infinite_valor_rejected(self, client, registry_of):
        resp = client.post('/api/fuel', json={'data': '2024-05-01', 'valor': 'inf'})
        assert resp.status_code == 400
        assert 'valor' in resp.get_json()['errors']
        assert registry_of.fuel_expense.find() == []

    def test_expense_without_category_is_categorized(self, client, categorizer):
        resp = client.post('/api/expenses', json={'data': '2024-05-01', 'valor': '300',
                                                  'description': 'Jantar com a família',
                                                  'paymentMethod': 'Cartão Nubank', 'totalInstallments': 3})
        assert resp.status_code == 201
        expense = resp.get_json()['expense']
        assert expense['category'] == 'Alimentação'
        assert expense['currentInstallment'] == 1
        assert expense['periodAmount'] == 100.0
        assert categorizer.calls == ['Jantar com a família']

    def test_explicit_category_skips_categorizer(self, client, categorizer):
        resp = client.post('/api/expenses', json={'data': '2024-05-01', 'valor': '80', 'description': 'Consulta',
                                                  'paymentMethod': 'PIX', 'category': 'Saúde'})
        assert resp.get_json()['expense']['category'] == 'Saúde'
        assert categorizer.calls == []

    def test_categorizer_failure_stores_nothing(self, client, categorizer, registry_of):
        categorizer.error = CategorizationUnavailable('timeout')
        resp = client.post('/api/expenses', json={'data': '2024-05-01', 'valor': '80', 'description': 'Consulta',
                                                  'paymentMethod': 'PIX'})
        assert resp.status_code == 503
        assert registry_of.general_expense.find() == []

    def test_categorize_endpoint(self, client):
        resp = client.post('/api/expenses/categorize', json={'description': 'Almoço'})
        assert resp.get_json()['category'] == 'Alimentação'
        assert client.post('/api/expenses/categorize', json={}).status_code == 400


class TestDashboardAndReset:

    def test_summary_and_monthly_reset(self, client):
        _student(client, 'i1', statusPagamento='Pago')
        _student(client, 'i1', name='Bruno Costa', valorMensalidade='400')
        client.post('/api/fuel', json={'data': '2024-05-02', 'valor': 100})
        client.post('/api/expenses', json={'data': '2024-05-01', 'valor': '300', 'description': 'Pneus novos',
                                           'paymentMethod': 'Cartão Naza', 'totalInstallments': 3,
                                           'category': 'Manutenção do Veículo'})

        summary = client.get('/api/dashboard/summary').get_json()['summary']
        assert summary['totalReceivable'] == 450.0
        assert summary['totalPending'] == 400.0
        assert summary['netProfit'] == 450.0 - (100.0 + 100.0)
        assert summary['display']['totalReceivable'] == 'R$ 450,00'
        assert summary['categoryBreakdown'] == [{'category': 'Manutenção do Veículo', 'total': 100.0}]

        report = client.post('/api/month/reset').get_json()['report']
        assert report['studentsReset'] == 2
        assert report['fuelExpensesDeleted'] == 1
        assert report['generalExpensesAdvanced'] == 1
        assert report['tripPolicy'] == 'keep'

    def test_reset_policy_from_environment(self, client, monkeypatch):
        monkeypatch.setenv('RESET_TRIP_POLICY', 'archive_paid')
        report = client.post('/api/month/reset').get_json()['report']
        assert report['tripsArchived'] == 0

    def test_partial_reset_failure_is_500(self, client, registry_of, monkeypatch):
        _student(client, 'i1', statusPagamento='Pago')

        def broken():
            raise StoreUnavailable('down')

        monkeypatch.setattr(registry_of.general_expense, 'reset_installments', broken)
        resp = client.post('/api/month/reset')
        body = resp.get_json()
        assert resp.status_code == 500
        assert body['success'] is False
        assert body['completed'] == ['students', 'fuelExpenses']
        assert list(body['failed']) == ['generalExpenses']

    def test_store_outage_is_503(self, app, monkeypatch):
        def down(*args, **kwargs):
            raise StoreUnavailable('down')

        store = app.extensions['store']
        assert isinstance(store, InMemoryStore)
        monkeypatch.setattr(store, 'find', down)
        resp = app.test_client().get('/api/dashboard/summary')
        assert resp.status_code == 503
