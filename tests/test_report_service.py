from datetime import date

from topvan_server.dto.common import PaymentStatus
from topvan_server.services import report_service

STUDENTS = [
    {'id': '1', 'name': 'A', 'valorMensalidade': 450.0, 'statusPagamento': PaymentStatus.PAGO,
     'turno': 'Manhã', 'institutionId': 'i1'},
    {'id': '2', 'name': 'B', 'valorMensalidade': 400.0, 'statusPagamento': PaymentStatus.PENDENTE,
     'turno': 'Noite', 'institutionId': 'gone'},
]


def test_student_totals():
    assert report_service.total_receivable(STUDENTS) == 450.0
    assert report_service.total_pending(STUDENTS) == 400.0


def test_trip_totals_ignore_archived():
    trips = [
        {'valor': 900.0, 'statusPagamento': PaymentStatus.PAGO},
        {'valor': 500.0, 'statusPagamento': PaymentStatus.PENDENTE},
        {'valor': 700.0, 'statusPagamento': PaymentStatus.ARQUIVADO},
    ]
    assert report_service.trip_revenue(trips) == 900.0
    assert report_service.trip_pending(trips) == 500.0


def test_period_amount():
    assert report_service.period_amount({'valor': 300.0, 'totalInstallments': 3, 'currentInstallment': 1}) == 100.0
    assert report_service.period_amount({'valor': 45.5}) == 45.5


def test_net_profit_identity():
    trips = [{'valor': 900.0, 'statusPagamento': PaymentStatus.PAGO}]
    fuel = [{'valor': 250.0}, {'valor': 150.0}]
    expenses = [{'valor': 300.0, 'totalInstallments': 3}, {'valor': 50.0}]
    gross = report_service.gross_revenue(STUDENTS, trips)
    assert gross == 1350.0
    assert report_service.net_profit(STUDENTS, trips, fuel, expenses) == gross - (400.0 + 150.0)


def test_empty_lists_yield_zero():
    assert report_service.net_profit([], [], [], []) == 0
    summary = report_service.build_monthly_summary([], [], [], [])
    assert summary['netProfit'] == 0
    assert summary['categoryBreakdown'] == []
    assert summary['display']['netProfit'] == 'R$ 0,00'


def test_category_breakdown_uses_fixed_order_and_fallback():
    expenses = [
        {'valor': 20.0, 'category': 'Outros'},
        {'valor': 300.0, 'totalInstallments': 3, 'category': 'Manutenção do Veículo'},
        {'valor': 30.0, 'category': 'Alimentação'},
        {'valor': 10.0, 'category': 'Combustível'},
    ]
    breakdown = report_service.category_breakdown(expenses)
    assert list(breakdown.items()) == [
        ('Alimentação', 30.0),
        ('Manutenção do Veículo', 100.0),
        ('Outros', 30.0),
    ]


def test_institution_name_resolves_or_na():
    institutions = [{'id': 'i1', 'name': 'UNIP'}]
    assert report_service.institution_name(STUDENTS[0], institutions) == 'UNIP'
    assert report_service.institution_name(STUDENTS[1], institutions) == 'N/A'


def test_students_by_turno():
    grouped = report_service.students_by_turno(STUDENTS)
    assert [s['id'] for s in grouped['Manhã']] == ['1']
    assert [s['id'] for s in grouped['Noite']] == ['2']


def test_split_trips_includes_today_as_upcoming():
    trips = [{'data': '2024-05-15'}, {'data': '2024-05-14'}]
    split = report_service.split_trips_by_date(trips, date(2024, 5, 15))
    assert split['upcoming'] == [{'data': '2024-05-15'}]
    assert split['completed'] == [{'data': '2024-05-14'}]


def test_build_monthly_summary_does_not_mutate_input():
    students = [dict(s) for s in STUDENTS]
    summary = report_service.build_monthly_summary(students, [], [{'valor': 100.0}], [])
    assert students == STUDENTS
    assert summary['grossRevenue'] == 450.0
    assert summary['totalExpenses'] == 100.0
    assert summary['netProfit'] == 350.0
    assert summary['display']['grossRevenue'] == 'R$ 450,00'
    assert summary['counts']['studentsPaid'] == 1
