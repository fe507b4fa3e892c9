"""Financial aggregation for the monthly dashboard.

Every function here is pure: it reads already-fetched lists of documents
(dicts as returned by the repositories), never touches the store and never
mutates its input.
"""
from collections import OrderedDict
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from topvan_server.dto.common import PaymentStatus
from topvan_server.dto.expense_dto import ExpenseCategory
from topvan_server.dto.student_dto import Turno
from topvan_server.utils.formatting import format_currency

NOT_AVAILABLE = 'N/A'

Doc = Dict[str, Any]


def _sum(values: Iterable[float]) -> float:
    return float(sum(values, 0.0))


def _amount(doc: Doc, field: str) -> float:
    return float(doc.get(field) or 0)


def total_receivable(students: List[Doc]) -> float:
    """Monthly fees already received (statusPagamento == Pago)."""
    return _sum(_amount(s, 'valorMensalidade') for s in students
                if s.get('statusPagamento') == PaymentStatus.PAGO)


def total_pending(students: List[Doc]) -> float:
    """Monthly fees still due (statusPagamento == Pendente)."""
    return _sum(_amount(s, 'valorMensalidade') for s in students
                if s.get('statusPagamento') == PaymentStatus.PENDENTE)


def trip_revenue(trips: List[Doc]) -> float:
    return _sum(_amount(t, 'valor') for t in trips if t.get('statusPagamento') == PaymentStatus.PAGO)


def trip_pending(trips: List[Doc]) -> float:
    return _sum(_amount(t, 'valor') for t in trips if t.get('statusPagamento') == PaymentStatus.PENDENTE)


def period_amount(expense: Doc) -> float:
    """Per-period cost of a general expense: valor / totalInstallments, or valor."""
    total = expense.get('totalInstallments')
    valor = _amount(expense, 'valor')
    return valor / total if total else valor


def fuel_total(fuel_expenses: List[Doc]) -> float:
    return _sum(_amount(f, 'valor') for f in fuel_expenses)


def general_expenses_total(expenses: List[Doc]) -> float:
    return _sum(period_amount(e) for e in expenses)


def gross_revenue(students: List[Doc], trips: List[Doc]) -> float:
    return total_receivable(students) + trip_revenue(trips)


def net_profit(students: List[Doc], trips: List[Doc], fuel_expenses: List[Doc], expenses: List[Doc]) -> float:
    return gross_revenue(students, trips) - (fuel_total(fuel_expenses) + general_expenses_total(expenses))


def category_breakdown(expenses: List[Doc]) -> Dict[str, float]:
    """Sum of period amounts per category, in the fixed category order.

    Categories with no expenses are omitted; unknown labels count as Outros.
    """
    totals: Dict[str, float] = {}
    for expense in expenses:
        category = ExpenseCategory.normalize(expense.get('category'))
        totals[category] = totals.get(category, 0.0) + period_amount(expense)
    return OrderedDict((c, totals[c]) for c in ExpenseCategory.all() if c in totals)


def institution_name(student: Doc, institutions: List[Doc]) -> str:
    """Resolve the student's institution name; dangling references show as N/A."""
    wanted = student.get('institutionId')
    for institution in institutions:
        if institution.get('id') == wanted:
            return institution.get('name') or NOT_AVAILABLE
    return NOT_AVAILABLE


def students_by_turno(students: List[Doc]) -> Dict[str, List[Doc]]:
    grouped: Dict[str, List[Doc]] = OrderedDict((t, []) for t in Turno.all())
    for student in students:
        grouped.setdefault(student.get('turno') or NOT_AVAILABLE, []).append(student)
    return grouped


def split_trips_by_date(trips: List[Doc], today: date) -> Dict[str, List[Doc]]:
    """Split trips into upcoming (today or later, soonest first) and completed (most recent first)."""
    cutoff = today.isoformat()
    ordered = sorted(trips, key=lambda t: t.get('data') or '')
    upcoming = [t for t in ordered if (t.get('data') or '') >= cutoff]
    completed = [t for t in ordered if (t.get('data') or '') < cutoff]
    completed.reverse()
    return {'upcoming': upcoming, 'completed': completed}


def build_monthly_summary(students: List[Doc], trips: List[Doc], fuel_expenses: List[Doc],
                          expenses: List[Doc], institutions: Optional[List[Doc]] = None) -> Dict[str, Any]:
    """Dashboard payload: revenue, costs, profit and category breakdown."""
    receivable = total_receivable(students)
    pending = total_pending(students)
    revenue_trips = trip_revenue(trips)
    pending_trips = trip_pending(trips)
    fuel = fuel_total(fuel_expenses)
    general = general_expenses_total(expenses)
    gross = receivable + revenue_trips
    profit = gross - (fuel + general)
    figures = {
        'totalReceivable': receivable,
        'totalPending': pending,
        'tripRevenue': revenue_trips,
        'tripPending': pending_trips,
        'grossRevenue': gross,
        'fuelTotal': fuel,
        'generalExpensesTotal': general,
        'totalExpenses': fuel + general,
        'netProfit': profit,
    }
    breakdown = category_breakdown(expenses)
    return {
        **figures,
        'categoryBreakdown': [{'category': c, 'total': v} for c, v in breakdown.items()],
        'counts': {
            'students': len(students),
            'studentsPaid': sum(1 for s in students if s.get('statusPagamento') == PaymentStatus.PAGO),
            'trips': len(trips),
            'fuelExpenses': len(fuel_expenses),
            'generalExpenses': len(expenses),
            'institutions': len(institutions or []),
        },
        'display': {k: format_currency(v) for k, v in figures.items()},
    }
