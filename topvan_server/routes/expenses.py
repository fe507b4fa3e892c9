"""General expense routes.

Expenses created without a category are categorized from their
description before being stored.
"""
from flask import Blueprint

from topvan_server.services import report_service
from topvan_server.services.expense_service import create_general_expense
from topvan_server.utils.decorators import api_route
from topvan_server.utils.helpers import get_categorizer, get_json_body, get_registry, respond_success
from topvan_server.utils.validation import parse_text, raise_if_errors

expenses_bp = Blueprint('expenses', __name__, url_prefix='/api/expenses')


def _with_period_amount(expenses):
    return [dict(e, periodAmount=report_service.period_amount(e)) for e in expenses]


@expenses_bp.route('', methods=['GET'])
@api_route
def list_expenses():
    expenses = get_registry().general_expense.find()
    return respond_success({'expenses': _with_period_amount(expenses)})


@expenses_bp.route('', methods=['POST'])
@api_route
def create_expense():
    expense = create_general_expense(get_registry().general_expense, get_categorizer(), get_json_body())
    return respond_success({'expense': _with_period_amount([expense])[0]}, status=201)


@expenses_bp.route('/<expense_id>', methods=['DELETE'])
@api_route
def delete_expense(expense_id):
    get_registry().general_expense.delete(expense_id)
    return respond_success({'deleted': expense_id})


@expenses_bp.route('/categorize', methods=['POST'])
@api_route
def categorize_expense():
    data = get_json_body()
    errors = {}
    description = parse_text(data, 'description', errors)
    raise_if_errors(errors)
    return respond_success({'description': description, 'category': get_categorizer().categorize(description)})
