from flask import Blueprint

from topvan_server.services.expense_service import create_fuel_expense
from topvan_server.utils.decorators import api_route
from topvan_server.utils.helpers import get_json_body, get_registry, respond_success

fuel_bp = Blueprint('fuel', __name__, url_prefix='/api/fuel')


@fuel_bp.route('', methods=['GET'])
@api_route
def list_fuel_expenses():
    return respond_success({'fuelExpenses': get_registry().fuel_expense.find()})


@fuel_bp.route('', methods=['POST'])
@api_route
def create_fuel():
    expense = create_fuel_expense(get_registry().fuel_expense, get_json_body())
    return respond_success({'fuelExpense': expense}, status=201)


@fuel_bp.route('/<expense_id>', methods=['DELETE'])
@api_route
def delete_fuel_expense(expense_id):
    get_registry().fuel_expense.delete(expense_id)
    return respond_success({'deleted': expense_id})
