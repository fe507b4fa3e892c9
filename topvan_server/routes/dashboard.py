from flask import Blueprint

from topvan_server.services import report_service
from topvan_server.utils.decorators import api_route
from topvan_server.utils.helpers import get_registry, respond_success

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')


@dashboard_bp.route('/summary', methods=['GET'])
@api_route
def monthly_summary():
    """Revenue, costs and profit of the current month."""
    registry = get_registry()
    summary = report_service.build_monthly_summary(
        registry.student.find(),
        registry.trip.find(),
        registry.fuel_expense.find(),
        registry.general_expense.find(),
        registry.institution.find(),
    )
    return respond_success({'summary': summary})
