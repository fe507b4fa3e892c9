from flask import Blueprint

from topvan_server.services.reset_service import MonthlyResetService
from topvan_server.utils.decorators import api_route
from topvan_server.utils.helpers import get_registry, get_settings, respond_success

month_bp = Blueprint('month', __name__, url_prefix='/api/month')


@month_bp.route('/reset', methods=['POST'])
@api_route
def reset_month():
    """Close the month: students back to Pendente, fuel cleared, installments rolled forward."""
    service = MonthlyResetService(get_registry(), trip_policy=get_settings().RESET_TRIP_POLICY)
    return respond_success({'report': service.reset_month()})
