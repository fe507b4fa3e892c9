"""Trip routes: chartered trips and their paired return legs."""
from flask import Blueprint, request

from topvan_server.dto.common import PaymentStatus
from topvan_server.exception.ValidationError import ValidationError
from topvan_server.services.trip_service import TripService
from topvan_server.utils.decorators import api_route
from topvan_server.utils.helpers import get_json_body, get_registry, get_settings, respond_success

trips_bp = Blueprint('trips', __name__, url_prefix='/api/trips')


def _service():
    return TripService(get_registry().trip, tz_name=get_settings().DEFAULT_TIMEZONE)


@trips_bp.route('', methods=['GET'])
@api_route
def list_trips():
    status = request.args.get('statusPagamento')
    if status and status not in PaymentStatus.all():
        raise ValidationError({'statusPagamento': f'statusPagamento must be one of: {", ".join(PaymentStatus.all())}.'})
    trips = _service().list_trips(view=request.args.get('view'), status=status)
    return respond_success({'trips': trips})


@trips_bp.route('', methods=['POST'])
@api_route
def create_trip():
    result = _service().create_trip(get_json_body())
    return respond_success(result, status=201)


@trips_bp.route('/<trip_id>', methods=['PATCH', 'PUT'])
@api_route
def update_trip(trip_id):
    return respond_success(_service().update_trip(trip_id, get_json_body()))


@trips_bp.route('/<trip_id>', methods=['DELETE'])
@api_route
def delete_trip(trip_id):
    return respond_success(_service().delete_trip(trip_id))


@trips_bp.route('/<trip_id>/toggle-payment', methods=['POST'])
@api_route
def toggle_trip_payment(trip_id):
    status = _service().toggle_payment(trip_id)
    return respond_success({'id': trip_id, 'statusPagamento': status})


@trips_bp.route('/archive-paid', methods=['POST'])
@api_route
def archive_paid_trips():
    return respond_success({'tripsArchived': _service().archive_paid_trips()})
