from flask import Blueprint

from topvan_server.utils.helpers import get_settings, respond_success

public_bp = Blueprint('public', __name__, url_prefix='/api')


@public_bp.route('/health', methods=['GET'])
def health():
    settings = get_settings()
    return respond_success({'status': 'ok', 'config': settings.to_dict()})
