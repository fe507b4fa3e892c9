from flask import jsonify, current_app, request

from topvan_server.exception.ValidationError import ValidationError


def respond_error(message_or_dict, status=400, **extra):
    """Return a standardized error response."""
    if isinstance(message_or_dict, dict):
        body = {'success': False, 'errors': message_or_dict}
    else:
        body = {'success': False, 'error': message_or_dict}
    body.update(extra)
    return jsonify(body), status


def respond_success(payload=None, status=200):
    if payload is None:
        payload = {}
    body = {'success': True}
    if isinstance(payload, dict):
        body.update(payload)
    else:
        body['data'] = payload
    return jsonify(body), status


def get_json_body(req=None):
    """Return the JSON object of the request or raise ValidationError."""
    if req is None:
        req = request
    data = req.get_json(silent=True)
    if data is None:
        raise ValidationError('Request body must be JSON')
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def get_registry():
    """RepositoryRegistry bound to the current app."""
    return current_app.extensions['repositories']


def get_categorizer():
    return current_app.extensions['categorizer']


def get_settings():
    return current_app.extensions['settings']
