"""Institution routes: the universities students are driven to."""
from flask import Blueprint

from topvan_server.dto.institution_dto import InstitutionDTO
from topvan_server.utils.decorators import api_route
from topvan_server.utils.helpers import get_json_body, get_registry, respond_success

institutions_bp = Blueprint('institutions', __name__, url_prefix='/api/institutions')


@institutions_bp.route('', methods=['GET'])
@api_route
def list_institutions():
    institutions = get_registry().institution.find()
    return respond_success({'institutions': institutions})


@institutions_bp.route('', methods=['POST'])
@api_route
def create_institution():
    dto = InstitutionDTO.from_request(get_json_body())
    repo = get_registry().institution
    institution_id = repo.create_institution(dto.name)
    return respond_success({'institution': repo.get(institution_id)}, status=201)


@institutions_bp.route('/<institution_id>', methods=['DELETE'])
@api_route
def delete_institution(institution_id):
    # students keep their institutionId; it resolves to N/A from now on
    get_registry().institution.delete(institution_id)
    return respond_success({'deleted': institution_id})
