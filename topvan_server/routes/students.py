"""Student routes.

This module provides endpoints for:
- Student listing (with turno / statusPagamento filters) and creation
- Partial edits and deletion
- Payment status toggle and the bulk "reset all payments"
"""
from flask import Blueprint, request

from topvan_server.dto.common import PaymentStatus
from topvan_server.dto.student_dto import StudentDTO, Turno
from topvan_server.exception.ValidationError import ValidationError
from topvan_server.services import report_service
from topvan_server.utils.decorators import api_route
from topvan_server.utils.helpers import get_json_body, get_registry, respond_success

students_bp = Blueprint('students', __name__, url_prefix='/api/students')


def _build_student_query(args):
    q = {}
    errors = {}
    turno = args.get('turno')
    if turno:
        if turno not in Turno.all():
            errors['turno'] = f'turno must be one of: {", ".join(Turno.all())}.'
        q['turno'] = turno
    status = args.get('statusPagamento')
    if status:
        if status not in PaymentStatus.student_values():
            errors['statusPagamento'] = f'statusPagamento must be one of: {", ".join(PaymentStatus.student_values())}.'
        q['statusPagamento'] = status
    if errors:
        raise ValidationError(errors)
    return q or None


def _with_institution_name(students, institutions):
    return [dict(s, institutionName=report_service.institution_name(s, institutions)) for s in students]


@students_bp.route('', methods=['GET'])
@api_route
def list_students():
    registry = get_registry()
    students = registry.student.find(_build_student_query(request.args))
    students = _with_institution_name(students, registry.institution.find())
    if request.args.get('groupBy') == 'turno':
        return respond_success({'students': students, 'byTurno': report_service.students_by_turno(students)})
    return respond_success({'students': students})


@students_bp.route('', methods=['POST'])
@api_route
def create_student():
    dto = StudentDTO.from_request(get_json_body())
    repo = get_registry().student
    student_id = repo.create(dto.to_db_doc())
    return respond_success({'student': repo.get(student_id)}, status=201)


@students_bp.route('/<student_id>', methods=['PATCH', 'PUT'])
@api_route
def update_student(student_id):
    fields = StudentDTO.parse_update(get_json_body())
    repo = get_registry().student
    repo.update(student_id, fields)
    return respond_success({'student': repo.get(student_id)})


@students_bp.route('/<student_id>', methods=['DELETE'])
@api_route
def delete_student(student_id):
    get_registry().student.delete(student_id)
    return respond_success({'deleted': student_id})


@students_bp.route('/<student_id>/toggle-payment', methods=['POST'])
@api_route
def toggle_student_payment(student_id):
    status = get_registry().student.toggle_payment(student_id)
    return respond_success({'id': student_id, 'statusPagamento': status})


@students_bp.route('/reset-payments', methods=['POST'])
@api_route
def reset_student_payments():
    count = get_registry().student.reset_all_payments()
    return respond_success({'studentsReset': count})
