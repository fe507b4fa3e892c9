"""Seed script: load demo institutions and students.

Institutions are created through InstitutionRepository, so running the
script twice does not duplicate them; students are only inserted when the
students collection is empty.

Usage:
    python scripts/seed_demo_data.py [--store memory|mongo]
"""
import argparse
import logging
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import config
from topvan_server.dto.common import PaymentStatus
from topvan_server.dto.student_dto import StudentDTO, Turno
from topvan_server.exception.ValidationError import ValidationError
from topvan_server.repository.registry import STORE_BACKENDS, RepositoryRegistry, create_store

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEMO_INSTITUTIONS = ['UNIP', 'Anhanguera', 'Anhembi Morumbi']

DEMO_STUDENTS = [
    # name, institution, valorMensalidade, statusPagamento, turno
    ('Ana Silva', 'UNIP', 450, PaymentStatus.PAGO, Turno.MANHA),
    ('Bruno Costa', 'UNIP', 450, PaymentStatus.PENDENTE, Turno.MANHA),
    ('Carlos Dias', 'Anhanguera', 400, PaymentStatus.PAGO, Turno.NOITE),
    ('Daniela Faria', 'Anhembi Morumbi', 400, PaymentStatus.PENDENTE, Turno.NOITE),
    ('Eduardo Martins', 'Anhanguera', 400, PaymentStatus.PAGO, Turno.NOITE),
]


def seed_institutions(registry):
    for name in DEMO_INSTITUTIONS:
        try:
            registry.institution.create_institution(name)
            logger.info(f'Created institution {name}')
        except ValidationError:
            logger.info(f'Institution {name} already exists')
    return {doc['name']: doc['id'] for doc in registry.institution.find()}


def seed_students(registry, institution_ids):
    if registry.student.find():
        logger.info('Students already present, skipping')
        return 0
    for name, institution, fee, status, turno in DEMO_STUDENTS:
        dto = StudentDTO.from_request({
            'name': name,
            'institutionId': institution_ids[institution],
            'valorMensalidade': fee,
            'statusPagamento': status,
            'turno': turno,
        })
        registry.student.create(dto.to_db_doc())
    logger.info(f'Inserted {len(DEMO_STUDENTS)} students')
    return len(DEMO_STUDENTS)


def main():
    parser = argparse.ArgumentParser(description='Seed TopVan demo data')
    parser.add_argument('--store', choices=STORE_BACKENDS, default=None)
    args = parser.parse_args()

    registry = RepositoryRegistry(create_store(config, backend=args.store))
    institution_ids = seed_institutions(registry)
    seed_students(registry, institution_ids)
    registry.store.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
