import logging

from flask import Flask
from flask_cors import CORS

from config.settings import config as default_config
from topvan_server.repository.registry import RepositoryRegistry, create_store
from topvan_server.routes.dashboard import dashboard_bp
from topvan_server.routes.expenses import expenses_bp
from topvan_server.routes.fuel import fuel_bp
from topvan_server.routes.institutions import institutions_bp
from topvan_server.routes.month import month_bp
from topvan_server.routes.public import public_bp
from topvan_server.routes.students import students_bp
from topvan_server.routes.trips import trips_bp
from topvan_server.services.ai.openai_service import OpenAIService
from topvan_server.services.categorization_service import CategorizationService

logger = logging.getLogger(__name__)


def create_app(store=None, categorizer=None, settings=None) -> Flask:
    """Application factory used by server.py and tests.

    `store` defaults to the DocumentStore selected by STORE_BACKEND and
    `categorizer` to the OpenAI backed CategorizationService. Both end up in
    `app.extensions` so routes never reach for module level state.
    """
    settings = settings or default_config
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT, datefmt=settings.LOG_DATE_FORMAT)

    app = Flask(__name__)
    app.config['DEBUG'] = settings.DEBUG
    app.json.sort_keys = False
    CORS(app, origins=settings.CORS_ORIGINS_LIST)

    app.register_blueprint(institutions_bp)
    app.register_blueprint(students_bp)
    app.register_blueprint(trips_bp)
    app.register_blueprint(fuel_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(month_bp)
    app.register_blueprint(public_bp)

    if store is None:
        store = create_store(settings)
    if categorizer is None:
        categorizer = CategorizationService(OpenAIService.from_config(settings))

    app.extensions['settings'] = settings
    app.extensions['store'] = store
    app.extensions['repositories'] = RepositoryRegistry(store)
    app.extensions['categorizer'] = categorizer

    logger.info('%s %s ready (env=%s, store=%s)', settings.APP_NAME, settings.APP_VERSION,
                settings.ENV, type(store).__name__)
    return app
