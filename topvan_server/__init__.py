from .routes.institutions import institutions_bp
from .routes.students import students_bp
from .routes.trips import trips_bp
from .routes.fuel import fuel_bp
from .routes.expenses import expenses_bp
from .routes.dashboard import dashboard_bp
from .routes.month import month_bp
from .routes.public import public_bp
from .app import create_app

__all__ = [
    "institutions_bp",
    "students_bp",
    "trips_bp",
    "fuel_bp",
    "expenses_bp",
    "dashboard_bp",
    "month_bp",
    "public_bp",
    "create_app",
]
