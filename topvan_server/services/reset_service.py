"""Monthly reset ("zerar mês").

Runs independent bulk mutations over separate collections. There is no
transaction spanning collections, so every step is attempted and the
outcome is reported per step: a partial failure raises
PartialReconciliationFailure instead of looking like success.
"""
import logging
from typing import Any, Callable, Dict, List, Tuple

from topvan_server.exception.PartialReconciliationFailure import PartialReconciliationFailure

logger = logging.getLogger(__name__)


class TripResetPolicy:
    KEEP = 'keep'
    ARCHIVE_PAID = 'archive_paid'
    DELETE_ALL = 'delete_all'

    @classmethod
    def all(cls) -> List[str]:
        return [cls.KEEP, cls.ARCHIVE_PAID, cls.DELETE_ALL]


class MonthlyResetService:

    def __init__(self, registry, trip_policy: str = TripResetPolicy.KEEP):
        if trip_policy not in TripResetPolicy.all():
            raise ValueError(f"Unknown trip reset policy '{trip_policy}'; expected one of {TripResetPolicy.all()}")
        self.registry = registry
        self.trip_policy = trip_policy

    def _steps(self) -> List[Tuple[str, Callable[[], Any]]]:
        steps = [
            ('students', self.registry.student.reset_all_payments),
            ('fuelExpenses', self.registry.fuel_expense.delete_all),
            ('generalExpenses', self.registry.general_expense.reset_installments),
        ]
        if self.trip_policy == TripResetPolicy.ARCHIVE_PAID:
            steps.append(('trips', self.registry.trip.archive_paid_trips))
        elif self.trip_policy == TripResetPolicy.DELETE_ALL:
            steps.append(('trips', self.registry.trip.delete_all_trips))
        return steps

    def reset_month(self) -> Dict[str, Any]:
        """Apply every reset step and return the report.

        Raises PartialReconciliationFailure if some steps failed after others
        succeeded; if every step failed the first error is re-raised as is.
        """
        completed: List[str] = []
        failed: Dict[str, Exception] = {}
        results: Dict[str, Any] = {}
        for name, step in self._steps():
            try:
                results[name] = step()
                completed.append(name)
            except Exception as e:
                logger.exception('Monthly reset step %s failed', name)
                failed[name] = e

        report = self._report(results)
        if failed and not completed:
            raise next(iter(failed.values()))
        if failed:
            raise PartialReconciliationFailure(completed, failed, report)
        logger.info('Monthly reset done: %s', report)
        return report

    def _report(self, results: Dict[str, Any]) -> Dict[str, Any]:
        general = results.get('generalExpenses') or {}
        report = {
            'studentsReset': results.get('students'),
            'fuelExpensesDeleted': results.get('fuelExpenses'),
            'generalExpensesAdvanced': general.get('advanced'),
            'generalExpensesDeleted': general.get('deleted'),
            'tripPolicy': self.trip_policy,
        }
        if self.trip_policy == TripResetPolicy.ARCHIVE_PAID:
            report['tripsArchived'] = results.get('trips')
        elif self.trip_policy == TripResetPolicy.DELETE_ALL:
            report['tripsDeleted'] = results.get('trips')
        return report
