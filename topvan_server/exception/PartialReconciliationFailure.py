class PartialReconciliationFailure(Exception):
    """Raised when the monthly reset applied some bulk steps but not all of them.

    `completed` and `failed` hold step names; `failed` maps each failed step to
    its error. `report` is whatever the completed steps produced.
    """
    def __init__(self, completed, failed, report=None):
        self.completed = list(completed)
        self.failed = dict(failed)
        self.report = report or {}
        super().__init__(
            'Monthly reset partially applied: completed=%s failed=%s'
            % (', '.join(self.completed) or '-', ', '.join(self.failed) or '-')
        )
