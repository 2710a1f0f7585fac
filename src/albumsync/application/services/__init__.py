"""Summary: Export the reconcile application service.
Why: Keep UI imports independent of the feature package layout.
"""

from .reconcile_service import OPERATIONS, ReconcileRequest, ReconcileService

__all__ = ["OPERATIONS", "ReconcileRequest", "ReconcileService"]
