"""Project-wide analyses run after all units are validated."""

from dsflint.analysis.leftovers import LeftoverReport, reconcile

__all__ = ["LeftoverReport", "reconcile"]
