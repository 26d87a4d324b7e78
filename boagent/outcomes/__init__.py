"""
Defines basic concepts related to outcomes

Outcomes in this package are always multi-issue outcomes over discrete issues.
An outcome is a tuple with one value per issue, in the order of the issues of
the outcome space.

Examples:

  >>> issues = [make_issue(["low", "high"], "price"), make_issue(3, "count")]
  >>> os = make_os(issues)
  >>> os.cardinality
  6
  >>> ("low", 2) in os
  True

"""
from __future__ import annotations

from .issues import *
from .outcome_space import *

__all__ = issues.__all__ + outcome_space.__all__
