"""
Exception types raised by the planning core.

Failing to find a path is not an error: it is reported through
PlanningResult.status. The exceptions here signal calls that should never
have been made, such as querying outside the workspace or walking a tree
from an index that does not exist.
"""


class PlannerError(Exception):
    """Base class for all planning core errors."""


class InvalidQueryError(PlannerError, ValueError):
    """Start or goal lies outside the workspace domain."""


class InvalidNodeIndexError(PlannerError, IndexError):
    """A tree index is out of range or may not be used for the operation."""
