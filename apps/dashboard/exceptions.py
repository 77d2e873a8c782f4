"""
Domain exceptions for dashboard app.

Exception Hierarchy:
    DashboardServiceError (base)
    ├── InvalidPeriodError
    ├── PropertyNotFoundError
    └── InsufficientPermissionsError
"""


class DashboardServiceError(Exception):
    """
    Base exception for all dashboard service errors.

    Catch it in views to handle every dashboard error at once:

        try:
            data = DashboardQueries.monthly_summary(user, period='2025-13')
        except DashboardServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidPeriodError(DashboardServiceError):
    """
    Raised when period format is invalid.

    Period must be in YYYY-MM format (e.g., '2025-01').
    """

    pass


class PropertyNotFoundError(DashboardServiceError):
    """Raised when the requested property does not exist."""

    pass


class InsufficientPermissionsError(DashboardServiceError):
    """Raised when the user is not a member of the requested property."""

    pass
