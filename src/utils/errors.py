"""Error handling utilities."""


class HousekeepingError(Exception):
    """Base exception for the housekeeping backend."""
    pass


class SupabaseError(HousekeepingError):
    """Supabase operation error."""
    pass


class ReportFetchError(SupabaseError):
    """Reading report collections from Supabase failed."""
    pass


class InvalidDateRangeError(HousekeepingError):
    """Report date range is malformed or reversed."""
    pass


class InvalidReportFilterError(HousekeepingError):
    """Report filter names an unknown value."""
    pass
