# nailbook/core/errors.py


class BookingError(Exception):
    code = "booking_error"
    status_code = 422

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.code)
        self.detail = detail or self.code


class ScheduleError(BookingError, ValueError):
    code = "invalid_schedule"


class InvalidService(BookingError):
    code = "invalid_service"


class DateUnavailable(BookingError):
    code = "date_unavailable"


class OutsideBusinessHours(BookingError):
    code = "outside_business_hours"


class SlotConflict(BookingError):
    code = "slot_conflict"
    status_code = 409


class InvalidPromo(BookingError):
    code = "invalid_promo"


class InvalidTransition(BookingError):
    code = "invalid_transition"
    status_code = 409


class CancellationWindowClosed(BookingError):
    code = "cancellation_window_closed"
    status_code = 409


class PersistenceFailure(BookingError):
    code = "persistence_failure"
    status_code = 503
