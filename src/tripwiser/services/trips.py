"""Trip lifecycle helpers driven by the trip's date range."""

from datetime import date, timedelta

from tripwiser.models import Trip
from tripwiser.models.trip import TripStatus


def get_trip_status(trip: Trip, today: date | None = None) -> TripStatus:
    """Status derived from dates; cancelled and completed trips keep their status."""
    if trip.status in ("cancelled", "completed"):
        return trip.status

    today = today or date.today()
    if today > trip.end_date:
        return "completed"
    if today >= trip.start_date:
        return "ongoing"
    return "planned"


def trip_dates(trip: Trip) -> list[date]:
    days = (trip.end_date - trip.start_date).days
    return [trip.start_date + timedelta(days=i) for i in range(days + 1)]


def trip_progress(trip: Trip, today: date | None = None) -> int:
    """Percentage of the trip elapsed, 0 before it starts and 100 after it ends."""
    today = today or date.today()
    if today < trip.start_date:
        return 0
    if today > trip.end_date:
        return 100

    total_days = (trip.end_date - trip.start_date).days
    if total_days == 0:
        return 100
    return round((today - trip.start_date).days / total_days * 100)
