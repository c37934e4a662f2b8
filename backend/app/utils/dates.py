"""Date helpers."""

from datetime import date


def get_current_age(date_of_birth: date, today: date | None = None) -> int:
    """Age in whole years on ``today`` (defaults to the current date)."""
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
