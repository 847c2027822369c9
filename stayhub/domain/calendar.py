import calendar
import datetime
from typing import Optional


def get_month_dates(year: int, month: int) -> list[datetime.date]:
    _, days_in_month = calendar.monthrange(year, month)
    return [
        datetime.date(year, month, day)
        for day in range(1, days_in_month + 1)
    ]


def month_grid(year: int, month: int) -> list[list[Optional[datetime.date]]]:
    """Monday-first weeks, padded with None outside the month."""
    first_weekday, _ = calendar.monthrange(year, month)
    cells: list[Optional[datetime.date]] = [None] * first_weekday
    cells.extend(get_month_dates(year, month))
    while len(cells) % 7:
        cells.append(None)
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
