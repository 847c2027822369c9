import datetime
from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from stayhub.domain.calendar import month_grid, shift_month
from stayhub.domain.selection import DayStyle, RangeSelection

MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

WEEK_DAYS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]


def month_title(year: int, month: int) -> str:
    return f"{MONTHS[month - 1]} {year}"


def day_label(date: datetime.date, style: DayStyle, is_past: bool) -> str:
    if style == DayStyle.BLOCKED:
        # Past days are blank, host/booked days are crossed out
        return " " if is_past else "✖"
    if style == DayStyle.ENDPOINT:
        return f"[{date.day}]"
    if style in (DayStyle.IN_RANGE, DayStyle.IN_HOVER):
        return f"·{date.day}·"
    return str(date.day)


def build_month_keyboard(
    year: int,
    month: int,
    selection: RangeSelection,
    prefix: str = "stay",
) -> InlineKeyboardMarkup:
    keyboard: list[list[InlineKeyboardButton]] = []

    # 1. Title
    keyboard.append(
        [InlineKeyboardButton(text=month_title(year, month), callback_data="ignore")]
    )

    # 2. Week days
    keyboard.append(
        [InlineKeyboardButton(text=day, callback_data="ignore") for day in WEEK_DAYS]
    )

    # 3. Days
    for week in month_grid(year, month):
        row: list[InlineKeyboardButton] = []
        for date in week:
            if date is None:
                row.append(InlineKeyboardButton(text=" ", callback_data="ignore"))
                continue

            style = selection.day_style(date)
            label = day_label(date, style, selection.availability.is_past(date))
            callback_data = (
                "ignore" if style == DayStyle.BLOCKED else f"{prefix}:{date.isoformat()}"
            )
            row.append(InlineKeyboardButton(text=label, callback_data=callback_data))
        keyboard.append(row)

    # 4. Navigation
    prev_year, prev_month = shift_month(year, month, -1)
    next_year, next_month = shift_month(year, month, 1)
    today = selection.availability.today

    navigation = []
    if (prev_year, prev_month) >= (today.year, today.month):
        navigation.append(
            InlineKeyboardButton(
                text="⬅️", callback_data=f"{prefix}_month:{prev_year}-{prev_month}"
            )
        )
    navigation.append(
        InlineKeyboardButton(
            text="➡️", callback_data=f"{prefix}_month:{next_year}-{next_month}"
        )
    )
    keyboard.append(navigation)

    # 5. Clear
    keyboard.append(
        [InlineKeyboardButton(text="🔄 Clear dates", callback_data=f"{prefix}_clear")]
    )

    return InlineKeyboardMarkup(inline_keyboard=keyboard)
