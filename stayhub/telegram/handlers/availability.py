import logging
from typing import Optional

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message

from stayhub.core.messages import messages
from stayhub.database import AsyncSessionLocal
from stayhub.domain.selection import RangeSelection, SelectionMode
from stayhub.services.availability_service import AvailabilityService
from stayhub.services.booking_service import booking_service
from stayhub.telegram.state.availability import PickerSession, picker_sessions
from stayhub.telegram.ui.calendar import build_month_keyboard

router = Router()
logger = logging.getLogger(__name__)


async def open_picker(user_id: int, listing_id: str) -> Optional[PickerSession]:
    """Load the listing snapshot and start a fresh selection for the user."""
    async with AsyncSessionLocal() as db:
        snapshot = await AvailabilityService.load_snapshot(db, listing_id)
    if snapshot is None:
        return None

    selection = RangeSelection(snapshot.availability)
    selection.open(SelectionMode.PICKING_START)
    today = snapshot.availability.today

    session = PickerSession(
        listing_id=listing_id,
        listing=snapshot.listing,
        selection=selection,
        year=today.year,
        month=today.month,
    )
    picker_sessions[user_id] = session
    return session


def picker_text(session: PickerSession) -> str:
    start = session.selection.start
    if start is None:
        return messages.PICK_CHECK_IN
    return messages.check_out_prompt(start.strftime("%b %d, %Y"))


def summary_text(session: PickerSession) -> str:
    start, end = session.selection.as_range()
    draft = booking_service.prepare_booking(
        session.listing_id,
        session.listing,
        session.selection.availability,
        check_in=start,
        check_out=end,
    )
    if not draft.ok:
        return messages.reason(draft.reason)

    quote = draft.quote
    nights = draft.booking.nights
    return (
        f"✅ <b>Dates selected</b>\n\n"
        f"📅 {start.strftime('%b %d, %Y')} — {end.strftime('%b %d, %Y')}\n"
        f"🌙 {nights} {'night' if nights == 1 else 'nights'}\n"
        f"──────────────────\n"
        f"₱{quote.unit_price:,.0f} x {nights}: ₱{quote.subtotal:,.0f}\n"
        f"Service fee: ₱{quote.service_fee:,.0f}\n"
        f"<b>Total: ₱{quote.total:,.0f}</b>"
    )


@router.message(Command("book"))
async def book_command(message: Message, command: CommandObject):
    """/book <listing_id> opens the date picker for a listing"""
    if message.from_user is None:
        return

    listing_id = (command.args or "").strip()
    if not listing_id:
        await message.answer("Usage: /book <listing id>")
        return

    session = await open_picker(message.from_user.id, listing_id)
    if session is None:
        await message.answer(messages.LISTING_NOT_FOUND)
        return

    await message.answer(
        picker_text(session),
        reply_markup=build_month_keyboard(session.year, session.month, session.selection),
    )


@router.callback_query(lambda c: c.data and c.data.startswith("stay_open:"))
async def start_picker(callback: CallbackQuery):
    if callback.from_user is None or callback.message is None or callback.data is None:
        return

    _, listing_id = callback.data.split(":", 1)
    session = await open_picker(callback.from_user.id, listing_id)
    if session is None:
        await callback.answer(messages.LISTING_NOT_FOUND, show_alert=True)
        return

    await callback.message.edit_text(
        picker_text(session),
        reply_markup=build_month_keyboard(session.year, session.month, session.selection),
    )
    await callback.answer()


@router.callback_query(lambda c: c.data and c.data.startswith("stay_month:"))
async def change_month(callback: CallbackQuery):
    if callback.from_user is None or callback.message is None or callback.data is None:
        return

    session = picker_sessions.get(callback.from_user.id)
    if session is None:
        await callback.answer(messages.SESSION_EXPIRED)
        return

    _, value = callback.data.split(":")
    session.year, session.month = map(int, value.split("-"))

    await callback.message.edit_text(
        picker_text(session),
        reply_markup=build_month_keyboard(session.year, session.month, session.selection),
    )
    await callback.answer()


@router.callback_query(lambda c: c.data == "stay_clear")
async def clear_dates(callback: CallbackQuery):
    if callback.from_user is None or callback.message is None:
        return

    session = picker_sessions.get(callback.from_user.id)
    if session is None:
        await callback.answer(messages.SESSION_EXPIRED)
        return

    session.selection.clear()
    session.selection.open()

    await callback.message.edit_text(
        picker_text(session),
        reply_markup=build_month_keyboard(session.year, session.month, session.selection),
    )
    await callback.answer()


@router.callback_query(lambda c: c.data == "ignore")
async def ignore_callback(callback: CallbackQuery):
    """Inactive buttons (week days, blank cells, blocked days)"""
    await callback.answer()


@router.callback_query(lambda c: c.data and c.data.startswith("stay:"))
async def select_day(callback: CallbackQuery):
    if callback.from_user is None or callback.message is None or callback.data is None:
        return

    session = picker_sessions.get(callback.from_user.id)
    if session is None:
        await callback.answer(messages.SESSION_EXPIRED)
        return

    _, date_str = callback.data.split(":", 1)
    outcome = session.selection.click(date_str)

    if outcome.reason is not None:
        await callback.answer(messages.reason(outcome.reason), show_alert=True)
        return
    if not outcome.accepted:
        await callback.answer()
        return

    if outcome.completed:
        text = summary_text(session)
        # Finished pick; "Change dates" reopens with a fresh snapshot
        picker_sessions.pop(callback.from_user.id, None)
        await callback.message.edit_text(
            text,
            reply_markup=InlineKeyboardMarkup(
                inline_keyboard=[
                    [
                        InlineKeyboardButton(
                            text="🔄 Change dates",
                            callback_data=f"stay_open:{session.listing_id}",
                        )
                    ]
                ]
            ),
        )
    else:
        await callback.message.edit_text(
            picker_text(session),
            reply_markup=build_month_keyboard(session.year, session.month, session.selection),
        )
    await callback.answer()
