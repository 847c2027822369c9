from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from stayhub.core.config import settings
from stayhub.telegram.handlers import availability


def create_dispatcher() -> Dispatcher:
    dp = Dispatcher()
    dp.include_router(availability.router)
    return dp


def init_bot() -> Bot:
    return Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
