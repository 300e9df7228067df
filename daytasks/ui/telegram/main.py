from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from daytasks.config import load_settings
from daytasks.domain.notifications.relay import NotificationRelay, PermissionCache
from daytasks.domain.persistence import PersistenceAdapter
from daytasks.domain.tasks.selector import DateSelector
from daytasks.domain.tasks.store import TaskStore
from daytasks.infra.clock.system_clock import SystemClock
from daytasks.infra.ids.task_ids import TimestampIdGenerator
from daytasks.infra.notify.telegram_surface import NullNotificationSurface, TelegramNotificationSurface
from daytasks.infra.storage.factory import build_storage
from daytasks.ui.telegram.day_view import DayView
from daytasks.ui.telegram.handlers import router
from daytasks.ui.telegram.middlewares.auth import OwnerOnlyMiddleware
from daytasks.ui.telegram.middlewares.di import DIMiddleware

logger = logging.getLogger(__name__)


async def main() -> None:
    """
    Entry point for the bot.

    Only run ONE instance per bot token: a second poller gets
    TelegramConflictError ("terminated by other getUpdates request").
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s",
    )
    pid = os.getpid()
    logger.info("Bot starting - PID: %s", pid)

    settings = load_settings()

    repo_root = Path(__file__).resolve().parents[3]  # .../daytasks/ui/telegram/main.py -> repo root

    # --- storage path: one place, always absolute ---
    db_path = settings.db_path
    if not db_path.is_absolute():
        db_path = repo_root / db_path
    logger.info("Storage backend=%s path=%s", settings.storage_backend, db_path)

    backend = await build_storage(settings.storage_backend, db_path)
    clock = SystemClock(settings.timezone)
    selector = DateSelector(clock)

    store = TaskStore(
        storage=PersistenceAdapter(backend),
        clock=clock,
        ids=TimestampIdGenerator(),
        selector=selector,
        seed_on_empty=settings.seed_on_empty,
    )
    await store.load()

    # --- bot/dispatcher ---
    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = Dispatcher()

    if settings.system_alerts:
        surface = TelegramNotificationSurface(bot, settings.owner_telegram_id)
    else:
        surface = NullNotificationSurface()
    relay = NotificationRelay(surface, PermissionCache(), dwell_seconds=settings.notification_dwell)
    store.subscribe(relay)
    await relay.ensure_permission()
    view = DayView()

    # --- middlewares ---
    dp.message.middleware(OwnerOnlyMiddleware(settings.owner_telegram_id))
    dp.callback_query.middleware(OwnerOnlyMiddleware(settings.owner_telegram_id))

    dp.message.middleware(DIMiddleware(store, selector, relay, settings, view))
    dp.callback_query.middleware(DIMiddleware(store, selector, relay, settings, view))

    dp.include_router(router)

    logger.info("Starting polling - PID: %s", pid)
    try:
        await dp.start_polling(bot)
    finally:
        await store.flush()
        await view.drain()
        await relay.drain()
        await bot.session.close()
        logger.info("Bot shutdown complete - PID: %s", pid)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
