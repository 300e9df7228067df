"""
Handlers module - combines all handler routers.
"""
from __future__ import annotations

from aiogram import Router

from daytasks.ui.telegram.handlers import days, tasks

router = Router()
router.include_router(days.router)
router.include_router(tasks.router)

__all__ = ["router"]
