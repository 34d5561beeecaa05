import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import SETTINGS
from ..db import get_user_by_username_or_none, get_user_or_none
from ..flows import (
    REGISTRATION_FLOW,
    SEARCH_FLOW,
    Flow,
    FlowAborted,
    FlowCompleted,
    NoActiveFlow,
    RegistrationDraft,
    SearchDraft,
    StepEngine,
    StepPrompted,
    StepRetried,
)
from ..i18n import L
from ..models import User, get_db
from ..services import collect_stats, format_profile_card, format_stats
from ..types import Reply
from .errors import register_error_handler
from .utils import require_sender, send_reply

logger = logging.getLogger(__name__)

router = Router()
register_error_handler(router)

step_engine = StepEngine(draft_ttl=SETTINGS.draft_ttl)


async def _enter_flow[DraftT](
    message: Message, session: AsyncSession, flow: Flow[DraftT], draft: DraftT
) -> None:
    step_engine.enter(message.chat.id, flow, draft)
    await send_reply(message, await step_engine.prompt(session, message.chat.id))


async def _enter_registration(message: Message, session: AsyncSession) -> None:
    sender = require_sender(message)
    await _enter_flow(
        message,
        session,
        REGISTRATION_FLOW,
        RegistrationDraft(telegram_id=sender.id, username=sender.username),
    )


@router.message(Command("start"))
async def cmd_start(message: Message) -> None:
    sender = require_sender(message)
    async for session in get_db():
        if await get_user_or_none(session, sender.id) is not None:
            await message.answer(L.commands.start.ALREADY_REGISTERED)
            return

        await message.answer(L.commands.start.GREETING)
        await _enter_registration(message, session)


@router.message(Command("update"))
async def cmd_update(message: Message) -> None:
    async for session in get_db():
        await _enter_registration(message, session)


@router.message(Command("search"))
async def cmd_search(message: Message) -> None:
    sender = require_sender(message)
    async for session in get_db():
        await _enter_flow(
            message, session, SEARCH_FLOW, SearchDraft(telegram_id=sender.id)
        )


@router.message(Command("cancel"))
async def cmd_cancel(message: Message) -> None:
    if step_engine.exit(message.chat.id):
        await send_reply(
            message, Reply(text=L.commands.cancel.CANCELLED, remove_keyboard=True)
        )
    else:
        await message.answer(L.commands.cancel.NOTHING_TO_CANCEL)


def _requested_handle(text: str | None) -> str | None:
    """Handle from "/profile @name", or None when no @-argument was given."""
    args = (text or "").split()
    if len(args) > 1 and args[1].startswith("@") and len(args[1]) > 1:
        return args[1][1:]
    return None


@router.message(Command("profile"))
async def cmd_profile(message: Message) -> None:
    sender = require_sender(message)
    # Without an @-argument the caller's own handle is looked up; the id is
    # only a fallback for callers who have no handle.
    handle = _requested_handle(message.text) or sender.username

    user: User | None = None
    async for session in get_db():
        if handle:
            user = await get_user_by_username_or_none(session, handle)
        else:
            user = await get_user_or_none(session, sender.id)

    if user is None:
        await message.answer(L.commands.profile.NOT_FOUND)
        return

    await message.answer(format_profile_card(user))


@router.message(Command("stats"))
async def cmd_stats(message: Message) -> None:
    async for session in get_db():
        stats = await collect_stats(session)
    await message.answer(format_stats(stats))


@router.message()
async def handle_message(message: Message) -> None:
    """Feed any other message to the conversation's active flow."""
    async for session in get_db():
        result = await step_engine.advance(session, message.chat.id, message.text)

        match result:
            case NoActiveFlow():
                await message.answer(L.commands.HINT)
            case (
                StepPrompted(reply=reply)
                | StepRetried(reply=reply)
                | FlowCompleted(reply=reply)
                | FlowAborted(reply=reply)
            ):
                await send_reply(message, reply)
            case _:
                logger.warning(
                    "Received unexpected StepResult type: %r", result
                )
