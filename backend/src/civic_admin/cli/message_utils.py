from __future__ import annotations

import asyncio
import inspect
import logging

from textual.message import Message
from textual.message_pump import MessagePump

logger = logging.getLogger(__name__)


def dispatch_message(pump: MessagePump, message: Message) -> None:
    """Post a Textual message and ensure awaitables are scheduled."""
    logger.debug("dispatch %s from %s", message.__class__.__name__, pump.__class__.__name__)
    result = pump.post_message(message)
    if inspect.isawaitable(result):
        asyncio.create_task(result)
