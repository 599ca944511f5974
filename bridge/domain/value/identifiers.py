"""Strongly typed identifiers for bridge domain entities.

Request and subject ids are opaque strings supplied by the store backend;
Telegram user ids arrive as integers and are kept as their decimal string.
"""

from typing import NewType
from uuid import UUID

RequestId = NewType("RequestId", str)
SubjectId = NewType("SubjectId", str)
TelegramUserId = NewType("TelegramUserId", str)
OrphanJoinId = NewType("OrphanJoinId", UUID)
