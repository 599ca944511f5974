"""SQLAlchemy table definitions for the join bridge.

They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# INVITE REQUESTS TABLE (one row per store transaction)
# ============================================================================
invite_requests_table = Table(
    "invite_requests",
    metadata,
    Column("request_id", String(255), primary_key=True),  # Store transaction id
    Column("subject_id", String(255), nullable=False),  # Store / WebEngage user id
    Column("invite_link", Text, nullable=False, server_default=""),
    Column("link_fingerprint", String(64), nullable=False, server_default=""),
    Column("joined", Boolean, nullable=False, server_default="false"),
    Column("joined_by_user_id", String(64), nullable=True),  # Telegram user id
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("joined_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_invite_requests_subject_id", invite_requests_table.c.subject_id)

# ============================================================================
# INVITE LOOKUP TABLE (fingerprint -> request, written with the request)
# ============================================================================
invite_lookup_table = Table(
    "invite_lookup",
    metadata,
    Column("link_fingerprint", String(64), primary_key=True),
    Column("request_id", String(255), nullable=False),
    Column("subject_id", String(255), nullable=False),
    Column("invite_link", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_invite_lookup_request_id", invite_lookup_table.c.request_id)

# ============================================================================
# ORPHAN JOINS TABLE (append-only diagnostics)
# ============================================================================
orphan_joins_table = Table(
    "orphan_joins",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("invite_link", Text, nullable=False),
    Column("link_fingerprint", String(64), nullable=False),
    Column("telegram_user_id", String(64), nullable=True),
    Column("channel_id", String(64), nullable=False),
    Column(
        "received_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_orphan_joins_received_at", orphan_joins_table.c.received_at)
