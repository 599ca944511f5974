"""initial_schema

Create the schema for the join bridge:
- Invite requests (one per store transaction, holds the joined flag)
- Invite lookup (link fingerprint -> request)
- Orphan joins (joins whose link matched no request)

Revision ID: 3f1c9a7d2e64
Revises:
Create Date: 2026-10-12 14:03:52.418930

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2e64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # INVITE REQUESTS TABLE
    # ========================================================================
    op.create_table(
        "invite_requests",
        sa.Column("request_id", sa.String(255), primary_key=True),
        sa.Column("subject_id", sa.String(255), nullable=False),
        sa.Column("invite_link", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "link_fingerprint", sa.String(64), nullable=False, server_default=""
        ),
        sa.Column("joined", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("joined_by_user_id", sa.String(64), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("joined_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        # A joined request always records who joined and when
        sa.CheckConstraint(
            "NOT joined OR (joined_at IS NOT NULL AND joined_by_user_id IS NOT NULL)",
            name="joined_has_details",
        ),
    )
    op.create_index(
        "idx_invite_requests_subject_id", "invite_requests", ["subject_id"]
    )

    # ========================================================================
    # INVITE LOOKUP TABLE
    # ========================================================================
    op.create_table(
        "invite_lookup",
        sa.Column("link_fingerprint", sa.String(64), primary_key=True),
        sa.Column("request_id", sa.String(255), nullable=False),
        sa.Column("subject_id", sa.String(255), nullable=False),
        sa.Column("invite_link", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )
    op.create_index("idx_invite_lookup_request_id", "invite_lookup", ["request_id"])

    # ========================================================================
    # ORPHAN JOINS TABLE
    # ========================================================================
    op.create_table(
        "orphan_joins",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("invite_link", sa.Text(), nullable=False),
        sa.Column("link_fingerprint", sa.String(64), nullable=False),
        sa.Column("telegram_user_id", sa.String(64), nullable=True),
        sa.Column("channel_id", sa.String(64), nullable=False),
        sa.Column(
            "received_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )
    op.create_index(
        "idx_orphan_joins_received_at", "orphan_joins", ["received_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_orphan_joins_received_at", table_name="orphan_joins")
    op.drop_table("orphan_joins")
    op.drop_index("idx_invite_lookup_request_id", table_name="invite_lookup")
    op.drop_table("invite_lookup")
    op.drop_index("idx_invite_requests_subject_id", table_name="invite_requests")
    op.drop_table("invite_requests")
