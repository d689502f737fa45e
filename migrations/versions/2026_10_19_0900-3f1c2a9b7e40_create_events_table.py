"""create_events_table

Revision ID: 3f1c2a9b7e40
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c2a9b7e40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("timezone", sa.String(length=64), nullable=False),
        sa.Column("location", sa.JSON(), nullable=True),
        sa.Column("guests", sa.JSON(), nullable=False),
        sa.Column("recurring", sa.JSON(), nullable=False),
        sa.Column("notifications", sa.JSON(), nullable=False),
        sa.Column("team", sa.String(length=255), nullable=True),
        sa.Column("rsvp_required", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "privacy",
            sa.Enum("team", "public", name="event_privacy_enum"),
            nullable=False,
            server_default="team",
        ),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("parent_event_id", sa.UUID(), nullable=True),
        sa.Column("instance_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_exception", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("uuid"),
    )

    op.create_index("ix_events_team", "events", ["team"])
    op.create_index("ix_events_is_deleted", "events", ["is_deleted"])
    op.create_index("ix_events_deleted_at", "events", ["deleted_at"])
    op.create_index("ix_events_parent_event_id", "events", ["parent_event_id"])
    op.create_index("ix_events_created_at", "events", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_events_created_at", table_name="events")
    op.drop_index("ix_events_parent_event_id", table_name="events")
    op.drop_index("ix_events_deleted_at", table_name="events")
    op.drop_index("ix_events_is_deleted", table_name="events")
    op.drop_index("ix_events_team", table_name="events")
    op.drop_table("events")
    op.execute("DROP TYPE event_privacy_enum")
