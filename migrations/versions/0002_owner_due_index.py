"""index owner and due date together"""
from __future__ import annotations

from alembic import op

revision = "0002_owner_due_index"
down_revision = "0001_create_tasks"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_index("ix_tasks_owner_due", "tasks", ["owner_id", "due_date"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_tasks_owner_due", table_name="tasks")
