"""003: create tasks table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # No foreign keys: cascades are performed by the application.
    op.execute("""
        CREATE TABLE tasks (
            id              UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id         UUID            NOT NULL,
            title           VARCHAR(100)    NOT NULL,
            description     VARCHAR(500),
            completed       BOOLEAN         NOT NULL DEFAULT FALSE,
            priority        VARCHAR(10)     NOT NULL DEFAULT 'medium',
            due_date        TIMESTAMPTZ,
            account_id      UUID,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_tasks_title_len   CHECK (LENGTH(title) >= 1),
            CONSTRAINT ck_tasks_priority    CHECK (priority IN ('low', 'medium', 'high'))
        );
    """)
    op.execute("CREATE INDEX idx_tasks_user_created ON tasks (user_id, created_at DESC);")
    op.execute("""
        CREATE TRIGGER trg_tasks_updated_at
            BEFORE UPDATE ON tasks
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS tasks CASCADE;")
