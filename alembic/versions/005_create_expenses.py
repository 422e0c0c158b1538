"""005: create expenses table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE expenses (
            id                      UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id                 UUID            NOT NULL,
            account_id              UUID            NOT NULL,
            description             VARCHAR(200)    NOT NULL,
            amount                  NUMERIC(14, 2)  NOT NULL,
            date                    TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            category                VARCHAR(50)     NOT NULL DEFAULT 'General',
            receipt_data            BYTEA,
            receipt_content_type    VARCHAR(100),
            created_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_expenses_description_len CHECK (LENGTH(description) >= 1),
            CONSTRAINT ck_expenses_receipt_pair
                CHECK ((receipt_data IS NULL) = (receipt_content_type IS NULL))
        );
    """)
    op.execute("CREATE INDEX idx_expenses_user_created ON expenses (user_id, created_at DESC);")
    op.execute("CREATE INDEX idx_expenses_account_date ON expenses (account_id, date DESC);")
    op.execute("""
        CREATE TRIGGER trg_expenses_updated_at
            BEFORE UPDATE ON expenses
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS expenses CASCADE;")
