"""004: create accounts table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE accounts (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id             UUID            NOT NULL,
            name                VARCHAR(100)    NOT NULL,
            initial_balance     NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            type                VARCHAR(20)     NOT NULL DEFAULT 'checking',
            currency            VARCHAR(3)      NOT NULL DEFAULT 'USD',
            color               VARCHAR(20)     NOT NULL DEFAULT '#7C3AED',
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_accounts_name_len CHECK (LENGTH(name) >= 1),
            CONSTRAINT ck_accounts_type     CHECK (type IN ('checking', 'savings', 'cash', 'credit', 'other')),
            CONSTRAINT ck_accounts_currency CHECK (currency IN ('USD', 'COP', 'EUR'))
        );
    """)
    op.execute("CREATE INDEX idx_accounts_user_created ON accounts (user_id, created_at DESC);")
    op.execute("""
        CREATE TRIGGER trg_accounts_updated_at
            BEFORE UPDATE ON accounts
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE accounts IS 'Balances are derived from expenses, never stored';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS accounts CASCADE;")
