"""Create reservations table.

Revision ID: 001_reservations
Revises:
Create Date: 2024-06-20
"""

from __future__ import annotations

from alembic import op


revision = "001_reservations"
down_revision = None
branch_labels = None
depends_on = None


_SQL = """
CREATE TABLE IF NOT EXISTS reservations (
    id          uuid PRIMARY KEY DEFAULT gen_random_uuid(),
    name        text NOT NULL CHECK (length(btrim(name)) > 0),
    room        text NOT NULL,
    start_date  date NOT NULL,
    end_date    date NOT NULL,
    status      text NOT NULL DEFAULT 'hopeful'
                CHECK (status IN ('definite', 'hopeful')),
    notes       text NOT NULL DEFAULT '',
    created_at  timestamptz NOT NULL DEFAULT now(),
    CONSTRAINT reservations_dates_ck CHECK (end_date > start_date)
);

CREATE INDEX IF NOT EXISTS reservations_room_dates_idx
    ON reservations (room, start_date, end_date);
"""


def upgrade() -> None:
    conn = op.get_bind()
    conn.exec_driver_sql(_SQL)


def downgrade() -> None:
    conn = op.get_bind()
    conn.exec_driver_sql("DROP TABLE IF EXISTS reservations CASCADE;")
