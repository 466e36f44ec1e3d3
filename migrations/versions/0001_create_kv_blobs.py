"""create kv_blobs table

Revision ID: 0001
Revises:
Create Date: 2026-10-18

One binary value per (namespace, key). The check-in store keeps its whole
serialized collection in a single row.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "kv_blobs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("namespace", sa.String(128), nullable=False),
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("value", sa.LargeBinary(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("namespace", "key", name="uq_kv_blob_namespace_key"),
    )
    op.create_index("ix_kv_blobs_id", "kv_blobs", ["id"])
    op.create_index("ix_kv_blobs_namespace", "kv_blobs", ["namespace"])


def downgrade() -> None:
    op.drop_index("ix_kv_blobs_namespace", table_name="kv_blobs")
    op.drop_index("ix_kv_blobs_id", table_name="kv_blobs")
    op.drop_table("kv_blobs")
