"""Initial schema: asset, device, relation

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:12:44.517302

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _entity_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=100), nullable=False),
        sa.Column("customer_id", sa.String(length=64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    ]


def upgrade() -> None:
    """Create asset, device and relation tables."""
    for table in ("asset", "device"):
        op.create_table(table, *_entity_columns())
        op.create_index(op.f(f"ix_{table}_tenant_id"), table, ["tenant_id"], unique=False)
        op.create_index(op.f(f"ix_{table}_type"), table, ["type"], unique=False)
        op.create_index(
            op.f(f"ix_{table}_customer_id"), table, ["customer_id"], unique=False
        )
        op.create_index(
            f"ix_{table}_tenant_type", table, ["tenant_id", "type"], unique=False
        )

    op.create_table(
        "relation",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(length=64), nullable=False),
        sa.Column("from_id", sa.String(), nullable=False),
        sa.Column("from_kind", sa.String(length=16), nullable=False),
        sa.Column("to_id", sa.String(), nullable=False),
        sa.Column("to_kind", sa.String(length=16), nullable=False),
        sa.Column("relation_type", sa.String(length=100), nullable=False),
        sa.Column("type_group", sa.String(length=32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "tenant_id",
            "from_id",
            "to_id",
            "relation_type",
            "type_group",
            name="uq_relation_tenant_from_to_type_group",
        ),
    )
    op.create_index(op.f("ix_relation_tenant_id"), "relation", ["tenant_id"], unique=False)
    op.create_index("ix_relation_from_type", "relation", ["from_id", "relation_type"], unique=False)
    op.create_index("ix_relation_to_type", "relation", ["to_id", "relation_type"], unique=False)


def downgrade() -> None:
    """Drop relation, device and asset tables."""
    op.drop_index("ix_relation_to_type", table_name="relation")
    op.drop_index("ix_relation_from_type", table_name="relation")
    op.drop_index(op.f("ix_relation_tenant_id"), table_name="relation")
    op.drop_table("relation")
    for table in ("device", "asset"):
        op.drop_index(f"ix_{table}_tenant_type", table_name=table)
        op.drop_index(op.f(f"ix_{table}_customer_id"), table_name=table)
        op.drop_index(op.f(f"ix_{table}_type"), table_name=table)
        op.drop_index(op.f(f"ix_{table}_tenant_id"), table_name=table)
        op.drop_table(table)
