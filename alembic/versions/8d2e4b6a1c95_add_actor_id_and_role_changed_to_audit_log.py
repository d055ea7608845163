"""add actor_id and ROLE_CHANGED to audit_log

Revision ID: 8d2e4b6a1c95
Revises: 3f1c9a7d2b40
Create Date: 2026-10-20 14:03:17.220641+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8d2e4b6a1c95'
down_revision: Union[str, Sequence[str], None] = '3f1c9a7d2b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

OLD_ACTIONS = (
    'REGISTER_SUCCESS', 'REGISTER_FAILURE', 'LOGIN_SUCCESS', 'LOGIN_FAILURE',
    'USER_DEACTIVATED', 'BUSINESS_DEACTIVATED',
)
NEW_ACTIONS = OLD_ACTIONS + ('ROLE_CHANGED',)


def upgrade() -> None:
    # referência fraca, sem FK, como user_id/business_id
    op.add_column('audit_log', sa.Column('actor_id', sa.Integer(), nullable=True))
    op.create_index('ix_audit_log_actor_id', 'audit_log', ['actor_id'])

    dialect = op.get_bind().dialect.name
    if dialect == 'postgresql':
        op.execute("ALTER TYPE auditaction ADD VALUE IF NOT EXISTS 'ROLE_CHANGED'")
    elif dialect == 'mysql':
        op.alter_column(
            'audit_log', 'action',
            existing_type=sa.Enum(*OLD_ACTIONS, name='auditaction'),
            type_=sa.Enum(*NEW_ACTIONS, name='auditaction'),
            existing_nullable=False,
        )


def downgrade() -> None:
    # Postgres não remove valores de enum; ROLE_CHANGED fica no tipo
    if op.get_bind().dialect.name == 'mysql':
        op.alter_column(
            'audit_log', 'action',
            existing_type=sa.Enum(*NEW_ACTIONS, name='auditaction'),
            type_=sa.Enum(*OLD_ACTIONS, name='auditaction'),
            existing_nullable=False,
        )
    op.drop_index('ix_audit_log_actor_id', table_name='audit_log')
    with op.batch_alter_table('audit_log') as batch_op:
        batch_op.drop_column('actor_id')
