"""add_users_role_column

Revision ID: 8a4f2c6e1d57
Revises: 5c1e7a9d3b20
Create Date: 2026-10-17 16:40:03.118902

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8a4f2c6e1d57'
down_revision: Union[str, None] = '5c1e7a9d3b20'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Add the account role column (student / admin) to users table."""
    from sqlalchemy import inspect

    bind = op.get_bind()
    inspector = inspect(bind)
    columns = [col['name'] for col in inspector.get_columns('users')]

    # Existing accounts become students
    if 'role' not in columns:
        op.add_column('users', sa.Column('role', sa.String(), nullable=False, server_default='student'))
        op.create_index(op.f('ix_users_role'), 'users', ['role'], unique=False)


def downgrade() -> None:
    """Remove the role column from users table."""
    op.drop_index(op.f('ix_users_role'), table_name='users')
    op.drop_column('users', 'role')
