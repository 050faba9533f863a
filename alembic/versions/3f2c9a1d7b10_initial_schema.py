"""initial schema: task types, users, tasks

Revision ID: 3f2c9a1d7b10
Revises:
Create Date: 2025-07-14 10:12:03.418227

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f2c9a1d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # 1. Справочник типов задач
    op.create_table(
        'task_types',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('color', sa.String(length=7), nullable=True),
        sa.Column('createdAt', sa.String(length=32), nullable=False),
        sa.Column('updatedAt', sa.String(length=32), nullable=False),
    )
    # 2. Пользователи
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=50), nullable=False, unique=True),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=True),
        sa.Column('fullName', sa.String(length=100), nullable=True),
        sa.Column('createdAt', sa.String(length=32), nullable=False),
        sa.Column('updatedAt', sa.String(length=32), nullable=False),
    )
    # 3. Задачи со ссылками на тип и исполнителя
    op.create_table(
        'tasks',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('priority', sa.String(length=16), nullable=False),
        sa.Column('taskTypeId', sa.Integer(), sa.ForeignKey(
            'task_types.id', ondelete='SET NULL'), nullable=True),
        sa.Column('assignedToUserId', sa.Integer(), sa.ForeignKey(
            'users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('dueDate', sa.String(length=64), nullable=True),
        sa.Column('createdAt', sa.String(length=32), nullable=False),
        sa.Column('updatedAt', sa.String(length=32), nullable=False),
    )
    # ### end Alembic commands ###


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('tasks')
    op.drop_table('users')
    op.drop_table('task_types')
    # ### end Alembic commands ###
