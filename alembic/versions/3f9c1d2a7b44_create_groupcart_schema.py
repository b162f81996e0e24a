"""create_groupcart_schema

Revision ID: 3f9c1d2a7b44
Revises:
Create Date: 2026-10-19 10:12:41.508113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1d2a7b44'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, groups, memberships, shopping lists and items."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'groups',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('invite_code', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
    )
    op.create_index('ix_groups_id', 'groups', ['id'])
    op.create_index('ix_groups_invite_code', 'groups', ['invite_code'], unique=True)

    # Memberships go away with their group or their user
    op.create_table(
        'group_members',
        sa.Column('user_id', sa.Integer(), primary_key=True),
        sa.Column('group_id', sa.Integer(), primary_key=True),
        sa.Column('joined_at', sa.DateTime(), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='MEMBER'),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='group_members_user_id_fkey',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['group_id'], ['groups.id'],
            name='group_members_group_id_fkey',
            ondelete='CASCADE'
        ),
    )

    op.create_table(
        'shopping_lists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ['group_id'], ['groups.id'],
            name='shopping_lists_group_id_fkey',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_shopping_lists_id', 'shopping_lists', ['id'])
    op.create_index('ix_shopping_lists_group_id', 'shopping_lists', ['group_id'])

    op.create_table(
        'shopping_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('unit', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('priority', sa.String(length=10), nullable=False, server_default='MEDIUM'),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('estimated_price', sa.Float(), nullable=True),
        sa.Column('actual_price', sa.Float(), nullable=True),
        sa.Column('shopping_list_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ['shopping_list_id'], ['shopping_lists.id'],
            name='shopping_items_shopping_list_id_fkey',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_shopping_items_id', 'shopping_items', ['id'])
    op.create_index('ix_shopping_items_shopping_list_id', 'shopping_items', ['shopping_list_id'])


def downgrade() -> None:
    """Drop every GroupCart table, children first."""
    op.drop_table('shopping_items')
    op.drop_table('shopping_lists')
    op.drop_table('group_members')
    op.drop_index('ix_groups_invite_code', table_name='groups')
    op.drop_index('ix_groups_id', table_name='groups')
    op.drop_table('groups')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
