"""create_users_and_books

Revision ID: 3f9c2a7d1e45
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d1e45'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users: the credential store
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False, comment='Unique username'),
        sa.Column('email', sa.String(length=255), nullable=False, comment="User's email address (used for login)"),
        sa.Column('hashed_password', sa.String(length=255), nullable=False, comment='Bcrypt hashed password'),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
            comment='When the user registered'
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
            comment='When the user record was last updated'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # Books: one row per book on a reader's shelf
    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False, comment='Owner of the book'),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('author', sa.String(length=255), nullable=False, comment='Author name'),
        sa.Column('cover_image', sa.Text(), nullable=True, comment='URL of the cover image'),
        sa.Column('published_at', sa.Date(), nullable=False, comment='Date of publication'),
        sa.Column('genre', sa.String(length=100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True, comment="Reader's private notes"),
        sa.Column('no_of_pages', sa.Integer(), nullable=False, comment='Total number of pages'),
        sa.Column('current_page', sa.Integer(), server_default='0', nullable=False, comment='Last page read'),
        sa.Column('status', sa.String(length=20), nullable=False, comment='Want to Read / Reading / Read'),
        sa.Column('start_date', sa.Date(), nullable=True, comment='When the reader started the book'),
        sa.Column('finish_date', sa.Date(), nullable=True, comment='When the reader finished the book'),
        sa.Column('rating', sa.Integer(), nullable=True, comment='Personal rating, 0-5 stars'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint('no_of_pages > 0', name='ck_books_no_of_pages_positive'),
        sa.CheckConstraint(
            'current_page >= 0 AND current_page <= no_of_pages',
            name='ck_books_current_page_range'
        ),
        sa.CheckConstraint(
            'rating IS NULL OR (rating >= 0 AND rating <= 5)',
            name='ck_books_rating_range'
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_books_user_id'), 'books', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_books_user_id'), table_name='books')
    op.drop_table('books')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
