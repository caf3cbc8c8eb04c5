"""create_books_table

Revision ID: 3f9c1d2a7b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1d2a7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'books',
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('author', sa.String(length=500), nullable=False, comment='Author name(s), comma separated'),
        sa.Column('publisher', sa.String(length=255), nullable=False, comment='Publishing house'),
        sa.Column('isbn', sa.String(length=20), nullable=False, comment='International Standard Book Number'),
        sa.Column('classification', sa.String(length=20), nullable=False, comment='Fiction or Non-Fiction'),
        sa.Column('category', sa.String(length=100), nullable=False, comment='Shelf category used for catalog filtering'),
        sa.Column('page_count', sa.Integer(), nullable=False, comment='Number of pages in the book'),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False, comment='Book price in USD'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('book_id'),
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_isbn'), 'books', ['isbn'], unique=False)
    op.create_index(op.f('ix_books_category'), 'books', ['category'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_books_category'), table_name='books')
    op.drop_index(op.f('ix_books_isbn'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
