"""initial catalog schema

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("role", sa.Enum("ADMIN", "USER", name="userrole"), nullable=False, server_default="USER"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    # Unique even across soft-deleted rows
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "authors",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("biography", sa.Text(), nullable=True),
        sa.Column("nationality", sa.String(length=50), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_authors_last_name", "authors", ["last_name"])

    op.create_table(
        "publishers",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("foundation_year", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_publishers_name", "publishers", ["name"])

    op.create_table(
        "genres",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_genres_name", "genres", ["name"])

    op.create_table(
        "books",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("isbn", sa.String(length=20), nullable=True),
        sa.Column("publication_year", sa.Integer(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("stock_quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("author_id", sa.Uuid(), sa.ForeignKey("authors.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("publisher_id", sa.Uuid(), sa.ForeignKey("publishers.id", ondelete="RESTRICT"), nullable=False),
        sa.Column("genre_id", sa.Uuid(), sa.ForeignKey("genres.id", ondelete="RESTRICT"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("isbn", name="uq_books_isbn"),
        sa.CheckConstraint("price >= 0", name="books_price_check"),
        sa.CheckConstraint("stock_quantity >= 0", name="books_stock_quantity_check"),
    )
    op.create_index("ix_books_author_id", "books", ["author_id"])
    op.create_index("ix_books_publisher_id", "books", ["publisher_id"])
    op.create_index("ix_books_genre_id", "books", ["genre_id"])
    op.create_index("ix_books_title_author_genre", "books", ["title", "author_id", "genre_id"])


def downgrade() -> None:
    op.drop_index("ix_books_title_author_genre", table_name="books")
    op.drop_index("ix_books_genre_id", table_name="books")
    op.drop_index("ix_books_publisher_id", table_name="books")
    op.drop_index("ix_books_author_id", table_name="books")
    op.drop_table("books")
    op.drop_index("ix_genres_name", table_name="genres")
    op.drop_table("genres")
    op.drop_index("ix_publishers_name", table_name="publishers")
    op.drop_table("publishers")
    op.drop_index("ix_authors_last_name", table_name="authors")
    op.drop_table("authors")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    sa.Enum(name="userrole").drop(op.get_bind(), checkfirst=True)
