"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RESOURCE_STATUS = ("AVAILABLE", "OCCUPIED", "RESERVED")
LIFECYCLE_STATUS = ("PENDING", "CONFIRMED", "CANCELLED", "COMPLETED")


def _timestamps():
    return (
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now(), nullable=False),
    )


def upgrade() -> None:
    # Admins table
    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.Enum("ADMIN", "SUPER_ADMIN", name="adminrole"), nullable=False),
        *_timestamps(),
    )

    # Users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        *_timestamps(),
    )

    # Restaurants table
    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("address", sa.String(500), nullable=False),
        sa.Column("city", sa.String(255), nullable=False, server_default=""),
        sa.Column("cuisine", sa.String(255), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("logo", sa.String(500), nullable=False, server_default=""),
        sa.Column("bg_image", sa.String(500), nullable=False, server_default=""),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("ranking", sa.Float(), nullable=False, server_default="0"),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("status", sa.Enum("ACTIVE", "DE_ACTIVE", name="restaurantstatus"), nullable=False),
        *_timestamps(),
    )

    # Tables table
    op.create_table(
        "tables",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False, index=True),
        sa.Column("table_number", sa.String(50), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("status", sa.Enum(*RESOURCE_STATUS, name="tablestatus"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("restaurant_id", "table_number", name="uq_tables_restaurant_number"),
    )

    # Categories table
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("imgurl", sa.String(500), nullable=False, server_default=""),
        *_timestamps(),
        sa.UniqueConstraint("restaurant_id", "name", name="uq_categories_restaurant_name"),
    )

    # Dishes table
    op.create_table(
        "dishes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=False, index=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("imgurl", sa.String(500), nullable=False, server_default=""),
        *_timestamps(),
    )

    # Parking slots table
    op.create_table(
        "parking_slots",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False, index=True),
        sa.Column("slot_number", sa.String(50), nullable=False),
        sa.Column("status", sa.Enum(*RESOURCE_STATUS, name="parkingslotstatus"), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("restaurant_id", "slot_number", name="uq_parking_slots_restaurant_number"),
    )

    # Bookings table
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False, index=True),
        sa.Column("table_id", sa.Integer(), sa.ForeignKey("tables.id"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("customer_email", sa.String(255), nullable=False),
        sa.Column("booking_date", sa.DateTime(), nullable=False),
        sa.Column("status", sa.Enum(*LIFECYCLE_STATUS, name="bookingstatus"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_bookings_table_date", "bookings", ["table_id", "booking_date"])

    # Orders table
    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("restaurant_id", sa.Integer(), sa.ForeignKey("restaurants.id"), nullable=False, index=True),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("order_date", sa.String(50), nullable=False, server_default=""),
        sa.Column("order_time", sa.String(50), nullable=False, server_default=""),
        sa.Column("contact_info", sa.String(255), nullable=False, server_default=""),
        sa.Column("order_type", sa.String(50), nullable=False),
        sa.Column("table_no", sa.String(50), nullable=False, server_default=""),
        sa.Column("trnx_id", sa.String(255), nullable=False, server_default=""),
        sa.Column("trnx_receipt", sa.String(500), nullable=False, server_default=""),
        sa.Column("status", sa.Enum(*LIFECYCLE_STATUS, name="orderstatus"), nullable=False),
        *_timestamps(),
    )

    # Order items table
    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id"), nullable=False, index=True),
        sa.Column("dish_id", sa.Integer(), sa.ForeignKey("dishes.id"), nullable=False, index=True),
        sa.Column("unit_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("order_items")
    op.drop_table("orders")
    op.drop_index("ix_bookings_table_date", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("parking_slots")
    op.drop_table("dishes")
    op.drop_table("categories")
    op.drop_table("tables")
    op.drop_table("restaurants")
    op.drop_table("users")
    op.drop_table("admins")
