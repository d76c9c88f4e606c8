"""Create Restaurant, Restaurant_submission and User tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 10:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    """식당, 식당 제보, 사용자 테이블 생성"""
    op.create_table(
        "Restaurant",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("category", sa.Text, nullable=True),
        sa.Column("location", sa.Text, nullable=True),
        sa.Column("price_range", sa.Text, nullable=True),
        sa.Column("rating", sa.Float(53), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("recommended_menu", sa.Text, nullable=False),
        sa.Column("image", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index("restaurant_name_index", "Restaurant", ["name"])
    op.create_index("restaurant_rating_index", "Restaurant", ["rating"])

    op.create_table(
        "Restaurant_submission",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("restaurant_name", sa.Text, nullable=False),
        sa.Column("category", sa.Text, nullable=False),
        sa.Column("location", sa.Text, nullable=False),
        sa.Column("price_range", sa.Text, nullable=False),
        sa.Column("recommended_menu", sa.Text, nullable=False),
        sa.Column("review", sa.Text, nullable=False),
        sa.Column("submitter_name", sa.Text, nullable=False),
        sa.Column("submitter_email", sa.Text, nullable=False),
        sa.Column("status", sa.Text, nullable=False),
        sa.Column("restaurant_id", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index(
        "restaurant_submission_status_index", "Restaurant_submission", ["status"]
    )
    op.create_index(
        "restaurant_submission_restaurant_index",
        "Restaurant_submission",
        ["restaurant_id"],
    )

    op.create_table(
        "User",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("password_hash", sa.Text, nullable=True),
        sa.Column("provider", sa.Text, nullable=False, server_default="local"),
        sa.Column("provider_id", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("provider", "provider_id", name="user_provider_uc"),
    )
    op.create_index("user_email_index", "User", ["email"])


def downgrade():
    """테이블 삭제"""
    op.drop_index("user_email_index", table_name="User")
    op.drop_table("User")
    op.drop_index(
        "restaurant_submission_restaurant_index", table_name="Restaurant_submission"
    )
    op.drop_index(
        "restaurant_submission_status_index", table_name="Restaurant_submission"
    )
    op.drop_table("Restaurant_submission")
    op.drop_index("restaurant_rating_index", table_name="Restaurant")
    op.drop_index("restaurant_name_index", table_name="Restaurant")
    op.drop_table("Restaurant")
