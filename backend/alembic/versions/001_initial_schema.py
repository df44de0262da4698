"""Initial schema — proposals, onboarding profiles, marketplace, ledger links.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "proposals",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("personal_info", sa.JSON, nullable=False),
        sa.Column("funding_goals", sa.JSON, nullable=False),
        sa.Column("financial_info", sa.JSON, nullable=True),
        sa.Column("essay_or_statement", sa.Text, nullable=True),
        sa.Column("supporting_documents", sa.JSON, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="submitted"),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "student_onboardings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("institution", sa.String(300), nullable=False),
        sa.Column("course_of_study", sa.String(300), nullable=False, server_default=""),
        sa.Column("year_of_study", sa.String(50), nullable=False, server_default=""),
        sa.Column("skills", sa.JSON, nullable=False),
        sa.Column("interests", sa.JSON, nullable=False),
        sa.Column("onboarding_data", sa.JSON, nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_student_onboardings_user_id", "student_onboardings", ["user_id"])

    op.create_table(
        "investor_onboardings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("company", sa.String(300), nullable=False),
        sa.Column("position", sa.String(200), nullable=False, server_default=""),
        sa.Column("investment_focus", sa.JSON, nullable=False),
        sa.Column("investment_stage", sa.String(100), nullable=False, server_default=""),
        sa.Column("portfolio_size", sa.String(100), nullable=False, server_default=""),
        sa.Column("risk_appetite", sa.String(10), nullable=True),
        sa.Column("onboarding_data", sa.JSON, nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_investor_onboardings_user_id", "investor_onboardings", ["user_id"])

    op.create_table(
        "marketplace_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("item_id", sa.String(100), nullable=False, unique=True),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("provider", sa.String(200), nullable=False),
        sa.Column("course_id", sa.String(100), nullable=False),
        sa.Column("image", sa.String(500), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("rating", sa.Float, nullable=False),
        sa.Column("review_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("featured", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("skills", sa.JSON, nullable=False),
    )

    op.create_table(
        "blockchain_connections",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("student_proposal_id", sa.String(255), nullable=False, unique=True),
        sa.Column("blockchain_proposal_id", sa.Integer, nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("eth_amount", sa.Float, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "ledger_transactions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "connection_id", UUID(as_uuid=True),
            sa.ForeignKey("blockchain_connections.id"), nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("tx_hash", sa.String(100), nullable=False),
        sa.Column("sender", sa.String(100), nullable=False),
        sa.Column("amount", sa.String(100), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("connection_id", "position", name="uq_ledger_tx_position"),
    )


def downgrade() -> None:
    op.drop_table("ledger_transactions")
    op.drop_table("blockchain_connections")
    op.drop_table("marketplace_items")
    op.drop_index("ix_investor_onboardings_user_id", "investor_onboardings")
    op.drop_table("investor_onboardings")
    op.drop_index("ix_student_onboardings_user_id", "student_onboardings")
    op.drop_table("student_onboardings")
    op.drop_table("proposals")
