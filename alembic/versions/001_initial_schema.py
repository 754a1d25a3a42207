"""Initial schema: applicants and payments with their unique constraints.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

applicants.email, applicants.phone and applicants.aadhar_number are each
unique; payments.email is unique. These constraints are what rejects
duplicate identities and duplicate payment records.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'applicants',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('phone', sa.String(32), nullable=False),
        sa.Column('aadhar_number', sa.String(32), nullable=False),
        sa.Column('application_number', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('email', name='uq_applicants_email'),
        sa.UniqueConstraint('phone', name='uq_applicants_phone'),
        sa.UniqueConstraint('aadhar_number', name='uq_applicants_aadhar_number'),
    )
    op.create_table(
        'payments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('paid', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('email', name='uq_payments_email'),
    )


def downgrade() -> None:
    op.drop_table('payments')
    op.drop_table('applicants')
