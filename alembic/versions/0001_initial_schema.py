"""initial schema with default company settings

Revision ID: initial_0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'initial_0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


invoice_type = sa.Enum('INVOICE', 'QUOTE', name='invoicetype')
invoice_status = sa.Enum('DRAFT', 'SENT', 'PAID', 'OVERDUE', name='invoicestatus')


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    company_settings = op.create_table(
        'company_settings',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('company_email', sa.String(255), nullable=True),
        sa.Column('company_phone', sa.String(50), nullable=True),
        sa.Column('company_address', sa.Text(), nullable=True),
        sa.Column('tax_enabled', sa.Boolean(), nullable=False),
        sa.Column('tax_rate', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('default_payment_terms', sa.Text(), nullable=False),
        sa.Column('next_invoice_number', sa.Integer(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('invoice_number', sa.String(50), nullable=False),
        sa.Column('invoice_type', invoice_type, nullable=False),
        sa.Column('status', invoice_status, nullable=False),
        sa.Column('invoice_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('client_name', sa.String(255), nullable=False),
        sa.Column('client_email', sa.String(255), nullable=True),
        sa.Column('client_address', sa.Text(), nullable=True),
        sa.Column('subtotal', sa.Numeric(), nullable=False),
        sa.Column('tax_enabled', sa.Boolean(), nullable=False),
        sa.Column('tax_amount', sa.Numeric(), nullable=False),
        sa.Column('total', sa.Numeric(), nullable=False),
        sa.Column('payment_terms', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_invoices_invoice_number', 'invoices', ['invoice_number'])

    op.create_table(
        'line_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'invoice_id',
            sa.Integer(),
            sa.ForeignKey('invoices.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('quantity', sa.Numeric(), nullable=False),
        sa.Column('rate', sa.Numeric(), nullable=False),
        sa.Column('amount', sa.Numeric(), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_line_items_invoice_id', 'line_items', ['invoice_id'])

    # The application expects exactly one settings row
    op.bulk_insert(company_settings, [{
        'company_name': 'My Company',
        'tax_enabled': True,
        'tax_rate': 10,
        'default_payment_terms': 'Due within 30 days',
        'next_invoice_number': 1,
    }])


def downgrade() -> None:
    op.drop_index('ix_line_items_invoice_id', table_name='line_items')
    op.drop_table('line_items')
    op.drop_index('ix_invoices_invoice_number', table_name='invoices')
    op.drop_table('invoices')
    op.drop_table('company_settings')
    invoice_status.drop(op.get_bind(), checkfirst=True)
    invoice_type.drop(op.get_bind(), checkfirst=True)
