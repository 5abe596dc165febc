"""init

Revision ID: 3f1a9c2d7b10
Revises:
Create Date: 2026-10-19 10:12:31.204118
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = '3f1a9c2d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CURRENCY = sa.Enum('ARS', 'USD', name='currency')


def upgrade() -> None:
    # === users ===
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('role', sa.Enum('admin', 'user', name='userrole'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # === clients ===
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('type', sa.Enum('individual', 'company', name='clienttype'), nullable=False),
        sa.Column('document_type', sa.Enum('dni', 'cuit', 'cuil', name='documenttype'), nullable=False),
        sa.Column('document_number', sa.String(32), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('address', sa.JSON(), nullable=True),
        sa.Column('business_info', sa.JSON(), nullable=True),
        sa.Column('credit_limit', sa.Numeric(18, 2), nullable=False),
        sa.Column('payment_terms', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('active', 'inactive', 'blocked', name='clientstatus'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_clients_id', 'clients', ['id'])
    op.create_index('ix_clients_name', 'clients', ['name'])
    op.create_index('ix_clients_email', 'clients', ['email'])
    op.create_index('ix_clients_document_number', 'clients', ['document_number'], unique=True)

    # === products ===
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('category', sa.Enum('cereal', 'semilla', 'fertilizante', 'insumo', 'otro',
                                      name='productcategory'), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sku', sa.String(64), nullable=False),
        sa.Column('stock', sa.Float(), nullable=False),
        sa.Column('unit', sa.Enum('kg', 'ton', 'unidad', 'litro', name='productunit'), nullable=False),
        sa.Column('min_stock', sa.Float(), nullable=False),
        sa.Column('price_current', sa.Numeric(18, 4), nullable=False),
        sa.Column('price_currency', CURRENCY, nullable=False),
        sa.Column('price_last_update', sa.DateTime(timezone=True), nullable=False),
        sa.Column('supplier', sa.String(64), nullable=True),
        sa.Column('location', sa.JSON(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('stock >= 0', name='ck_products_stock_non_negative'),
    )
    op.create_index('ix_products_id', 'products', ['id'])
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_category', 'products', ['category'])
    op.create_index('ix_products_sku', 'products', ['sku'], unique=True)

    # === sales ===
    op.create_table(
        'sales',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id'), nullable=False),
        sa.Column('total_amount', sa.Numeric(18, 4), nullable=False),
        sa.Column('payment_method', sa.Enum('cash', 'transfer', 'credit', name='paymentmethod'), nullable=False),
        sa.Column('status', sa.Enum('pending', 'completed', 'cancelled', name='salestatus'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_sales_id', 'sales', ['id'])
    op.create_index('ix_sales_client_id', 'sales', ['client_id'])

    # === sale_items ===
    op.create_table(
        'sale_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('sale_id', sa.Integer(), sa.ForeignKey('sales.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('unit_price', sa.Numeric(18, 4), nullable=False),
        sa.Column('currency', CURRENCY, nullable=False),
    )
    op.create_index('ix_sale_items_id', 'sale_items', ['id'])
    op.create_index('ix_sale_items_sale_id', 'sale_items', ['sale_id'])
    op.create_index('ix_sale_items_product_id', 'sale_items', ['product_id'])


def downgrade() -> None:
    op.drop_table('sale_items')
    op.drop_table('sales')
    op.drop_table('products')
    op.drop_table('clients')
    op.drop_table('users')
