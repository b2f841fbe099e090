"""Catalog, segments, promotions and personalized menus

Revision ID: 001_menu_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_menu_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Catalog
    op.create_table(
        'categories',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('category_id', sa.Uuid(), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint('base_price > 0', name='ck_products_base_price_positive'),
    )

    op.create_table(
        'price_history',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('product_id', sa.Uuid(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('old_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('new_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('change_reason', sa.String(255), nullable=True),
        sa.Column('changed_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_price_history_product_id', 'price_history', ['product_id'])

    # Segments & demand
    op.create_table(
        'segments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )

    op.create_table(
        'product_demand_metrics',
        sa.Column('product_id', sa.Uuid(), sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('segment_id', sa.Uuid(), sa.ForeignKey('segments.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('lift_factor', sa.Numeric(8, 4), nullable=False),
        sa.Column('redemption_rate', sa.Numeric(5, 4), nullable=True),
        sa.Column('price_elasticity', sa.Numeric(6, 3), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_index('idx_demand_metrics_segment_lift', 'product_demand_metrics', ['segment_id', 'lift_factor'])

    # Promotions
    op.create_table(
        'promotion_categories',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )

    op.create_table(
        'promotions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('promotion_category_id', sa.Uuid(), sa.ForeignKey('promotion_categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('discount_percent', sa.Numeric(5, 2), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint('discount_percent >= 0 AND discount_percent <= 100', name='ck_promotions_discount_range'),
    )
    op.create_index('idx_promotions_active_window', 'promotions', ['is_active', 'start_date', 'end_date'])

    op.create_table(
        'product_promotions',
        sa.Column('promotion_id', sa.Uuid(), sa.ForeignKey('promotions.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('product_id', sa.Uuid(), sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'geo_promotions',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('promotion_id', sa.Uuid(), sa.ForeignKey('promotions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('region_code', sa.String(20), nullable=False),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('latitude', sa.Numeric(9, 6), nullable=True),
        sa.Column('longitude', sa.Numeric(9, 6), nullable=True),
        sa.Column('radius_km', sa.Numeric(8, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_index('ix_geo_promotions_promotion_id', 'geo_promotions', ['promotion_id'])

    # Personalized menus
    op.create_table(
        'personalized_menus',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('segment_id', sa.Uuid(), sa.ForeignKey('segments.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('generated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_personalized_menus_segment_generated', 'personalized_menus', ['segment_id', 'generated_at'])

    op.create_table(
        'personalized_menu_items',
        sa.Column('menu_id', sa.Uuid(), sa.ForeignKey('personalized_menus.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('product_id', sa.Uuid(), sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('final_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('discount_applied', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('promotion_id', sa.Uuid(), sa.ForeignKey('promotions.id'), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.CheckConstraint(
            '(discount_applied AND promotion_id IS NOT NULL) OR (NOT discount_applied AND promotion_id IS NULL)',
            name='ck_menu_items_discount_promotion',
        ),
    )


def downgrade() -> None:
    op.drop_table('personalized_menu_items')
    op.drop_table('personalized_menus')
    op.drop_table('geo_promotions')
    op.drop_table('product_promotions')
    op.drop_table('promotions')
    op.drop_table('promotion_categories')
    op.drop_table('product_demand_metrics')
    op.drop_table('segments')
    op.drop_table('price_history')
    op.drop_table('products')
    op.drop_table('categories')
