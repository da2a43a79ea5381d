"""Create companies, category, feature and catalog tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Create tenant and catalog tables."""
    # Companies table
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('company_type', sa.String(50), nullable=False),
        sa.Column('web_site', sa.String(255), nullable=True),
        sa.Column('email', sa.String(75), nullable=False),
        sa.Column('company_authorized_name', sa.String(50), nullable=False),
        sa.Column('company_authorized_surname', sa.String(50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('is_supplier', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_constructor', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('password_hash', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_companies_email', 'companies', ['email'], unique=True)

    # Category trees
    for table in ('product_categories', 'construction_categories'):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('name', sa.String(100), nullable=False),
            sa.Column('description', sa.String(255), nullable=True),
            sa.Column('parent_id', sa.Integer(),
                      sa.ForeignKey(f'{table}.id'), nullable=True, index=True),
            *_timestamps(),
        )

    # Feature definitions
    op.create_table(
        'p_features',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(255), nullable=True),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('type', sa.String(32), nullable=False, server_default='string'),
        sa.Column('product_category_id', sa.Integer(),
                  sa.ForeignKey('product_categories.id'), nullable=False, index=True),
        *_timestamps(),
    )
    op.create_table(
        'c_features',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(255), nullable=True),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('type', sa.String(32), nullable=False, server_default='string'),
        sa.Column('construction_category_id', sa.Integer(),
                  sa.ForeignKey('construction_categories.id'), nullable=False, index=True),
        *_timestamps(),
    )

    # Products table
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('company_id', sa.Integer(),
                  sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('spu', sa.String(50), nullable=False, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('hero_image', sa.String(255), nullable=True),
        sa.Column('product_category_id', sa.Integer(),
                  sa.ForeignKey('product_categories.id'), nullable=False, index=True),
        *_timestamps(),
    )
    op.create_table(
        'product_images',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('product_id', sa.Integer(),
                  sa.ForeignKey('products.id'), nullable=False, index=True),
        sa.Column('remote_link', sa.String(255), nullable=False),
        *_timestamps(),
    )

    # Variants table
    op.create_table(
        'variants',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('product_id', sa.Integer(),
                  sa.ForeignKey('products.id'), nullable=False, index=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('sku', sa.String(50), nullable=False),
        sa.Column('description', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='false'),
        *_timestamps(),
    )
    op.create_table(
        'variant_images',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('variant_id', sa.Integer(),
                  sa.ForeignKey('variants.id'), nullable=False, index=True),
        sa.Column('remote_link', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'product_features',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('variant_id', sa.Integer(),
                  sa.ForeignKey('variants.id'), nullable=False, index=True),
        sa.Column('product_feature_id', sa.Integer(),
                  sa.ForeignKey('p_features.id'), nullable=False, index=True),
        sa.Column('value', sa.String(128), nullable=False),
        *_timestamps(),
    )

    # Constructions table
    op.create_table(
        'constructions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('company_id', sa.Integer(),
                  sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('construction_category_id', sa.Integer(),
                  sa.ForeignKey('construction_categories.id'), nullable=False, index=True),
        sa.Column('geographic_region', sa.String(20), nullable=False),
        sa.Column('province', sa.String(50), nullable=False),
        sa.Column('district', sa.String(50), nullable=False),
        sa.Column('stage', sa.String(20), nullable=False),
        sa.Column('start', sa.String(25), nullable=False),
        sa.Column('end', sa.String(25), nullable=False),
        sa.Column('cost_of_project', sa.Numeric(10, 2), nullable=True),
        sa.Column('land_area', sa.Numeric(10, 2), nullable=True),
        sa.Column('construction_zone', sa.Numeric(10, 2), nullable=True),
        *_timestamps(),
    )
    op.create_table(
        'construction_images',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('construction_id', sa.Integer(),
                  sa.ForeignKey('constructions.id'), nullable=False, index=True),
        sa.Column('remote_link', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        'construction_features',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('construction_id', sa.Integer(),
                  sa.ForeignKey('constructions.id'), nullable=False, index=True),
        sa.Column('construction_feature_id', sa.Integer(),
                  sa.ForeignKey('c_features.id'), nullable=False, index=True),
        sa.Column('value', sa.String(128), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    """Drop tenant and catalog tables."""
    op.drop_table('construction_features')
    op.drop_table('construction_images')
    op.drop_table('constructions')
    op.drop_table('product_features')
    op.drop_table('variant_images')
    op.drop_table('variants')
    op.drop_table('product_images')
    op.drop_table('products')
    op.drop_table('c_features')
    op.drop_table('p_features')
    op.drop_table('construction_categories')
    op.drop_table('product_categories')
    op.drop_index('ix_companies_email', table_name='companies')
    op.drop_table('companies')
