"""create variant options, values and product variants

Revision ID: 3f9c2a71d0b4
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9c2a71d0b4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'variant_options',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False, server_default='text'),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('shop', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('shop', 'name', name='uq_variant_options_shop_name'),
    )
    op.create_index('ix_variant_options_shop', 'variant_options', ['shop'])

    op.create_table(
        'variant_option_values',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('value', sa.String(length=255), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('option_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['option_id'], ['variant_options.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('option_id', 'value', name='uq_variant_option_values_value'),
    )
    op.create_index('ix_variant_option_values_option_id', 'variant_option_values', ['option_id'])

    op.create_table(
        'product_variants',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('product_id', sa.String(length=255), nullable=False),
        sa.Column('catalog_variant_id', sa.String(length=255), nullable=True),
        sa.Column('sku', sa.String(length=255), nullable=True),
        sa.Column('title', sa.String(length=512), nullable=False, server_default=''),
        sa.Column('price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('compare_at_price', sa.Float(), nullable=True),
        sa.Column('inventory', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('shop', sa.String(length=255), nullable=False),
        sa.Column('combination_key', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_product_variants_product_id', 'product_variants', ['product_id'])
    op.create_index('ix_product_variants_shop', 'product_variants', ['shop'])

    op.create_table(
        'product_variant_options',
        sa.Column('product_variant_id', sa.String(length=36), nullable=False),
        sa.Column('option_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['product_variant_id'], ['product_variants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['option_id'], ['variant_options.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('product_variant_id', 'option_id'),
    )

    op.create_table(
        'product_variant_values',
        sa.Column('product_variant_id', sa.String(length=36), nullable=False),
        sa.Column('option_value_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['product_variant_id'], ['product_variants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['option_value_id'], ['variant_option_values.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('product_variant_id', 'option_value_id'),
    )


def downgrade():
    op.drop_table('product_variant_values')
    op.drop_table('product_variant_options')
    op.drop_index('ix_product_variants_shop', table_name='product_variants')
    op.drop_index('ix_product_variants_product_id', table_name='product_variants')
    op.drop_table('product_variants')
    op.drop_index('ix_variant_option_values_option_id', table_name='variant_option_values')
    op.drop_table('variant_option_values')
    op.drop_index('ix_variant_options_shop', table_name='variant_options')
    op.drop_table('variant_options')
