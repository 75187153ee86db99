"""Initial loyalty schema

Revision ID: 0001_initial_loyalty_schema
Revises:
Create Date: 2025-07-15 10:34:15.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_loyalty_schema'
down_revision = None
branch_labels = None
depends_on = None

customer_tier = sa.Enum('BRONZE', 'SILVER', 'GOLD', 'PLATINUM', name='customertier')
transaction_type = sa.Enum('EARNED', 'REDEMPTION', 'BONUS', 'ADJUSTMENT', name='transactiontype')
menu_category = sa.Enum('MAIN', 'BEVERAGE', 'SALAD', 'DESSERT', 'APPETIZER', name='menucategory')
loyalty_mode = sa.Enum('SMART', 'MANUAL', 'NONE', name='loyaltymode')


def upgrade():
    op.create_table('restaurants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('slug', sa.String(length=100), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('settings', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_restaurants_id', 'restaurants', ['id'])
    op.create_index('ix_restaurants_slug', 'restaurants', ['slug'], unique=True)

    op.create_table('customers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('date_of_birth', sa.DateTime(), nullable=True),
        sa.Column('marketing_opt_in', sa.Boolean(), nullable=True),
        sa.Column('total_points', sa.Integer(), nullable=False),
        sa.Column('lifetime_points', sa.Integer(), nullable=False),
        sa.Column('current_tier', customer_tier, nullable=False),
        sa.Column('tier_progress', sa.Integer(), nullable=False),
        sa.Column('tier_updated_at', sa.DateTime(), nullable=True),
        sa.Column('visit_count', sa.Integer(), nullable=False),
        sa.Column('total_spent', sa.Float(), nullable=False),
        sa.Column('last_visit', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('restaurant_id', 'email', name='uq_customers_restaurant_email')
    )
    op.create_index('ix_customers_id', 'customers', ['id'])
    op.create_index('ix_customers_restaurant_id', 'customers', ['restaurant_id'])
    op.create_index('ix_customers_email', 'customers', ['email'])
    op.create_index('ix_customers_current_tier', 'customers', ['current_tier'])
    op.create_index('ix_customers_restaurant_created', 'customers', ['restaurant_id', 'created_at'])

    op.create_table('loyalty_rewards',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('points_required', sa.Integer(), nullable=False),
        sa.Column('min_tier', sa.String(length=20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('points_required > 0', name='points_required_positive'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_loyalty_rewards_id', 'loyalty_rewards', ['id'])
    op.create_index('ix_loyalty_rewards_restaurant_id', 'loyalty_rewards', ['restaurant_id'])
    op.create_index('ix_loyalty_rewards_is_active', 'loyalty_rewards', ['is_active'])

    op.create_table('loyalty_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('type', transaction_type, nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('amount_spent', sa.Float(), nullable=True),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('balance_after', sa.Integer(), nullable=False),
        sa.Column('reward_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id']),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id']),
        sa.ForeignKeyConstraint(['reward_id'], ['loyalty_rewards.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_loyalty_transactions_id', 'loyalty_transactions', ['id'])
    op.create_index('ix_loyalty_transactions_restaurant_id', 'loyalty_transactions', ['restaurant_id'])
    op.create_index('ix_loyalty_transactions_customer_id', 'loyalty_transactions', ['customer_id'])
    op.create_index('ix_loyalty_transactions_type', 'loyalty_transactions', ['type'])
    op.create_index('ix_loyalty_transactions_restaurant_created', 'loyalty_transactions', ['restaurant_id', 'created_at'])
    op.create_index('ix_loyalty_transactions_customer_created', 'loyalty_transactions', ['customer_id', 'created_at'])

    op.create_table('loyalty_reward_redemptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=False),
        sa.Column('reward_id', sa.Integer(), nullable=False),
        sa.Column('points_used', sa.Integer(), nullable=False),
        sa.Column('redeemed_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id']),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id']),
        sa.ForeignKeyConstraint(['reward_id'], ['loyalty_rewards.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_loyalty_reward_redemptions_id', 'loyalty_reward_redemptions', ['id'])
    op.create_index('ix_loyalty_reward_redemptions_restaurant_id', 'loyalty_reward_redemptions', ['restaurant_id'])
    op.create_index('ix_loyalty_reward_redemptions_customer_id', 'loyalty_reward_redemptions', ['customer_id'])
    op.create_index('ix_loyalty_reward_redemptions_redeemed_at', 'loyalty_reward_redemptions', ['redeemed_at'])

    op.create_table('menu_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', menu_category, nullable=False),
        sa.Column('cost_price', sa.Float(), nullable=False),
        sa.Column('selling_price', sa.Float(), nullable=False),
        sa.Column('loyalty_mode', loyalty_mode, nullable=False),
        sa.Column('loyalty_settings', sa.JSON(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_menu_items_id', 'menu_items', ['id'])
    op.create_index('ix_menu_items_restaurant_id', 'menu_items', ['restaurant_id'])
    op.create_index('ix_menu_items_name', 'menu_items', ['name'])
    op.create_index('ix_menu_items_restaurant_category', 'menu_items', ['restaurant_id', 'category'])


def downgrade():
    op.drop_table('menu_items')
    op.drop_table('loyalty_reward_redemptions')
    op.drop_table('loyalty_transactions')
    op.drop_table('loyalty_rewards')
    op.drop_table('customers')
    op.drop_table('restaurants')

    bind = op.get_bind()
    for enum_type in (loyalty_mode, menu_category, transaction_type, customer_tier):
        enum_type.drop(bind, checkfirst=True)
