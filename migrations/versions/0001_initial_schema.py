"""Initial schema: organizations, users, properties, floors, units, tenants, unit tenancies, payments

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'organizations',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('verification_code', sa.String(16), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_organizations_verification_code', 'organizations', ['verification_code'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('organization_id', sa.Uuid(), sa.ForeignKey('organizations.id'), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_organization_id', 'users', ['organization_id'])

    op.create_table(
        'properties',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('organization_id', sa.Uuid(), sa.ForeignKey('organizations.id'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('property_type', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_properties_organization_id', 'properties', ['organization_id'])

    op.create_table(
        'floors',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('property_id', sa.Uuid(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(10), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_floors_property_id', 'floors', ['property_id'])

    op.create_table(
        'units',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('property_id', sa.Uuid(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('floor_id', sa.Uuid(), sa.ForeignKey('floors.id', ondelete='CASCADE'), nullable=True),
        sa.Column('unit_number', sa.String(20), nullable=False),
        sa.Column('monthly_rent', sa.Float(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='available'),
        *timestamps(),
    )
    op.create_index('ix_units_property_id', 'units', ['property_id'])
    op.create_index('ix_units_floor_id', 'units', ['floor_id'])
    op.create_index('idx_units_property_status', 'units', ['property_id', 'status'])

    op.create_table(
        'tenants',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('property_id', sa.Uuid(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('id_number', sa.String(50), nullable=True),
        sa.Column('emergency_contact', sa.String(255), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_tenants_property_id', 'tenants', ['property_id'])
    op.create_index('ix_tenants_email', 'tenants', ['email'])
    op.create_index('ix_tenants_id_number', 'tenants', ['id_number'])

    op.create_table(
        'unit_tenancies',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('unit_id', sa.Uuid(), sa.ForeignKey('units.id', ondelete='CASCADE'), nullable=False),
        sa.Column('property_id', sa.Uuid(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('monthly_rent', sa.Float(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_unit_tenancies_tenant_id', 'unit_tenancies', ['tenant_id'])
    op.create_index('ix_unit_tenancies_unit_id', 'unit_tenancies', ['unit_id'])
    op.create_index('ix_unit_tenancies_property_id', 'unit_tenancies', ['property_id'])
    op.create_index('ix_unit_tenancies_status', 'unit_tenancies', ['status'])
    # At most one active tenancy per unit
    op.create_index(
        'uq_unit_tenancies_active_unit',
        'unit_tenancies',
        ['unit_id'],
        unique=True,
        sqlite_where=sa.text("status = 'active'"),
        postgresql_where=sa.text("status = 'active'"),
    )

    op.create_table(
        'payments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('unit_tenancy_id', sa.Uuid(), sa.ForeignKey('unit_tenancies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('property_id', sa.Uuid(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('description', sa.String(255), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=True),
        sa.Column('payment_method', sa.String(50), nullable=True),
        sa.Column('reference_number', sa.String(100), nullable=True),
        sa.Column('payment_status', sa.String(20), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_payments_unit_tenancy_id', 'payments', ['unit_tenancy_id'])
    op.create_index('ix_payments_property_id', 'payments', ['property_id'])
    op.create_index('idx_payments_property_status', 'payments', ['property_id', 'payment_status'])


def downgrade() -> None:
    op.drop_table('payments')
    op.drop_table('unit_tenancies')
    op.drop_table('tenants')
    op.drop_table('units')
    op.drop_table('floors')
    op.drop_table('properties')
    op.drop_table('users')
    op.drop_table('organizations')
