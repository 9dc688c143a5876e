"""create_toolkit_and_service_tables

Revision ID: 8b3e5d0a6c21
Revises: 4f1c2a9d7e10
Create Date: 2026-01-14 15:02:37.540912

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b3e5d0a6c21'
down_revision: Union[str, Sequence[str], None] = '4f1c2a9d7e10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Создание таблиц Toolkit (чек-листы, шаблоны) и услуг с заявками."""

    op.create_table(
        'checklists',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_checklists_id', 'checklists', ['id'])
    op.create_index('ix_checklists_category', 'checklists', ['category'])
    op.create_index('ix_checklists_status', 'checklists', ['status'])

    op.create_table(
        'checklist_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('checklist_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default='true'),
        sa.ForeignKeyConstraint(['checklist_id'], ['checklists.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_checklist_items_id', 'checklist_items', ['id'])
    op.create_index('ix_checklist_items_checklist_id', 'checklist_items', ['checklist_id'])

    op.create_table(
        'toolkit_templates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('format', sa.String(length=20), nullable=False, server_default='plaintext'),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_toolkit_templates_id', 'toolkit_templates', ['id'])
    op.create_index('ix_toolkit_templates_category', 'toolkit_templates', ['category'])
    op.create_index('ix_toolkit_templates_status', 'toolkit_templates', ['status'])

    op.create_table(
        'template_fields',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('label', sa.String(length=255), nullable=False),
        sa.Column('field_type', sa.String(length=20), nullable=False, server_default='text'),
        sa.Column('required', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('default_value', sa.Text(), nullable=True),
        sa.Column('help_text', sa.Text(), nullable=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['template_id'], ['toolkit_templates.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_template_fields_id', 'template_fields', ['id'])
    op.create_index('ix_template_fields_template_id', 'template_fields', ['template_id'])

    op.create_table(
        'services',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('eligibility', sa.Text(), nullable=True),
        sa.Column('procedure', sa.Text(), nullable=True),
        sa.Column('sla_days', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_services_id', 'services', ['id'])
    op.create_index('ix_services_category', 'services', ['category'])
    op.create_index('ix_services_status', 'services', ['status'])

    op.create_table(
        'service_requests',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('service_id', sa.Integer(), nullable=False),
        sa.Column('requester_user_id', sa.Integer(), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['service_id'], ['services.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_service_requests_id', 'service_requests', ['id'])
    op.create_index('ix_service_requests_service_id', 'service_requests', ['service_id'])
    op.create_index('ix_service_requests_requester_user_id', 'service_requests', ['requester_user_id'])
    op.create_index('ix_service_requests_status', 'service_requests', ['status'])


def downgrade() -> None:
    """Удаление таблиц Toolkit и услуг."""
    op.drop_table('service_requests')
    op.drop_table('services')
    op.drop_table('template_fields')
    op.drop_table('toolkit_templates')
    op.drop_table('checklist_items')
    op.drop_table('checklists')
