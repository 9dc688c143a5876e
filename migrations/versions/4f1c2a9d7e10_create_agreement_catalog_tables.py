"""create_agreement_catalog_tables

Revision ID: 4f1c2a9d7e10
Revises:
Create Date: 2026-01-12 10:24:51.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2a9d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Создание таблиц каталога договоров: agreements, уровни, затраты, взносы."""

    op.create_table(
        'agreements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('external_id', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=500), nullable=False),
        sa.Column('sector', sa.String(length=255), nullable=False),
        sa.Column('sector_category', sa.String(length=64), nullable=False),
        sa.Column('issuer', sa.String(length=255), nullable=True),
        sa.Column('valid_from', sa.Date(), nullable=True),
        sa.Column('valid_to', sa.Date(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_house', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_custom', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('cnel_code', sa.String(length=10), nullable=True),
        sa.Column('cnel_macro_sector', sa.String(length=100), nullable=True),
        sa.Column('employer_parties', sa.Text(), nullable=True),
        sa.Column('union_parties', sa.Text(), nullable=True),
        sa.Column('workers_count', sa.Integer(), nullable=True),
        sa.Column('companies_count', sa.Integer(), nullable=True),
        sa.Column('data_source', sa.String(length=128), nullable=True),
        sa.Column('data_updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_agreements_id', 'agreements', ['id'])
    op.create_index('ix_agreements_external_id', 'agreements', ['external_id'], unique=True)
    op.create_index('ix_agreements_name', 'agreements', ['name'])
    op.create_index('ix_agreements_sector_category', 'agreements', ['sector_category'])
    op.create_index('ix_agreements_is_house', 'agreements', ['is_house'])
    op.create_index('ix_agreements_created_by', 'agreements', ['created_by'])
    op.create_index('ix_agreements_cnel_code', 'agreements', ['cnel_code'])
    op.create_index('ix_agreements_cnel_macro_sector', 'agreements', ['cnel_macro_sector'])

    op.create_table(
        'agreement_levels',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('agreement_id', sa.Integer(), nullable=False),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('base_salary_monthly', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['agreement_id'], ['agreements.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('base_salary_monthly >= 0', name='ck_agreement_levels_salary_non_negative')
    )
    op.create_index('ix_agreement_levels_id', 'agreement_levels', ['id'])
    op.create_index('ix_agreement_levels_agreement_id', 'agreement_levels', ['agreement_id'])

    op.create_table(
        'agreement_additional_costs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('agreement_id', sa.Integer(), nullable=False),
        sa.Column('severance_rate', sa.Numeric(precision=7, scale=3), nullable=False),
        sa.Column('social_rate', sa.Numeric(precision=7, scale=3), nullable=False),
        sa.Column('other_rate', sa.Numeric(precision=7, scale=3), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['agreement_id'], ['agreements.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('agreement_id', name='uq_agreement_additional_costs_agreement_id')
    )
    op.create_index('ix_agreement_additional_costs_id', 'agreement_additional_costs', ['id'])

    op.create_table(
        'agreement_contribution_rules',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('agreement_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=20), nullable=False, server_default='other'),
        sa.Column('mode', sa.String(length=32), nullable=False, server_default='fixed'),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False, server_default='0'),
        sa.Column('part_time_amount', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('percentage', sa.Numeric(precision=7, scale=3), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['agreement_id'], ['agreements.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "mode IN ('fixed', 'percentage', 'fixed_by_employment_type')",
            name='ck_contribution_rules_mode'
        ),
        sa.CheckConstraint(
            "category IN ('bilateral', 'welfare', 'health', 'pension', 'other')",
            name='ck_contribution_rules_category'
        )
    )
    op.create_index('ix_agreement_contribution_rules_id', 'agreement_contribution_rules', ['id'])
    op.create_index('ix_agreement_contribution_rules_agreement_id', 'agreement_contribution_rules', ['agreement_id'])

    op.execute("COMMENT ON TABLE agreements IS 'Коллективные договоры (CCNL), каталог и пользовательские'")
    op.execute("COMMENT ON COLUMN agreements.is_house IS 'Собственный договор (ENGEB) или национальный'")
    op.execute("COMMENT ON COLUMN agreement_contribution_rules.mode IS 'fixed | percentage | fixed_by_employment_type'")


def downgrade() -> None:
    """Удаление таблиц каталога договоров."""
    op.drop_index('ix_agreement_contribution_rules_agreement_id', table_name='agreement_contribution_rules')
    op.drop_index('ix_agreement_contribution_rules_id', table_name='agreement_contribution_rules')
    op.drop_table('agreement_contribution_rules')

    op.drop_index('ix_agreement_additional_costs_id', table_name='agreement_additional_costs')
    op.drop_table('agreement_additional_costs')

    op.drop_index('ix_agreement_levels_agreement_id', table_name='agreement_levels')
    op.drop_index('ix_agreement_levels_id', table_name='agreement_levels')
    op.drop_table('agreement_levels')

    op.drop_index('ix_agreements_cnel_macro_sector', table_name='agreements')
    op.drop_index('ix_agreements_cnel_code', table_name='agreements')
    op.drop_index('ix_agreements_created_by', table_name='agreements')
    op.drop_index('ix_agreements_is_house', table_name='agreements')
    op.drop_index('ix_agreements_sector_category', table_name='agreements')
    op.drop_index('ix_agreements_name', table_name='agreements')
    op.drop_index('ix_agreements_external_id', table_name='agreements')
    op.drop_index('ix_agreements_id', table_name='agreements')
    op.drop_table('agreements')
