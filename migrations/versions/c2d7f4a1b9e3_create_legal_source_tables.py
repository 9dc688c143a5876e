"""create_legal_source_tables

Revision ID: c2d7f4a1b9e3
Revises: 8b3e5d0a6c21
Create Date: 2026-01-21 10:47:12.318604

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c2d7f4a1b9e3'
down_revision: Union[str, Sequence[str], None] = '8b3e5d0a6c21'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Создание таблиц нормативных источников, тегов и версий."""

    op.create_table(
        'legal_sources',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('title', sa.String(length=600), nullable=False),
        sa.Column('issuing_body', sa.String(length=255), nullable=True),
        sa.Column('official_url', sa.String(length=1200), nullable=True),
        sa.Column('published_at', sa.String(length=32), nullable=True),
        sa.Column('effective_from', sa.String(length=32), nullable=True),
        sa.Column('effective_to', sa.String(length=32), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('last_reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.CheckConstraint(
            "type IN ('law', 'decree', 'legislative_decree', 'circular', "
            "'practice', 'jurisprudence', 'contract', 'other')",
            name='ck_legal_sources_type'
        ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_legal_sources_id', 'legal_sources', ['id'])
    op.create_index('ix_legal_sources_type', 'legal_sources', ['type'])
    op.create_index('ix_legal_sources_status', 'legal_sources', ['status'])
    op.create_index('ix_legal_sources_updated_at', 'legal_sources', ['updated_at'])

    op.create_table(
        'legal_tags',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=80), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_index('ix_legal_tags_id', 'legal_tags', ['id'])

    op.create_table(
        'legal_source_tags',
        sa.Column('source_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['source_id'], ['legal_sources.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['legal_tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('source_id', 'tag_id')
    )

    op.create_table(
        'legal_source_versions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('source_id', sa.Integer(), nullable=False),
        sa.Column('version', sa.String(length=32), nullable=False),
        sa.Column('change_note', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['source_id'], ['legal_sources.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('source_id', 'version', name='uq_legal_source_versions_source_version')
    )
    op.create_index('ix_legal_source_versions_id', 'legal_source_versions', ['id'])
    op.create_index('ix_legal_source_versions_source_id', 'legal_source_versions', ['source_id'])

    op.execute("COMMENT ON TABLE legal_sources IS 'Нормативные источники: законы, декреты, циркуляры, практика'")
    op.execute("COMMENT ON COLUMN legal_sources.published_at IS 'Дата публикации YYYY-MM-DD или YYYY-MM'")


def downgrade() -> None:
    """Удаление таблиц нормативных источников."""
    op.drop_table('legal_source_versions')
    op.drop_table('legal_source_tags')
    op.drop_table('legal_tags')
    op.drop_table('legal_sources')
