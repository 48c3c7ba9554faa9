"""Create translation_cache table

Revision ID: create_translation_cache_table
Revises: create_blog_posts_table
Create Date: 2026-01-12

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_translation_cache_table'
down_revision = 'create_blog_posts_table'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'translation_cache',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('original_text_hash', sa.String(32), nullable=False),
        sa.Column('source_lang', sa.String(5), nullable=False),
        sa.Column('target_lang', sa.String(5), nullable=False),
        sa.Column('original_text', sa.Text(), nullable=False),
        sa.Column('translated_text', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('original_text_hash', 'source_lang', 'target_lang', name='unique_translation')
    )

    # Reverse search scans translated_text per target language
    op.create_index('ix_translation_cache_original_text_hash', 'translation_cache', ['original_text_hash'])
    op.create_index('ix_translation_cache_target_lang', 'translation_cache', ['target_lang'])


def downgrade():
    op.drop_index('ix_translation_cache_target_lang', table_name='translation_cache')
    op.drop_index('ix_translation_cache_original_text_hash', table_name='translation_cache')
    op.drop_table('translation_cache')
