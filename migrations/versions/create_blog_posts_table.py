"""Create blog_posts table

Revision ID: create_blog_posts_table
Revises:
Create Date: 2026-01-05

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'create_blog_posts_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'blog_posts',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('title_de', sa.String(500), nullable=True),
        sa.Column('title_en', sa.String(500), nullable=True),
        sa.Column('title_ru', sa.String(500), nullable=True),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('excerpt_de', sa.Text(), nullable=True),
        sa.Column('excerpt_en', sa.Text(), nullable=True),
        sa.Column('excerpt_ru', sa.Text(), nullable=True),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('content_de', sa.Text(), nullable=True),
        sa.Column('content_en', sa.Text(), nullable=True),
        sa.Column('content_ru', sa.Text(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        sa.Column('author', sa.String(255), nullable=True),
        sa.Column('image_url', sa.String(1000), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_blog_posts_slug', 'blog_posts', ['slug'], unique=True)
    op.create_index('ix_blog_posts_published', 'blog_posts', ['published'])
    op.create_index('ix_blog_posts_created_at', 'blog_posts', ['created_at'])


def downgrade():
    op.drop_index('ix_blog_posts_created_at', table_name='blog_posts')
    op.drop_index('ix_blog_posts_published', table_name='blog_posts')
    op.drop_index('ix_blog_posts_slug', table_name='blog_posts')
    op.drop_table('blog_posts')
