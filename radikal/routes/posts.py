"""Blog post routes with on-demand localization."""

from flask import Blueprint, request, jsonify
from radikal.models import BlogPost
from radikal.services.localization import localize_post, localize_posts
import logging

logger = logging.getLogger(__name__)

posts_bp = Blueprint('posts', __name__)


@posts_bp.route('', methods=['GET'])
def get_posts():
    """List published posts, newest first, with title/excerpt in `lang`."""
    try:
        page = request.args.get('page', 1, type=int)
        per_page = min(request.args.get('per_page', 20, type=int), 100)
        lang = request.args.get('lang')

        posts = BlogPost.published_query().order_by(BlogPost.created_at.desc()).paginate(
            page=page, per_page=per_page, error_out=False
        )

        return jsonify({
            'posts': localize_posts(posts.items, lang),
            'total': posts.total,
            'pages': posts.pages,
            'current_page': page
        }), 200
    except Exception as e:
        logger.error(f'Error listing posts: {e}', exc_info=True)
        return jsonify({'error': str(e)}), 500


@posts_bp.route('/<slug>', methods=['GET'])
def get_post(slug):
    """Get a published post by slug, localized to `lang`."""
    try:
        post = BlogPost.get_published_by_slug(slug)
        if not post:
            return jsonify({'error': 'Post not found'}), 404

        return jsonify(localize_post(post, request.args.get('lang'))), 200
    except Exception as e:
        logger.error(f'Error loading post {slug}: {e}', exc_info=True)
        return jsonify({'error': str(e)}), 500
