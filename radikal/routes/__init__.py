"""Routes package for the blog backend."""


def register_routes(app):
    """Register all route blueprints with the application."""
    from .translate import translate_bp
    from .search import search_bp
    from .posts import posts_bp
    from .rss import rss_bp

    app.register_blueprint(translate_bp, url_prefix='/api/translate')
    app.register_blueprint(search_bp, url_prefix='/api/search')
    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(rss_bp, url_prefix='/api/rss')
