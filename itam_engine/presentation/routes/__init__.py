"""
Routes package for the asset lifecycle API
"""

from itam_engine.utils.logger import get_logger

logger = get_logger("itam_engine.routes")


def init_app(app):
    """Register all route blueprints with the Flask app"""
    logger.debug("Initializing route blueprints")

    from .assets.lifecycle_api import bp as lifecycle_api_bp
    app.register_blueprint(lifecycle_api_bp, url_prefix='/api/assets')
