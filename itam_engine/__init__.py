from flask import Flask
from dotenv import load_dotenv
from itam_engine.utils.logger import SingletonLogger, get_logger


def create_app(config=None):
    """
    Application factory for the asset lifecycle JSON API.

    Args:
        config: Optional EngineConfig; read from the environment when omitted
    """
    from itam_engine.config import EngineConfig
    from itam_engine.data.assets.reference_catalog import load_reference_catalog, set_default_catalog
    from itam_engine.services.assets.asset_intake_service import AssetIntakeService

    load_dotenv()
    config = config or EngineConfig.from_env()

    app = Flask(__name__)

    SingletonLogger().configure(config.log_level, config.log_dir)
    logger = get_logger("itam_engine")
    logger.info("Initializing Flask application")

    # Reference data is loaded once at startup and shared read-only
    catalog = load_reference_catalog(config.catalog_path)
    set_default_catalog(catalog)

    app.config['ENGINE_CONFIG'] = config
    app.config['ENABLE_HSTS'] = config.enable_hsts
    app.extensions['itam_catalog'] = catalog
    app.extensions['itam_intake'] = AssetIntakeService(
        catalog=catalog,
        duplicate_scan_limit=config.duplicate_scan_limit,
    )

    from itam_engine.presentation.routes import init_app as init_routes
    init_routes(app)

    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Cache-Control'] = 'no-store'
        if app.config.get('ENABLE_HSTS'):
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    logger.info(f"Flask application initialization complete (catalog {catalog.version})")

    return app
