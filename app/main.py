import argparse
import logging
from pathlib import Path

# Import configuration management
import sys
sys.path.append(str(Path(__file__).parent.parent))
from config_manager import ConfigManager, create_llm_provider

from flask import Flask, Response, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from app.pdf_analysis.factory import create_pdf_analysis_module
from taxonomy_service.logging_config import setup_logging

UI_DIR = Path(__file__).parent.parent / "ui"

logger = logging.getLogger(__name__)


def create_app(config_manager: ConfigManager = None, llm_provider=None) -> Flask:
    """Build the Flask application.

    Args:
        config_manager: Configuration source, defaults to web_app_config.json + env
        llm_provider: Model provider override, built from the LLM config when omitted

    Returns:
        Configured Flask application
    """
    config_manager = config_manager or ConfigManager()
    llm_config = config_manager.get_llm_config()
    taxonomy_config = config_manager.get_taxonomy_config()
    if llm_provider is None:
        llm_provider = create_llm_provider(llm_config)

    flask_app = Flask(__name__, static_folder=None)
    flask_app.wsgi_app = ProxyFix(
        flask_app.wsgi_app,
        x_proto=1,      # trust 1 hop for X-Forwarded-Proto
        x_host=1,       # trust 1 hop for X-Forwarded-Host
        x_prefix=1)     # <-- pay attention to X-Forwarded-Prefix

    # Werkzeug rejects larger bodies with 413 before the route runs
    # (1MB headroom for the other multipart fields)
    flask_app.config["MAX_CONTENT_LENGTH"] = (taxonomy_config.max_pdf_size_mb + 1) * 1024 * 1024

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    index_template = (UI_DIR / "index.html").read_text(encoding="utf-8")
    base_css_text = (UI_DIR / "base.css").read_text(encoding="utf-8")

    # -------------------------------------------------------------------------
    # Modules
    # -------------------------------------------------------------------------

    pdf_analysis_module = create_pdf_analysis_module(
        llm_provider=llm_provider,
        llm_config=llm_config,
        taxonomy_config=taxonomy_config,
        index_template=index_template,
    )
    flask_app.register_blueprint(pdf_analysis_module["blueprint"])
    flask_app.extensions["pdf_analysis"] = pdf_analysis_module

    # -------------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------------

    @flask_app.get("/assets/base.css")
    def base_css():
        """Serve base.css with cache control headers."""
        response = Response(base_css_text, mimetype="text/css")
        response.headers['Cache-Control'] = 'public, max-age=3600, must-revalidate'
        return response

    @flask_app.get("/actuator/health")
    def actuator_health():
        """Health check endpoint for monitoring tools and cloud platforms."""
        return jsonify({
            "status": "UP",
            "service": "pdf-taxonomy-generator",
            "provider": llm_provider.provider,
            "model": llm_provider.model,
        }), 200

    return flask_app


app = create_app()


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Flask application for PDF taxonomy generation")
    parser.add_argument("--port", type=int, help="Port to run the server on")
    parser.add_argument("--host", type=str, help="Host to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    config_manager = ConfigManager()
    app_config = config_manager.get_app_config()
    llm_config = config_manager.get_llm_config()

    # Override configuration with command line arguments
    if args.port:
        app_config.port = args.port
    if args.host:
        app_config.host = args.host
    if args.debug:
        app_config.debug = args.debug

    setup_logging(debug=app_config.debug)
    logger.info("Configuration loaded:")
    logger.info("   - LLM Provider: %s", llm_config.provider)
    logger.info("   - Model: %s", llm_config.model or "(provider default)")
    logger.info("   - Max PDF size: %sMB", config_manager.get_taxonomy_config().max_pdf_size_mb)
    logger.info("   - Server: %s:%s", app_config.host, app_config.port)
    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
