import logging

from flask import Flask
from flask_cors import CORS

from config import Config, ConfigManager
from restyle_core.core.config import load_style_document, validate_style_document
from restyle_core.core.llm import MissingCredentialError, StyleGenerator
from restyle_core.core.session import StyleSession
from restyle_core.core.surface import StyleDocumentMap

logger = logging.getLogger(__name__)


def _build_generator(app: Flask):
    try:
        return StyleGenerator(
            api_key=app.config.get("OPENAI_API_KEY"),
            model=app.config.get("OPENAI_MODEL", "gpt-4o-mini"),
            temperature=app.config.get("OPENAI_TEMPERATURE", 0.7),
            max_tokens=app.config.get("OPENAI_MAX_TOKENS", 300),
        )
    except MissingCredentialError as e:
        logger.warning("Style generation disabled: %s", e)
        return None


def _build_surface(app: Flask) -> StyleDocumentMap:
    source = app.config.get("STYLE_URL")
    document = None
    if source:
        document = load_style_document(source, timeout=app.config.get("STYLE_FETCH_TIMEOUT", 10))
        if document is None:
            logger.warning("Could not load style document from %s; starting empty", source)
        else:
            err = validate_style_document(document)
            if err:
                logger.warning("Style document validation warning: %s", err)
    return StyleDocumentMap(document)


def create_app(config_class=Config, generator=None, surface=None):
    """Application factory.

    ``generator`` and ``surface`` may be injected; otherwise they are built
    from the configuration (API key, model settings, style URL).
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Enable CORS for API endpoints
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    if generator is None:
        generator = _build_generator(app)
    if surface is None:
        surface = _build_surface(app)
    keywords = ConfigManager(app.config.get("ROLE_CONFIG_DIR")).get_role_keywords()

    app.extensions["restyle"] = {
        "generator": generator,
        "session": StyleSession(surface, generator=generator, keywords=keywords),
    }

    # Register blueprints
    from app.routes import api

    app.register_blueprint(api.bp)

    return app
