import logging

from flask import Flask
from waitress import serve

from random_cat.config import configure_logging, load_settings
from random_cat.resolver import ImageResolver
from random_cat.routes import create_routes

logger = logging.getLogger(__name__)


def create_app(settings=None, resolver=None):
    settings = settings or load_settings()
    resolver = resolver or ImageResolver(settings.image_dir, cache_ttl=settings.cache_ttl)

    app = Flask(__name__)
    app.url_map.strict_slashes = False
    app.register_blueprint(create_routes(resolver))

    logger.info(f"Serving images from: {resolver.root}")
    if settings.cache_ttl > 0:
        logger.info(f"Image list cached for {settings.cache_ttl:g}s")
    return app


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Server starting up...")

    app = create_app(settings)
    logger.info(f"Starting waitress server on http://{settings.host}:{settings.port}")
    serve(app, host=settings.host, port=settings.port, threads=settings.threads)


if __name__ == '__main__':
    main()
