import logging
import os
import time

from flask import Blueprint, jsonify, redirect, render_template_string, send_file, url_for

from random_cat.pages import SETTINGS_HTML, VIEW_HTML
from random_cat.resolver import (
    EnumerationError,
    InvalidFilename,
    NoImagesFound,
    NotFound,
    content_type_for,
)

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
    "Surrogate-Control": "no-store",
}

logger = logging.getLogger(__name__)

BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def base36(number):
    if number < 0:
        raise ValueError("base36 needs a non-negative number")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def _text(body, status):
    return body, status, {"Content-Type": "text/plain; charset=utf-8"}


def create_routes(resolver):
    bp = Blueprint("cats", __name__)

    @bp.route("/")
    def index():
        """
        Sends the browser to a fresh /view/<slug> URL so chat apps re-fetch the preview.
        """
        slug = base36(time.time_ns())
        return redirect(url_for(".view", slug=slug), code=307)

    @bp.route("/view/<slug>")
    def view(slug):
        try:
            image_path = resolver.pick_random_image()
        except NoImagesFound:
            logger.warning(f"No images found under '{resolver.root}'")
            return _text("No cat found 😿", 404)
        except EnumerationError as e:
            logger.error(f"Could not list images: {e}", exc_info=True)
            return _text("No cat found 😿", 500)

        filename = os.path.basename(image_path)
        logger.info(f"View '{slug}' picked '{image_path}'")
        if os.path.dirname(image_path) != resolver.root:
            # /image/ only serves files sitting directly in the root
            logger.warning(f"Picked '{image_path}' from a subdirectory; /image/{filename} will return 404")
        image_url = url_for(".image", filename=filename, t=int(time.time()), _external=True)
        html = render_template_string(
            VIEW_HTML,
            image_url=image_url,
            new_url=url_for(".index"),
            settings_url=url_for(".settings"),
        )
        return html, 200, {"Content-Type": "text/html; charset=utf-8", "Cache-Control": "no-store"}

    @bp.route("/image/<path:filename>")
    def image(filename):
        # <path:> so that names with slashes reach the resolver and get a 400 instead of a routing 404
        logger.info(f"Request received to serve file: '{filename}'")
        try:
            image_path = resolver.resolve_requested_image(filename)
        except InvalidFilename:
            logger.warning(f"Rejected filename: {filename!r}")
            return _text("Invalid filename", 400)
        except NotFound:
            return _text("Image not found", 404)

        try:
            response = send_file(
                image_path,
                mimetype=content_type_for(image_path),
                download_name=os.path.basename(image_path),
                conditional=False,
                etag=False,
            )
        except FileNotFoundError:
            # deleted after it was resolved
            return _text("Image not found", 404)

        response.headers.update(NO_STORE_HEADERS)
        return response

    @bp.route("/settings")
    def settings():
        html = render_template_string(SETTINGS_HTML, home_url=url_for(".index"))
        return html, 200, {"Content-Type": "text/html; charset=utf-8"}

    @bp.route("/healthz")
    def healthz():
        return jsonify({
            "status": "ok",
            "image_dir": resolver.root,
            "image_dir_exists": os.path.isdir(resolver.root),
        })

    return bp
