"""
Finds, picks and validates the image files served by the app.

Every filename that arrives from a request goes through ``resolve_safe``
before the filesystem is touched, so nothing outside the image root is ever
served.
"""

import logging
import os
import random
import threading
import time

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp")

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
}


class ResolverError(Exception):
    """Base class for everything the resolver can refuse to do."""


class EnumerationError(ResolverError):
    pass


class NoImagesFound(ResolverError):
    pass


class InvalidFilename(ResolverError):
    pass


class NotFound(ResolverError):
    pass


def is_image_file(path):
    return os.path.splitext(path)[1].lower() in IMAGE_EXTENSIONS


def content_type_for(path):
    return CONTENT_TYPES.get(os.path.splitext(path)[1].lower(), "application/octet-stream")


def _is_within(real_root, path):
    """True when ``path`` canonicalises to something strictly below ``real_root``."""
    real_path = os.path.realpath(path)
    return real_path != real_root and os.path.commonpath([real_root, real_path]) == real_root


def enumerate_images(root):
    """
    Walks ``root`` recursively and returns the absolute paths of all image files.

    Files whose canonical path leaves ``root`` (symlinks pointing elsewhere)
    are skipped. Raises EnumerationError when the walk can't start or fails
    part way.
    """
    root = os.path.abspath(root)
    real_root = os.path.realpath(root)

    def on_error(err):
        raise EnumerationError(f"Could not walk '{root}': {err}") from err

    # os.walk silently yields nothing for a missing root
    if not os.path.isdir(root):
        raise EnumerationError(f"Image directory does not exist: {root}")

    images = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=on_error):
        for name in filenames:
            path = os.path.join(dirpath, name)
            if not is_image_file(name) or not os.path.isfile(path):
                continue
            if not _is_within(real_root, path):
                logger.warning(f"Skipping '{path}': it resolves outside '{root}'")
                continue
            images.append(path)
    return images


def pick_random(candidates, rng=None, lock=None):
    if not candidates:
        raise NoImagesFound("No images found")
    rng = rng or random
    if lock is None:
        return rng.choice(candidates)
    with lock:
        return rng.choice(candidates)


def resolve_safe(root, user_filename):
    """
    Maps an untrusted filename to a file directly inside ``root``.

    Names with ``..``, slashes, backslashes or NUL bytes are rejected before
    any filesystem access. The joined path is then canonicalised (symlinks
    included) and must still sit under the canonical root.
    """
    if not user_filename or "\x00" in user_filename:
        raise InvalidFilename("Invalid filename")
    if ".." in user_filename or "/" in user_filename or "\\" in user_filename:
        raise InvalidFilename("Invalid filename")

    root = os.path.abspath(root)
    name = os.path.basename(user_filename)
    candidate = os.path.join(root, name)

    if not _is_within(os.path.realpath(root), candidate):
        raise InvalidFilename("Invalid filename")

    if not os.path.isfile(candidate):
        raise NotFound("Image not found")
    return candidate


class ImageResolver:
    """
    Holds the image root and the shared random source for the request handlers.

    ``cache_ttl`` > 0 keeps the last directory walk for that many seconds.
    """

    def __init__(self, root, rng=None, cache_ttl=0.0, clock=time.monotonic):
        self.root = os.path.abspath(root)
        self.rng = rng or random.Random(time.time_ns())
        self.cache_ttl = float(cache_ttl or 0)
        self._clock = clock
        self._rng_lock = threading.Lock()
        self._cache_lock = threading.Lock()
        self._cached = None
        self._cached_at = 0.0

    def candidates(self):
        if self.cache_ttl <= 0:
            return enumerate_images(self.root)
        with self._cache_lock:
            now = self._clock()
            if self._cached is None or now - self._cached_at >= self.cache_ttl:
                self._cached = enumerate_images(self.root)
                self._cached_at = now
                logger.info(f"Refreshed image cache: {len(self._cached)} files under '{self.root}'")
            return list(self._cached)

    def pick_random_image(self):
        return pick_random(self.candidates(), self.rng, self._rng_lock)

    def resolve_requested_image(self, filename):
        return resolve_safe(self.root, filename)
