"""
In-memory image cache and the loader that fills it.

- ImageCache: LRU store keyed by the exact URL string, bounded by entry
  count and by the summed encoded size of its images. A lock serializes
  every mutation, so independent image loads can share one instance.
- ImageLoader: cache lookup, otherwise download + decode + store.
- get_image_cache(): the process-wide instance, created on first call.
"""
from __future__ import annotations
import asyncio, io, logging, threading
from collections import OrderedDict
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import httpx
from PIL import Image, UnidentifiedImageError
from PIL.Image import DecompressionBombError

from .errors import DecodingError, HttpError, NoDataError, UnknownNetworkError

logger = logging.getLogger(__name__)

DEFAULT_COUNT_LIMIT = 100
DEFAULT_TOTAL_COST_LIMIT = 50 * 1024 * 1024  # 50 MiB

@dataclass(frozen=True, eq=False)
class DecodedImage:
    image: Image.Image
    data: bytes     # encoded bytes the image was decoded from

    @property
    def cost(self) -> int:
        return len(self.data)

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

def decode_image(data: bytes) -> DecodedImage:
    """Decode PNG/JPEG/GIF/... bytes; raises DecodingError on anything Pillow rejects."""
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, DecompressionBombError, OSError, ValueError) as e:
        raise DecodingError(e) from e
    return DecodedImage(image=img, data=data)

class ImageCache:

    def __init__(self, count_limit: int = DEFAULT_COUNT_LIMIT, total_cost_limit: int = DEFAULT_TOTAL_COST_LIMIT):
        self.count_limit = max(1, count_limit)
        self.total_cost_limit = max(1, total_cost_limit)
        self._entries: OrderedDict[str, DecodedImage] = OrderedDict()
        self._total_cost = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def total_cost(self) -> int:
        with self._lock:
            return self._total_cost

    def get(self, url: str) -> Optional[DecodedImage]:
        with self._lock:
            entry = self._entries.get(url)
            if entry is not None:
                self._entries.move_to_end(url)
            return entry

    def put(self, url: str, image: DecodedImage) -> None:
        """Insert or replace the entry for `url`, then evict LRU entries until both limits hold."""
        with self._lock:
            self._pop(url)
            if image.cost > self.total_cost_limit:
                logger.debug("image for %r (%d bytes) exceeds cache limit, not cached", url, image.cost)
                return
            self._entries[url] = image
            self._total_cost += image.cost
            while len(self._entries) > self.count_limit or self._total_cost > self.total_cost_limit:
                evicted_url, evicted = self._entries.popitem(last=False)
                self._total_cost -= evicted.cost
                logger.debug("evicted %r from image cache", evicted_url)

    def remove(self, url: str) -> None:
        with self._lock:
            self._pop(url)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._total_cost = 0

    def handle_memory_warning(self) -> None:
        """Hook for the host's low-memory notification."""
        logger.info("memory warning: dropping %d cached image(s)", len(self))
        self.clear()

    def _pop(self, url: str) -> None:
        old = self._entries.pop(url, None)
        if old is not None:
            self._total_cost -= old.cost

@lru_cache(maxsize=1)
def get_image_cache() -> ImageCache:
    return ImageCache()

class ImageLoader:
    """Loads images by URL through `cache`; one call per visible image."""

    def __init__(self, cache: ImageCache, client: httpx.AsyncClient):
        self.cache = cache
        self.client = client

    async def load(self, url: str) -> DecodedImage:
        cached = self.cache.get(url)
        if cached is not None:
            return cached

        try:
            resp = await self.client.get(url)
        except Exception as e:
            raise UnknownNetworkError(e) from e
        if not (200 <= resp.status_code < 300):
            raise HttpError(resp.status_code)
        if not resp.content:
            raise NoDataError()

        image = await asyncio.to_thread(decode_image, resp.content)
        self.cache.put(url, image)
        return image
