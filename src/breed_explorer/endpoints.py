"""
Request descriptors for the Dog CEO API.

Each builder returns an `Endpoint` (path + method + optional query). The
absolute URL is only composed when the request is about to be sent; a path
that cannot form a valid URL yields `None` there, which the client reports
as `InvalidURLError`.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

DOG_API_BASE_URL = "https://dog.ceo/api"
DEFAULT_IMAGE_COUNT = 3

@dataclass(frozen=True)
class Endpoint:
    path: str
    method: str = "GET"
    query_params: Optional[Dict[str, str]] = None

    def url(self, base_url: str = DOG_API_BASE_URL) -> Optional[httpx.URL]:
        try:
            url = httpx.URL(base_url.rstrip("/") + self.path)
            if self.query_params:
                url = url.copy_merge_params(self.query_params)
        except httpx.InvalidURL:
            return None
        if not url.scheme or not url.host:
            return None
        return url

def _join(*segments: object) -> str:
    return "/" + "/".join(str(s) for s in segments)

def all_breeds() -> Endpoint:
    return Endpoint(path=_join("breeds", "list", "all"))

def random_breed_images(breed: str, count: int = DEFAULT_IMAGE_COUNT) -> Endpoint:
    return Endpoint(path=_join("breed", breed, "images", "random", count))

def random_breed_image(breed: str) -> Endpoint:
    """Single random image; used as the fallback for `random_breed_images`."""
    return Endpoint(path=_join("breed", breed, "images", "random"))

def random_sub_breed_images(breed: str, sub_breed: str, count: int = DEFAULT_IMAGE_COUNT) -> Endpoint:
    return Endpoint(path=_join("breed", breed, sub_breed, "images", "random", count))
