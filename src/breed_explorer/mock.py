"""
Offline stand-in for BreedRepository, used by `breed-explorer --demo` and tests.
"""
from __future__ import annotations
import asyncio
from typing import List, Optional

from .endpoints import DEFAULT_IMAGE_COUNT
from .errors import UnknownNetworkError
from .models import Breed, BreedImage

SAMPLE_BREEDS = {
    "labrador": ["retriever"],
    "german": ["shepherd"],
    "bulldog": ["boston", "english", "french"],
    "poodle": ["medium", "miniature", "standard", "toy"],
    "beagle": [],
    "boxer": [],
    "husky": [],
}

SAMPLE_IMAGE_URLS = [
    f"https://images.dog.ceo/breeds/labrador/n02099712_{i}.jpg" for i in range(1, 6)
]

def sample_breeds() -> List[Breed]:
    return [Breed(name=name, sub_breeds=tuple(subs)) for name, subs in SAMPLE_BREEDS.items()]

def sample_images(breed_name: str, count: int = DEFAULT_IMAGE_COUNT) -> List[BreedImage]:
    return [BreedImage(url=url, breed_name=breed_name) for url in SAMPLE_IMAGE_URLS[:count]]

class MockBreedRepository:

    def __init__(self, *, should_fail: bool = False, breeds_delay: float = 0.5, images_delay: float = 1.0):
        self.should_fail = should_fail
        self.breeds: Optional[List[Breed]] = None
        self.images: Optional[List[BreedImage]] = None
        self.breeds_delay = breeds_delay
        self.images_delay = images_delay
        self.fetch_breeds_calls = 0
        self.fetch_images_calls = 0

    async def fetch_breeds(self) -> List[Breed]:
        self.fetch_breeds_calls += 1
        if self.should_fail:
            raise UnknownNetworkError(ConnectionError("mock repository failure"))
        await asyncio.sleep(self.breeds_delay)
        return self.breeds if self.breeds else sample_breeds()

    async def fetch_random_images(self, breed_name: str, count: int = DEFAULT_IMAGE_COUNT) -> List[BreedImage]:
        self.fetch_images_calls += 1
        if self.should_fail:
            raise UnknownNetworkError(ConnectionError("mock repository failure"))
        await asyncio.sleep(self.images_delay)
        return self.images if self.images else sample_images(breed_name, count)
