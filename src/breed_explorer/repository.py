"""
Breed repository: the API calls the screens need, mapped to domain entities.

`fetch_random_images` tries the bulk endpoint first and, if that fails for
any reason, asks once for a single random image instead. Only the second
failure reaches the caller.
"""
from __future__ import annotations
import logging
from typing import List, Protocol, Type

from .endpoints import DEFAULT_IMAGE_COUNT, Endpoint, all_breeds, random_breed_image, random_breed_images
from .errors import describe_error
from .http_client import ModelT
from .mapper import to_breed_image, to_breed_images, to_breeds
from .models import Breed, BreedImage, BreedImageResponse, BreedImagesResponse, BreedsListResponse

logger = logging.getLogger(__name__)

class NetworkService(Protocol):
    async def request(self, endpoint: Endpoint, response_model: Type[ModelT]) -> ModelT:
        ...

class BreedRepositoryProtocol(Protocol):
    async def fetch_breeds(self) -> List[Breed]:
        ...

    async def fetch_random_images(self, breed_name: str, count: int = DEFAULT_IMAGE_COUNT) -> List[BreedImage]:
        ...

def api_breed_token(breed_name: str) -> str:
    """'German Shepherd' -> 'german-shepherd' (path segment form)."""
    return breed_name.replace(" ", "-").lower()

class BreedRepository:

    def __init__(self, network: NetworkService):
        self.network = network

    async def fetch_breeds(self) -> List[Breed]:
        dto = await self.network.request(all_breeds(), BreedsListResponse)
        return to_breeds(dto)

    async def fetch_random_images(self, breed_name: str, count: int = DEFAULT_IMAGE_COUNT) -> List[BreedImage]:
        token = api_breed_token(breed_name)
        try:
            dto = await self.network.request(random_breed_images(token, count), BreedImagesResponse)
            return to_breed_images(dto, breed_name)
        except Exception as e:
            # any failure kind falls back, not only 404
            logger.warning("bulk images for %r failed (%s), falling back to single image", breed_name, describe_error(e))

        single = await self.network.request(random_breed_image(token), BreedImageResponse)
        image = to_breed_image(single, breed_name)
        return [image] if image is not None else []
