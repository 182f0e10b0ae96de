from __future__ import annotations
from typing import List, Optional

from .models import Breed, BreedImage, BreedImageResponse, BreedImagesResponse, BreedsListResponse

def to_breeds(dto: BreedsListResponse) -> List[Breed]:
    """
    One Breed per key of `message`, sorted by name (plain code-point order).
    A response whose status is not "success" maps to an empty list.
    """
    if not dto.is_success:
        return []
    breeds = [Breed(name=name, sub_breeds=tuple(subs)) for name, subs in dto.message.items()]
    return sorted(breeds, key=lambda b: b.name)

def to_breed_images(dto: BreedImagesResponse, breed_name: str) -> List[BreedImage]:
    """Keeps the API's order; every image is tagged with `breed_name` as given."""
    if not dto.is_success:
        return []
    return [BreedImage(url=url, breed_name=breed_name) for url in dto.message]

def to_breed_image(dto: BreedImageResponse, breed_name: str) -> Optional[BreedImage]:
    if not dto.is_success:
        return None
    return BreedImage(url=dto.message, breed_name=breed_name)
