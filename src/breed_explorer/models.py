"""
Domain entities and wire models for the Dog CEO API.

Includes:
- Breed: a breed and its sub-breed names (fresh id per construction)
- BreedImage: one image URL tagged with the breed it was fetched for
- BreedsListResponse: GET /breeds/list/all
- BreedImagesResponse: GET /breed/{breed}/images/random/{count}
- BreedImageResponse: GET /breed/{breed}/images/random

Wire models are pydantic so that a body of the wrong shape fails to decode.
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import httpx
from pydantic import BaseModel

SUCCESS_STATUS = "success"

@dataclass(frozen=True)
class Breed:
    name: str                          # lowercase, as the API spells it
    sub_breeds: Tuple[str, ...] = ()
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def display_name(self) -> str:
        return self.name.title()

    @property
    def has_sub_breeds(self) -> bool:
        return bool(self.sub_breeds)

    @property
    def sub_breeds_count(self) -> int:
        return len(self.sub_breeds)

@dataclass(frozen=True)
class BreedImage:
    url: str
    breed_name: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def image_url(self) -> Optional[httpx.URL]:
        """Parsed `url`, or None when it is not an absolute URL."""
        try:
            parsed = httpx.URL(self.url)
        except httpx.InvalidURL:
            return None
        if not parsed.scheme or not parsed.host:
            return None
        return parsed

# GET /breeds/list/all
class BreedsListResponse(BaseModel):
    message: Dict[str, List[str]]
    status: str

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS_STATUS

# GET /breed/{breed}/images/random/{count}
class BreedImagesResponse(BaseModel):
    message: List[str]
    status: str

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS_STATUS

# GET /breed/{breed}/images/random
class BreedImageResponse(BaseModel):
    message: str
    status: str

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS_STATUS
