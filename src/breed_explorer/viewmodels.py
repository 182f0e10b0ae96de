from __future__ import annotations
from typing import List, Tuple

from .models import Breed, BreedImage
from .repository import BreedRepositoryProtocol
from .view_state import Loaded, LoadableViewModel

DETAIL_IMAGE_COUNT = 6

class BreedListViewModel(LoadableViewModel[List[Breed]]):
    """All breeds, sorted by name. Starts loading as soon as it is created."""

    def __init__(self, repository: BreedRepositoryProtocol):
        super().__init__()
        self.repository = repository
        self.load()

    @property
    def breeds(self) -> List[Breed]:
        return self.state.payload if isinstance(self.state, Loaded) else []

    def load_breeds(self) -> None:
        self.load()

    async def _fetch(self) -> List[Breed]:
        return await self.repository.fetch_breeds()

class BreedDetailViewModel(LoadableViewModel[List[BreedImage]]):
    """Random images for one breed. Idle until `load()` is called."""

    def __init__(self, breed: Breed, repository: BreedRepositoryProtocol, image_count: int = DETAIL_IMAGE_COUNT):
        super().__init__()
        self.breed = breed
        self.repository = repository
        self.image_count = image_count

    @property
    def breed_display_name(self) -> str:
        return self.breed.display_name

    @property
    def sub_breeds(self) -> Tuple[str, ...]:
        return self.breed.sub_breeds

    @property
    def has_sub_breeds(self) -> bool:
        return self.breed.has_sub_breeds

    @property
    def sub_breeds_count(self) -> int:
        return self.breed.sub_breeds_count

    @property
    def images(self) -> List[BreedImage]:
        return self.state.payload if isinstance(self.state, Loaded) else []

    def load_images(self) -> None:
        self.load()

    async def _fetch(self) -> List[BreedImage]:
        return await self.repository.fetch_random_images(self.breed.name, self.image_count)
