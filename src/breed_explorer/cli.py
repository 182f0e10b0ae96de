"""
Command-line host for the breed explorer.

- Parses CLI args and config
- Builds ApiClient + BreedRepository (or the mock repository with --demo)
- Drives the list / detail view model to a terminal state and prints it
- Optionally downloads images through the shared ImageCache

SIGUSR1 plays the role of the host's memory warning and empties the image cache.
"""
from __future__ import annotations
import asyncio, logging, signal, sys
from typing import List

import httpx

from .config import parse_args
from .http_client import ApiClient
from .image_cache import ImageCache, ImageLoader, get_image_cache
from .mock import MockBreedRepository
from .models import Breed, BreedImage
from .repository import BreedRepository, BreedRepositoryProtocol
from .view_state import Error, Loaded, LoadableViewModel, ViewState
from .viewmodels import BreedDetailViewModel, BreedListViewModel

logger = logging.getLogger(__name__)

def install_memory_warning_handler(cache: ImageCache) -> None:
    if not hasattr(signal, "SIGUSR1"):
        return
    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGUSR1, cache.handle_memory_warning)
    except NotImplementedError:
        logger.debug("signal handlers not supported on this event loop")

async def settle(vm: LoadableViewModel) -> ViewState:
    state = await vm.wait()
    if isinstance(state, Error):
        print(f"Error: {state.message}", file=sys.stderr)
    return state

def print_breeds(breeds: List[Breed]) -> None:
    for b in breeds:
        extra = f" ({', '.join(b.sub_breeds)})" if b.has_sub_breeds else ""
        print(f"{b.display_name}{extra}")
    print(f"{len(breeds)} breed(s).")

async def download_images(images: List[BreedImage], args) -> None:
    cache = get_image_cache()
    install_memory_warning_handler(cache)
    async with httpx.AsyncClient(timeout=httpx.Timeout(args.connect_timeout, read=args.read_timeout)) as client:
        loader = ImageLoader(cache, client)
        results = await asyncio.gather(*(loader.load(img.url) for img in images), return_exceptions=True)
    for img, res in zip(images, results):
        if isinstance(res, BaseException):
            print(f"  {img.url}: failed ({res})", file=sys.stderr)
        else:
            w, h = res.size
            print(f"  {img.url}: {w}x{h}, {res.cost} bytes")

async def run_with(repo: BreedRepositoryProtocol, args) -> int:
    if args.command == "breeds":
        vm = BreedListViewModel(repo)
        state = await settle(vm)
        if isinstance(state, Loaded):
            print_breeds(state.payload)
    else:
        vm = BreedDetailViewModel(Breed(name=args.breed), repo, image_count=args.count)
        vm.load()
        state = await settle(vm)
        if isinstance(state, Loaded):
            print(f"{vm.breed_display_name}: {len(state.payload)} image(s)")
            for img in state.payload:
                print(f"  {img.url}")
            if args.download and state.payload:
                await download_images(state.payload, args)
    return 1 if isinstance(state, Error) else 0

async def run(args) -> int:
    if args.demo:
        return await run_with(MockBreedRepository(breeds_delay=0, images_delay=0), args)
    async with ApiClient(
        base_url=args.base_url,
        connect_timeout=args.connect_timeout,
        read_timeout=args.read_timeout,
    ) as api:
        return await run_with(BreedRepository(api), args)

def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
        sys.exit(130)

if __name__ == "__main__":
    main()
