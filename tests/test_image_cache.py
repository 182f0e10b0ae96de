import asyncio
import io
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest
from PIL import Image

from breed_explorer.errors import DecodingError, HttpError
from breed_explorer.image_cache import ImageCache, ImageLoader, decode_image, get_image_cache

def png_bytes(color="red", size=(8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()

def make_image(color="red"):
    return decode_image(png_bytes(color))

URL = "https://images.dog.ceo/breeds/labrador/n02099712_1.jpg"

def test_decode_image():
    img = make_image()
    assert img.size == (8, 8)
    assert img.cost == len(img.data) > 0

def test_decode_rejects_garbage():
    with pytest.raises(DecodingError):
        decode_image(b"definitely not an image")

def test_defaults():
    cache = ImageCache()
    assert cache.count_limit == 100
    assert cache.total_cost_limit == 50 * 1024 * 1024

def test_put_get_remove():
    cache = ImageCache()
    img = make_image()
    assert cache.get(URL) is None
    cache.put(URL, img)
    assert cache.get(URL) is img
    cache.remove(URL)
    assert cache.get(URL) is None
    assert cache.total_cost == 0

def test_overwrite_replaces_entry_and_cost():
    cache = ImageCache()
    small, big = decode_image(png_bytes(size=(2, 2))), decode_image(png_bytes(size=(64, 64)))
    cache.put(URL, small)
    cache.put(URL, big)
    assert cache.get(URL) is big
    assert len(cache) == 1
    assert cache.total_cost == big.cost

def test_clear_drops_everything():
    cache = ImageCache()
    for i in range(5):
        cache.put(f"{URL}?{i}", make_image())
    cache.clear()
    assert all(cache.get(f"{URL}?{i}") is None for i in range(5))
    assert len(cache) == 0 and cache.total_cost == 0

def test_memory_warning_clears():
    cache = ImageCache()
    cache.put(URL, make_image())
    cache.handle_memory_warning()
    assert cache.get(URL) is None

@pytest.mark.parametrize("key", ["", "https://example.com/image with spaces & symbols!.jpg", " ", "ü/ß\t"])
def test_any_string_is_a_key(key):
    cache = ImageCache()
    img = make_image()
    cache.put(key, img)
    assert cache.get(key) is img
    assert cache.get(key.strip() + "x") is None

def test_count_limit_evicts_oldest():
    cache = ImageCache(count_limit=3)
    for i in range(4):
        cache.put(f"u{i}", make_image())
    assert len(cache) == 3
    assert cache.get("u0") is None
    assert cache.get("u3") is not None

def test_recently_read_entry_survives_eviction():
    cache = ImageCache(count_limit=2)
    cache.put("a", make_image())
    cache.put("b", make_image())
    cache.get("a")
    cache.put("c", make_image())
    assert cache.get("a") is not None
    assert cache.get("b") is None

def test_cost_limit_evicts_oldest():
    img = make_image()
    cache = ImageCache(total_cost_limit=img.cost * 2)
    cache.put("a", img)
    cache.put("b", img)
    cache.put("c", img)
    assert cache.get("a") is None
    assert cache.get("c") is img
    assert cache.total_cost <= cache.total_cost_limit

def test_entry_over_cost_limit_is_not_stored():
    img = make_image()
    cache = ImageCache(total_cost_limit=img.cost - 1)
    cache.put("a", img)
    assert cache.get("a") is None
    assert cache.total_cost == 0

def test_concurrent_threads_keep_accounting_consistent():
    img = make_image()
    cache = ImageCache(count_limit=50)

    def work(i):
        cache.put(f"u{i % 80}", img)
        cache.get(f"u{(i * 7) % 80}")
        if i % 5 == 0:
            cache.remove(f"u{(i + 1) % 80}")

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(work, range(2000)))

    assert len(cache) <= 50
    assert cache.total_cost == len(cache) * img.cost

@pytest.mark.asyncio
async def test_concurrent_tasks_all_entries_reachable():
    cache = ImageCache()
    img = make_image()

    async def put(i):
        await asyncio.sleep(0)
        cache.put(f"{URL}{i}", img)

    async def get(i):
        await asyncio.sleep(0)
        return cache.get(f"{URL}{i}")

    await asyncio.gather(*(put(i) for i in range(10)), *(get(i) for i in range(10)))
    assert all(cache.get(f"{URL}{i}") is img for i in range(10))

def test_shared_cache_is_one_instance():
    assert get_image_cache() is get_image_cache()

@pytest.mark.asyncio
async def test_loader_downloads_once_then_hits_cache():
    calls = []
    data = png_bytes("blue")

    def handler(request):
        calls.append(request.url)
        return httpx.Response(200, content=data)

    cache = ImageCache()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        loader = ImageLoader(cache, client)
        first = await loader.load(URL)
        second = await loader.load(URL)

    assert first is second
    assert first.cost == len(data)
    assert len(calls) == 1
    assert cache.get(URL) is first

@pytest.mark.asyncio
async def test_loader_errors_are_classified_and_not_cached():
    def handler(request):
        if request.url.path.endswith("missing.jpg"):
            return httpx.Response(404)
        return httpx.Response(200, content=b"<html>not an image</html>")

    cache = ImageCache()
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        loader = ImageLoader(cache, client)
        with pytest.raises(HttpError):
            await loader.load("https://images.dog.ceo/missing.jpg")
        with pytest.raises(DecodingError):
            await loader.load("https://images.dog.ceo/page.jpg")
    assert len(cache) == 0

def test_decompression_bomb_is_a_decoding_error(monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
    with pytest.raises(DecodingError):
        decode_image(png_bytes(size=(8, 8)))
