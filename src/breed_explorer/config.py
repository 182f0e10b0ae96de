from __future__ import annotations
import argparse, os

from .endpoints import DEFAULT_IMAGE_COUNT, DOG_API_BASE_URL

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="breed-explorer", description="Browse dog breeds and random breed images")
    p.add_argument("--base-url", default=os.getenv("DOG_API_BASE_URL", DOG_API_BASE_URL))
    p.add_argument("--connect-timeout", type=float, default=float(os.getenv("CONNECT_TIMEOUT", "5")))
    p.add_argument("--read-timeout", type=float, default=float(os.getenv("READ_TIMEOUT", "30")))
    p.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "WARNING"))
    p.add_argument("--demo", action="store_true", help="use built-in sample data instead of the network")

    sub = p.add_subparsers(dest="command", required=True)
    sub.add_parser("breeds", help="list all breeds")
    images = sub.add_parser("images", help="random images for one breed")
    images.add_argument("breed")
    images.add_argument("--count", type=int, default=int(os.getenv("IMAGE_COUNT", str(DEFAULT_IMAGE_COUNT))))
    images.add_argument("--download", action="store_true", help="download and decode each image")
    return p

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
