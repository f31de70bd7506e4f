"""Command-line front end: list the catalog, render previews, generate archives."""
from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from .archive import DirectoryDownloader, folder_name
from .categories import CategoryRegistry, build_registry
from .engine import IMAGE_EXTENSION, EngineHandle, create_engine
from .errors import EngineError, InputError
from .pipeline import PREVIEW_SIZE, BatchGenerationPipeline, Outcome, render_previews
from .request import MAX_PER_CATEGORY, MAX_PIXEL_SIZE, MIN_PIXEL_SIZE, parse_request

EXIT_OK = 0
EXIT_CANCELLED = 1
EXIT_INPUT = 2
EXIT_ENGINE = 3

DEFAULT_OUT = Path("output")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )


def _resolve_categories(registry: CategoryRegistry, tokens: list[str] | None) -> list:
    if not tokens:
        return [category.id for category in registry]
    ids = []
    for token in tokens:
        token = token.strip()
        if token.isascii() and token.isdigit():
            # numbers are the 1-based ordinals printed by `list`
            ids.append(int(token) - 1)
        else:
            ids.append(registry.by_key(token).id)
    return ids


def _cmd_list(args: argparse.Namespace, registry: CategoryRegistry) -> int:
    for category in registry:
        print(f"{category.id + 1:02d} {category.key:<18} {category.label}")
    return EXIT_OK


async def _previews(registry: CategoryRegistry, size: int, out_dir: Path) -> list[Path]:
    engine = await EngineHandle(lambda: create_engine(registry)).acquire()
    previews = await render_previews(engine, size)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for category in registry:
        path = out_dir / f"{folder_name(category.id + 1, category.key)}.{IMAGE_EXTENSION}"
        path.write_bytes(previews[category.id])
        written.append(path)
    return written


def _cmd_preview(args: argparse.Namespace, registry: CategoryRegistry) -> int:
    size = max(MIN_PIXEL_SIZE, min(MAX_PIXEL_SIZE, args.size))
    for path in asyncio.run(_previews(registry, size, args.out)):
        print(f"wrote {path}")
    return EXIT_OK


def _interrupt_handler(loop: asyncio.AbstractEventLoop, pipeline: BatchGenerationPipeline):
    """First Ctrl-C cancels cooperatively; the next one interrupts immediately."""

    def on_sigint() -> None:
        pipeline.cancel()
        print("cancelling; press Ctrl-C again to abort at once", file=sys.stderr)
        loop.remove_signal_handler(signal.SIGINT)

    return on_sigint


async def _generate(args: argparse.Namespace, registry: CategoryRegistry) -> int:
    request = parse_request(registry, _resolve_categories(registry, args.category), args.count, args.size)
    downloader = DirectoryDownloader(args.out)
    pipeline = BatchGenerationPipeline(
        EngineHandle(lambda: create_engine(registry)), downloader, registry=registry
    )

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, _interrupt_handler(loop, pipeline))
    except (NotImplementedError, RuntimeError):
        pass

    print(
        f"generating {len(request.category_ids)} categories x {request.count_per_category} icons "
        f"({request.pixel_size}px)"
    )
    result = await pipeline.run(request)
    if result.outcome is Outcome.CANCELLED:
        print(f"cancelled after {result.produced} icons; nothing was written")
        return EXIT_CANCELLED
    print(f"wrote {downloader.last_path} ({result.produced} icons, {result.archive_size} bytes)")
    return EXIT_OK


def _cmd_generate(args: argparse.Namespace, registry: CategoryRegistry) -> int:
    return asyncio.run(_generate(args, registry))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="map-symbols",
        description="Render randomized map symbol icons and export them as a zip archive.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "--include-planned",
        action="store_true",
        help="also list planned categories, which render as blank icons",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="print the symbol catalog").set_defaults(func=_cmd_list)

    preview = sub.add_parser("preview", help="write one preview icon per category")
    preview.add_argument("--size", type=int, default=PREVIEW_SIZE)
    preview.add_argument("--out", type=Path, default=DEFAULT_OUT / "previews")
    preview.set_defaults(func=_cmd_preview)

    generate = sub.add_parser("generate", help="generate icons into a zip archive")
    generate.add_argument("--count", required=True, help=f"icons per category (1 - {MAX_PER_CATEGORY})")
    generate.add_argument("--size", default="28", help=f"pixel size ({MIN_PIXEL_SIZE} - {MAX_PIXEL_SIZE})")
    generate.add_argument(
        "--category",
        action="append",
        help="category key or number shown by `list`; repeat to select several (default: all)",
    )
    generate.add_argument("--out", type=Path, default=DEFAULT_OUT)
    generate.set_defaults(func=_cmd_generate)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    registry = build_registry(include_planned=args.include_planned)

    try:
        return args.func(args, registry)
    except InputError as err:
        print(f"invalid input: {err}", file=sys.stderr)
        return EXIT_INPUT
    except EngineError as err:
        print(f"rendering engine error: {err}", file=sys.stderr)
        return EXIT_ENGINE
