import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from .. import config
from ..exceptions import ImageChainError
from ..models.color import Color
from ..models.direction import Direction
from ..pipeline.image_processor import ImageProcessor
from ..services.image_service import ImageService
from ..services.random_service import RandomSource

logger = logging.getLogger(__name__)

_ROTATIONS = {"cw": Direction.CLOCKWISE, "ccw": Direction.COUNTER_CLOCKWISE}
_MIRRORS = {"h": Direction.HORIZONTAL, "v": Direction.VERTICAL}


def _tint_arg(value: str):
    """'#rrggbb:amount' -> (Color, float)"""
    try:
        color, amount = value.rsplit(":", 1)
        return Color.from_hex(color), float(amount)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"expected '#rrggbb:amount', got {value!r}") from err


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imagechain-batch",
        description="Apply a chain of image operations to every image in a folder.",
    )
    parser.add_argument("input", type=Path, help="folder with source images")
    parser.add_argument("output", type=Path, help="folder for processed images")
    parser.add_argument("--recursive", action="store_true")
    parser.add_argument("--ext", default=config.OUTPUT_IMG_EXT, help="output extension (default: %(default)s)")

    ops = parser.add_argument_group("operations (applied in this order)")
    ops.add_argument("--resize-width", type=int)
    ops.add_argument("--resize-height", type=int)
    ops.add_argument("--rotate", choices=sorted(_ROTATIONS))
    ops.add_argument("--mirror", choices=sorted(_MIRRORS))
    ops.add_argument("--grayscale", action="store_true")
    ops.add_argument("--negative", action="store_true")
    ops.add_argument("--tint", type=_tint_arg, metavar="#RRGGBB:AMOUNT")
    ops.add_argument("--noise", type=float, metavar="PERCENT")
    ops.add_argument("--mono-noise", action="store_true", help="use one random value per pixel for --noise")
    ops.add_argument("--seed", type=int, default=config.RANDOM_SEED)
    return parser


def apply_chain(stage: ImageProcessor, args, random_source: RandomSource) -> ImageProcessor:
    if args.resize_width is not None or args.resize_height is not None:
        stage = stage.resize_to(args.resize_width, args.resize_height)
    if args.rotate:
        stage = stage.rotate(_ROTATIONS[args.rotate])
    if args.mirror:
        stage = stage.mirror(_MIRRORS[args.mirror])
    if args.grayscale:
        stage = stage.grayscale()
    if args.negative:
        stage = stage.negative()
    if args.tint:
        color, amount = args.tint
        stage = stage.tint(color, amount)
    if args.noise is not None:
        stage = stage.add_noise(args.mono_noise, args.noise, random_source)
    return stage


def main(argv=None) -> int:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )
    args = build_parser().parse_args(argv)

    image_service = ImageService()
    random_source = RandomSource(seed=args.seed)
    ext = args.ext if args.ext.startswith(".") else f".{args.ext}"

    if not args.input.is_dir():
        logger.error(f"Input is not a directory: {args.input}")
        return 2

    gallery = image_service.stream_gallery(args.input, recursive=args.recursive)
    processed = failures = 0
    for img in tqdm(gallery, desc="images", ncols=70):
        processed += 1
        target = args.output / img.path.relative_to(args.input).with_suffix(ext)
        try:
            result = apply_chain(ImageProcessor(img), args, random_source)
            result.save_as(target)
        except ImageChainError as err:
            failures += 1
            logger.error(f"Failed on {img.path}: {err}")

    logger.info(f"Done: {processed - failures} written to {args.output}, {failures} failed")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
