"""
Command line front-end.

    imageops photo.png -o out.png --apply-operations "grayscale; blur 1.5"
    imageops a.png b.jpg -o out/ --apply-operations "rotate90" --jobs 4

Exit codes: 0 on success, 1 if any image failed, 2 on usage errors.
"""

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from core.constants import ImageIOConstants, SystemConstants
from core.engine import Engine
from core.exceptions import EngineError, ImageOpsError, ScriptSyntaxError
from core.image import ImageConverters
from core.pipeline import Pipeline
from core.script_parser import parse_script

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="imageops", description="Apply a pipeline of raster operations to images"
    )
    g_io = p.add_argument_group("I/O")
    g_io.add_argument("inputs", nargs="+", metavar="INPUT", help="Input image file(s)")
    g_io.add_argument(
        "-o",
        "--output",
        required=True,
        help="Output file, or directory when several inputs are given",
    )
    g_io.add_argument(
        "--format",
        type=str.upper,
        choices=ImageIOConstants.ALLOWED_OUTPUT_FORMATS,
        default=None,
        help="Output format (default: from the output file extension)",
    )
    g_io.add_argument(
        "--quality",
        type=int,
        default=ImageIOConstants.DEFAULT_JPEG_QUALITY,
        help="JPEG/WebP quality (1-100)",
    )

    g_ops = p.add_argument_group("Operations")
    g_ops.add_argument(
        "--apply-operations",
        dest="script",
        required=True,
        metavar="SCRIPT",
        help="Operation script, e.g. 'grayscale; blur 1.5; resize 200 100'",
    )

    g_run = p.add_argument_group("Execution")
    g_run.add_argument(
        "--jobs",
        type=int,
        default=SystemConstants.DEFAULT_JOBS,
        help=f"Images processed in parallel (1-{SystemConstants.MAX_JOBS})",
    )
    g_run.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return p


def _output_paths(inputs: List[Path], output: Path) -> List[Path]:
    """
    Output file for every input.

    With one input, ``output`` is the file unless it is an existing
    directory. With several, ``output`` is a directory (created if missing)
    and each result keeps its input's file name.

    Raises:
        ValueError: If several inputs are given and ``output`` is a file
    """
    if len(inputs) == 1 and not output.is_dir():
        return [output]

    if output.exists() and not output.is_dir():
        raise ValueError(f"Output {str(output)!r} must be a directory for several inputs")
    output.mkdir(parents=True, exist_ok=True)
    return [output / path.name for path in inputs]


def _process_one(
    engine: Engine,
    pipeline: Pipeline,
    source: Path,
    target: Path,
    format: Optional[str],
    quality: int,
) -> Optional[str]:
    """
    Run the pipeline on one file.

    Returns:
        None on success, otherwise the diagnostic line for this input
    """
    try:
        buffer = ImageConverters.load(source)
        result = engine.run(buffer, pipeline)
        ImageConverters.save(result, target, format=format, quality=quality)
    except EngineError as e:
        return f"{source}: {e.message}"
    except (ImageOpsError, OSError, ValueError) as e:
        return f"{source}: {e}"

    logger.info(f"{source} -> {target} ({result.width}x{result.height})")
    return None


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level), format=SystemConstants.LOG_FORMAT
    )

    if not 1 <= args.jobs <= SystemConstants.MAX_JOBS:
        parser.error(f"--jobs must be between 1 and {SystemConstants.MAX_JOBS}")
    if not 1 <= args.quality <= 100:
        parser.error("--quality must be between 1 and 100")

    try:
        pipeline = parse_script(args.script)
    except ScriptSyntaxError as e:
        print(f"imageops: {e.message}", file=sys.stderr)
        return EXIT_USAGE

    inputs = [Path(p) for p in args.inputs]
    try:
        targets = _output_paths(inputs, Path(args.output))
    except (OSError, ValueError) as e:
        print(f"imageops: {e}", file=sys.stderr)
        return EXIT_USAGE

    engine = Engine()
    logger.debug(f"Running {pipeline!r} on {len(inputs)} image(s) with {args.jobs} job(s)")

    with ThreadPoolExecutor(max_workers=args.jobs) as executor:
        failures = list(
            executor.map(
                lambda pair: _process_one(
                    engine, pipeline, pair[0], pair[1], args.format, args.quality
                ),
                zip(inputs, targets),
            )
        )

    failures = [f for f in failures if f is not None]
    for line in failures:
        print(line, file=sys.stderr)

    return EXIT_FAILED if failures else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
