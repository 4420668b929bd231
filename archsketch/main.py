"""Process bootstrap: logging, stage registration and the command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from archsketch.config import settings

_STAGE_PACKAGES = ["grammar", "resolution", "composition"]
_registered = False


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def register_stages() -> None:
    """Import all stage modules so @stage decorators fire. Safe to call repeatedly."""
    global _registered
    if _registered:
        return

    import importlib
    import pkgutil

    from archsketch.engine.registry import get_registry

    for package_dir in _STAGE_PACKAGES:
        package_name = f"archsketch.engine.{package_dir}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            if module_name.startswith("_"):
                continue
            importlib.import_module(f"{package_name}.{module_name}")

    get_registry().check()
    _registered = True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Archsketch — procedural architectural silhouettes")
    parser.add_argument("-s", "--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--style", default="gothic", help="Style preset")
    parser.add_argument("-f", "--format", default=settings.default_format, help="Paper format")
    parser.add_argument("--margin", type=float, default=settings.default_margin)
    parser.add_argument("--stroke-width", type=float, default=1.5)
    parser.add_argument("--line-art", action="store_true", help="Resolved edges instead of white fills")
    parser.add_argument("--hatch", action="store_true", help="Enable hatching")
    parser.add_argument("--hatch-density", type=float, default=4.0)
    parser.add_argument("--hatch-angle", type=float, default=45.0)
    parser.add_argument("--hatch-coverage", type=float, default=0.3)
    parser.add_argument("--hatch-side", default="left", choices=["left", "right", "top", "bottom", "all"])
    parser.add_argument("-o", "--output", help="Output SVG file (default: stdout)")
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    from archsketch.generator import generate_svg
    from archsketch.models.params import GenerationParams

    params = GenerationParams(
        seed=args.seed,
        style=args.style,
        format=args.format,
        margin=args.margin,
        stroke_width=args.stroke_width,
        use_fills=not args.line_art,
        hatching=args.hatch,
        hatch_density=args.hatch_density,
        hatch_angle=args.hatch_angle,
        hatch_coverage=args.hatch_coverage,
        hatch_side=args.hatch_side,
    )
    try:
        svg = generate_svg(params)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(svg)
        print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(svg + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
