"""Command-line interface for heightfield generation."""

import argparse
import logging
import time
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the heightfield CLI."""
    parser = argparse.ArgumentParser(
        description="Synthesize a fractal heightfield and apply thermal erosion"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a TOML config file (command-line options override it)",
    )
    parser.add_argument("--width", type=int, default=None, help="Grid width (default: 1000)")
    parser.add_argument("--depth", type=int, default=None, help="Grid depth (default: 1000)")
    parser.add_argument("--octaves", type=int, default=None, help="Base fBm octaves")
    parser.add_argument("--frequency", type=float, default=None, help="Base frequency")
    parser.add_argument("--amplitude", type=float, default=None, help="Base amplitude")
    parser.add_argument("--gain", type=float, default=None, help="Amplitude multiplier per octave")
    parser.add_argument(
        "--lacunarity", type=float, default=None, help="Frequency multiplier per octave"
    )
    parser.add_argument(
        "--layer",
        type=float,
        nargs=2,
        action="append",
        metavar=("FREQ", "AMP"),
        default=None,
        help="Add an extra noise layer (repeatable)",
    )
    parser.add_argument("--iterations", type=int, default=None, help="Erosion iterations")
    parser.add_argument(
        "--repose-angle", type=float, default=None, help="Angle of repose in degrees"
    )
    parser.add_argument(
        "--talus", type=float, default=None, help="Fraction of excess moved per iteration"
    )
    parser.add_argument(
        "--cell-spacing-x", type=float, default=None, help="World distance between columns"
    )
    parser.add_argument(
        "--cell-spacing-z", type=float, default=None, help="World distance between rows"
    )
    parser.add_argument(
        "--no-erosion", action="store_true", help="Skip the erosion stage"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for heightfield generation."""
    args = build_parser().parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Import here to avoid slow startup for --help
    from .config import NoiseLayer, TerrainConfig, load_config
    from .generator import generate_heightfield

    config = load_config(Path(args.config)) if args.config else TerrainConfig()

    overrides = {"width": args.width, "depth": args.depth}
    config = config.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    base_overrides = {
        "octaves": args.octaves,
        "frequency": args.frequency,
        "amplitude": args.amplitude,
        "gain": args.gain,
        "lacunarity": args.lacunarity,
    }
    config.base = config.base.model_copy(
        update={k: v for k, v in base_overrides.items() if v is not None}
    )

    erosion_overrides = {
        "iterations": args.iterations,
        "repose_angle": args.repose_angle,
        "talus_factor": args.talus,
        "cell_spacing_x": args.cell_spacing_x,
        "cell_spacing_z": args.cell_spacing_z,
    }
    config.erosion = config.erosion.model_copy(
        update={k: v for k, v in erosion_overrides.items() if v is not None}
    )

    if args.layer:
        config.layers = config.layers + [
            NoiseLayer(frequency=freq, amplitude=amp) for freq, amp in args.layer
        ]
    if args.no_erosion:
        config.erode = False

    print(f"Generating {config.width}x{config.depth} heightfield")
    print()

    start_time = time.time()
    result = generate_heightfield(config)
    gen_time = time.time() - start_time

    low, high = result.height_range
    print()
    print(f"Generation complete in {gen_time:.1f}s")
    print(f"Height range: [{low:.4f}, {high:.4f}]")


if __name__ == "__main__":
    main()
