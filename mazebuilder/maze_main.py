"""Command line entry point: generate a random maze and write it as ASCII art."""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from mazebuilder import __version__
from mazebuilder.core.generator import MazeGenerator
from mazebuilder.core.renderer import write_maze
from mazebuilder.utils.colors import (
    Colors, banner, colored, error, progress_bar, section, setting, stat, status,
)
from mazebuilder.utils.config import AppConfig, ConfigManager
from mazebuilder.utils.logger import get_logger, setup_logging
from mazebuilder.utils.validation import (
    ValidationError, validate_dimension, validate_maze, validate_output_file,
)

logger = get_logger(__name__)


def show_progress(current, total):
    """Show knockdown progress, redrawing at most about a hundred times."""
    step = max(1, total // 100)
    if current == total or current % step == 0:
        print(f"\r   {status('working', 'Knocking down walls')}: {progress_bar(current, total)}",
              end='', flush=True)


def create_parser():
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="mazebuilder",
        description="Generate a random maze with exactly one path between any two cells "
                    "and write it to a file as ASCII art.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument('height', help='Maze height in cells (positive integer)')
    parser.add_argument('width', help='Maze width in cells (positive integer)')
    parser.add_argument('output', help='Output file name')
    parser.add_argument('-c', '--config', help='Configuration file path')
    parser.add_argument('--seed', type=int, help='Random seed for reproducible mazes')
    parser.add_argument('--no-verify', dest='verify', action='store_false', default=None,
                        help='Skip the spanning-tree check after generation')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only print errors')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--version', action='version', version=f'mazebuilder {__version__}')

    return parser


def run(args, config: AppConfig) -> int:
    """Validate arguments, generate the maze and write it out."""
    try:
        height = validate_dimension(args.height, "height")
        width = validate_dimension(args.width, "width")
        validate_output_file(args.output)
    except ValidationError as e:
        print(error(str(e)), file=sys.stderr)
        return 1

    # Open before generating so an unwritable path fails fast
    try:
        stream = open(args.output, 'w')
    except OSError as e:
        logger.debug(f"Cannot open {args.output}: {e}")
        print(error(f"{args.output} not writeable."), file=sys.stderr)
        return 1

    with stream:
        if not args.quiet:
            print(banner(f"Maze Builder v{__version__}", 60))
            print(section("Configuration"))
            print(setting("Size", f"{height} x {width}"))
            print(setting("Output", args.output))
            print(setting("Seed", config.maze.seed if config.maze.seed is not None else 'random'))
            print(section("Generating"))

        callback = show_progress if config.maze.show_progress and not args.quiet else None
        maze = MazeGenerator(config.maze).generate(height, width, progress_callback=callback)

        if config.maze.verify:
            try:
                validate_maze(maze)
            except ValidationError as e:
                logger.error(f"Generated maze failed verification: {e}")
                stream.close()
                # Do not leave an empty maze file behind
                Path(args.output).unlink(missing_ok=True)
                print(error(f"Generated maze is invalid: {e}"), file=sys.stderr)
                return 1

        write_maze(stream, maze)

    if not args.quiet:
        print(f"\n{status('success', f'Maze complete! ({maze.stats.generation_time:.3f}s)')}")
        print(section("Results Summary"))
        print(stat("Cells", maze.cell_count))
        print(stat("Walls knocked down", maze.stats.knockdowns))
        print(stat("Cells drawn", maze.stats.iterations))
        print(stat("Wasted draws", maze.stats.wasted_iterations))
        print(f"\n{status('info', 'Maze saved to')}: {colored(args.output, Colors.VALUE)}")

    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = ConfigManager(args.config).load_config()
    except ValueError as e:
        print(error(f"Configuration error: {e}"), file=sys.stderr)
        return 1

    # Override with CLI arguments
    if args.seed is not None:
        config.maze.seed = args.seed
    if args.verify is not None:
        config.maze.verify = args.verify
    if args.verbose:
        config.logging.level = "DEBUG"

    setup_logging(config.logging)

    try:
        return run(args, config)
    except KeyboardInterrupt:
        print(f"\n{error('Generation interrupted by user')}", file=sys.stderr)
        return 130


if __name__ == '__main__':
    sys.exit(main())
