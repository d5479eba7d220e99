import argparse
import sys
import os
import logging
import time

# Ensure project root is in path so we can import 'maze_stepper' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_stepper.config import ANIMATION, GRID_SIZE, check_grid_size

ALGORITHMS = ["backtracking", "prim", "kruskal", "wilson", "division"]


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def grid_size(value: str) -> int:
    try:
        return check_grid_size(int(value))
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Stepper: stepwise perfect-maze generator")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_grid_args(p):
        p.add_argument("--width", type=grid_size, default=GRID_SIZE.default_width, help="Maze Width")
        p.add_argument("--height", type=grid_size, default=GRID_SIZE.default_height, help="Maze Height")
        p.add_argument("--seed", type=int, default=None, help="Random Seed (default: OS entropy)")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze instantly and print it")
    add_grid_args(gen_parser)
    gen_parser.add_argument("--algo", type=str, default="backtracking", choices=ALGORITHMS, help="Generation Algorithm")
    gen_parser.add_argument("--no-ascii", action="store_true", help="Only print stats")

    # Animate Command
    anim_parser = subparsers.add_parser("animate", help="Animate generation in a window")
    add_grid_args(anim_parser)
    anim_parser.add_argument("--algo", type=str, default="backtracking", choices=ALGORITHMS, help="Generation Algorithm")
    anim_parser.add_argument("--speed", type=int, default=ANIMATION.default_speed,
                             help=f"Speed {ANIMATION.min_speed}-{ANIMATION.max_speed} (steps/sec = {ANIMATION.speed_base}^speed)")
    anim_parser.add_argument("--record", action="store_true", help="Record animation video")
    anim_parser.add_argument("--out", type=str, help="Video output path (optional)")

    # Stats Command
    stats_parser = subparsers.add_parser("stats", help="Compare algorithms")
    add_grid_args(stats_parser)
    stats_parser.add_argument("--runs", type=int, default=5, help="Mazes per algorithm")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_stepper")

    if args.command is None:
        parser.print_help()
        return

    from maze_stepper.generator import AlgorithmKind, MazeGenerator
    from maze_stepper.core.complexity import MazeStats

    logger.debug(f"Running command: {args.command}")

    if args.command == "generate":
        logger.info(f"Generating {args.width}x{args.height} maze with {args.algo.upper()}...")
        maze = MazeGenerator(args.width, args.height, seed=args.seed)

        t0 = time.time()
        maze.generate_maze(AlgorithmKind(args.algo))
        logger.info(f"Generation complete in {time.time() - t0:.4f}s")

        if not args.no_ascii:
            from maze_stepper.viz.text import render_ascii
            print(render_ascii(maze))

        stats = MazeStats.calculate_stats(maze.grid)
        logger.info(f"Stats: {stats}")

    elif args.command == "animate":
        from maze_stepper.viz.renderer import Renderer

        maze = MazeGenerator(args.width, args.height, seed=args.seed)
        output_file = args.out
        if args.record and not output_file:
            from maze_stepper.viz.recorder import default_output_path
            output_file = default_output_path(f"gen_{args.algo}_{args.width}x{args.height}")
        if args.record:
            logger.info(f"Recording video to {output_file}")

        renderer = Renderer(maze, AlgorithmKind(args.algo), speed=args.speed,
                            record=args.record, output_file=output_file)
        renderer.init_window()
        renderer.run_loop()

    elif args.command == "stats":
        if args.runs < 1:
            parser.error("--runs must be at least 1")
        logger.info(f"Comparing algorithms on {args.width}x{args.height} ({args.runs} runs each)...")

        print(f"\n{'ALGORITHM':<14} | {'TIME (s)':<10} | {'STEPS':<8} | {'DEAD ENDS %':<11} | {'PERFECT':<7}")
        print("-" * 62)

        for kind in AlgorithmKind:
            maze = MazeGenerator(args.width, args.height, seed=args.seed)
            total_time = 0.0
            total_steps = 0
            dead_end_pct = 0.0
            perfect = True
            for _ in range(args.runs):
                t0 = time.time()
                maze.start_generation(kind)
                steps = 1
                while not maze.generation_step():
                    steps += 1
                total_time += time.time() - t0
                total_steps += steps

                stats = MazeStats.calculate_stats(maze.grid)
                dead_end_pct += stats["dead_end_percent"]
                perfect = perfect and stats["perfect"]

            n = args.runs
            print(f"{kind.value:<14} | {total_time / n:<10.4f} | {total_steps // n:<8} | "
                  f"{dead_end_pct / n:<11.1f} | {str(perfect):<7}")


if __name__ == "__main__":
    main()
