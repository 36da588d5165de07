"""Command-line interface for the Sudoku solver."""

import argparse
import logging
import sys

from .benchmark import Benchmark
from .core.validator import verify
from .exceptions import PuzzleFormatError
from .puzzle.loader import load_puzzle
from .puzzle.report import format_board, format_statistics
from .solvers import ConstraintSolver, Outcome


BANNERS = {
    Outcome.INVALID_SETUP: "****** INVALID SETUP *****",
    Outcome.NO_CANDIDATES: "****** NO SOLUTIONS EXISTS *****",
    Outcome.EXHAUSTED: "****** NO SOLUTIONS EXISTS *****",
    Outcome.NOT_ORIGINAL: "****** NOT A SOLUTION TO THE ORIGINAL PROBLEM *****",
    Outcome.INVALID_SOLUTION: "****** INVALID SOLUTION *****",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku-engine",
        description="Sudoku solver using constraint propagation and backtracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle file
  sudoku-engine solve puzzles/press_democrat.txt

  # Check a puzzle for duplicate symbols without solving it
  sudoku-engine check puzzles/press_democrat.txt

  # Benchmark a folder of puzzles
  sudoku-engine benchmark puzzles/*.txt --output results/

Puzzle files hold one row per line, '-' for blanks. A '//N=4' line before
the first row selects a 16x16 puzzle (alphabet 1-9, 0, A-F); N=5 and N=6
give 25x25 (1-9, 0, A-O) and 36x36 (1-9, 0, A-Z).
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log deductions and search progress"
    )

    # -v may also follow the subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", "-v", action="store_true", default=argparse.SUPPRESS,
        help="Log deductions and search progress"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Solve command
    solve_parser = subparsers.add_parser("solve", parents=[common], help="Solve a puzzle file")
    solve_parser.add_argument("file", help="Puzzle file")
    solve_parser.add_argument(
        "--dump", action="store_true",
        help="Print every square's candidate stack after preprocessing"
    )
    solve_parser.add_argument(
        "--no-propagation", action="store_true",
        help="Skip the deduction rules and go straight to backtracking"
    )

    # Check command
    check_parser = subparsers.add_parser(
        "check", parents=[common], help="Check a puzzle file for conflicts"
    )
    check_parser.add_argument("file", help="Puzzle file")
    check_parser.add_argument(
        "--full", action="store_true",
        help="Require every row, column and subsquare to be complete"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", parents=[common], help="Solve many puzzle files")
    bench_parser.add_argument("files", nargs="+", help="Puzzle files")
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    try:
        if args.command == "solve":
            return cmd_solve(args)
        elif args.command == "check":
            return cmd_check(args)
        elif args.command == "benchmark":
            return cmd_benchmark(args)
    except (OSError, PuzzleFormatError) as e:
        print(f"Error loading puzzle: {e}", file=sys.stderr)
        return 1

    return 1


def cmd_solve(args) -> int:
    """Handle the solve command."""
    board = load_puzzle(args.file)

    print()
    print(format_board(board))

    solver = ConstraintSolver(use_propagation=not args.no_propagation)

    if args.dump:
        preview = board.copy()
        solver.preprocess(preview)
        print()
        print(format_board(preview, everything=True))

    solution, stats = solver.solve(board)

    if solver.outcome is Outcome.INVALID_SETUP:
        print(f"\n{stats.violation}")
        print(f"\n{BANNERS[solver.outcome]}")
        return 0

    if solver.outcome is Outcome.NO_CANDIDATES:
        for row, col in stats.empty_cells:
            print(f"ERROR:  Can't find candidates for square ({row + 1},{col + 1})")
        print("Can't get started:  At least one square has no candidates")
        print(f"\n{BANNERS[solver.outcome]}")
        return 0

    print("\n")
    print(format_board(solution if solution is not None else board))

    if solver.outcome is not Outcome.SOLVED:
        if stats.violation:
            print(f"\n{stats.violation}")
        print(f"\n{BANNERS[solver.outcome]}")

    print()
    print(format_statistics(stats))
    if stats.solved:
        print(f"\nSolved in {stats.time_seconds:.4f}s")
    return 0


def cmd_check(args) -> int:
    """Handle the check command."""
    board = load_puzzle(args.file)
    print(format_board(board))

    violation = verify(board, full=args.full)
    if violation is not None:
        print(f"\n✗ {violation}")
        return 1

    print("\n✓ No conflicts found" if not args.full else "\n✓ Complete and valid")
    return 0


def cmd_benchmark(args) -> int:
    """Handle the benchmark command."""
    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)
    print(f"Puzzles: {len(args.files)}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    benchmark = Benchmark(args.files)
    results = benchmark.run()

    summary = benchmark.get_summary()

    print("\n" + "=" * 60)
    print("RESULTS SUMMARY")
    print("=" * 60)

    print("\nOutcomes:")
    for outcome, count in summary["outcomes"].items():
        print(f"  {outcome}: {count}")

    print("\nBy Board Size:")
    print("-" * 50)
    for size, stats in summary["results_by_size"].items():
        print(f"\n{size}:")
        print(f"  Accuracy: {stats['accuracy']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Deductions: {stats['avg_deductions']:.1f}")
        print(f"  Avg Unstackings: {stats['avg_unstackings']:.1f}")
        print(f"  Solved Without Search: {stats['solved_without_search']}")

    # Save results
    benchmark.save_results(args.output)
    print(f"\nResults saved to {args.output}/")

    # Generate charts
    if not args.no_charts and any(r.size for r in results):
        from .benchmark.visualizer import Visualizer

        print("\nGenerating charts...")
        visualizer = Visualizer(results, args.output)
        charts = visualizer.generate_all()
        visualizer.generate_summary_table()
        print(f"Charts saved to {args.output}/")
        for chart in charts:
            print(f"  - {chart.split('/')[-1]}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
