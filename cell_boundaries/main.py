#!/usr/bin/env python3
"""
Bounded Cell Growth Simulation

Cells grow, divide at a size threshold and are kept inside an x/y column
of a bounded cube.

Usage:
    cell-boundaries [--config configs/boundaries.yaml] [options]

Examples:
    cell-boundaries
    cell-boundaries --config configs/boundaries.yaml --out-dir results/
    cell-boundaries --steps 100 --no-csv --quiet
    cell-boundaries --csv-every 10
    cell-boundaries --seed 42
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import default_config, load_config
from .model.engine import SimulationEngine, SimulationError
from .export.csv_writer import CSVWriter
from .export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Bounded Cell Growth Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    cell-boundaries
    cell-boundaries --config configs/boundaries.yaml --out-dir results/
    cell-boundaries --steps 100 --no-csv --quiet
    cell-boundaries --csv-every 10
    cell-boundaries --seed 42
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file (default: built-in setup)')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override number of simulation steps')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')
    parser.add_argument('--csv-every', type=int, default=None,
                        help='Write every Nth step to the CSV (default: 1)')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    # Load configuration
    try:
        config = load_config(args.config) if args.config else default_config()
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.steps is not None:
        if args.steps < 0:
            print("Error: --steps must be non-negative", file=sys.stderr)
            return 1
        config.steps = args.steps
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.csv_every is not None:
        if args.csv_every < 1:
            print("Error: --csv-every must be at least 1", file=sys.stderr)
            return 1
        config.csv_every = args.csv_every
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    # Initialize engine
    if not config.quiet:
        print("Initializing simulation...")
        print(f"  Domain: x={config.domain.x_range} y={config.domain.y_range} "
              f"cube={config.domain.cube_dim}")
        print(f"  Cells: {config.cell_count}")
        print(f"  Steps: {config.steps}")

    try:
        engine = SimulationEngine(config)
    except (ValueError, KeyError) as e:
        print(f"Error: invalid setup: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"  Spawned: {len(engine.store)} cells")

    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv',
                               every=config.csv_every)
        csv_writer.open()

    reporter = Reporter(str(args.config) if args.config else None, config.seed)

    # Main simulation loop
    if not config.quiet:
        print("\nRunning simulation...")

    final_state = None
    status = 0
    try:
        while not engine.is_finished():
            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            reporter.update(state)

            # Progress indicator
            if not config.quiet and state.step % 100 == 0:
                population = int(state.metrics.get('population', 0))
                divisions = int(state.metrics.get('total_divisions', 0))
                print(f"  Step {state.step}: {population} cells, {divisions} divisions")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")
    except SimulationError as e:
        print(f"Error: simulation aborted: {e}", file=sys.stderr)
        status = 1
    finally:
        if csv_writer:
            csv_writer.close()

    if csv_writer and not config.quiet:
        print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    # Print summary report
    if not config.quiet and final_state:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.csv_enabled
        )
        print(report)
        if status == 0:
            print("Simulation completed successfully!")

    return status


if __name__ == '__main__':
    sys.exit(main())
