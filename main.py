# main.py
"""
Main entry point for the Lorenz attractor simulation.

This script orchestrates the entire simulation lifecycle:
1. Loads configuration from `config.json` (or --config).
2. Initializes the logging system.
3. Sets up the particle ensemble and, unless headless, the visualizer.
4. Runs the main simulation loop.
5. Handles clean shutdown.
"""
import argparse
import logging
from utils import setup_logging, load_config
import cProfile
import pstats
import io


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Lorenz attractor particle trails")
    parser.add_argument('--config', type=str, default='config.json', help='Path to JSON config file')
    parser.add_argument('--headless', action='store_true', help='Run without opening a window')
    parser.add_argument('--max-steps', type=int, default=None, help='Override run_control.max_steps')
    return parser.parse_args(argv)


def main(argv=None):
    """
    The main function to run the simulation.
    """
    args = parse_args(argv)

    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"FATAL: Could not load {args.config}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Lorenz Attractor Simulation Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from config import SimulationConfig, require_positive_count
    from simulation import Simulation

    # ConfigurationError is logged where it is raised.
    log_throttle = require_positive_count('log_throttle_steps', run_params.get('log_throttle_steps', 100))
    sim = Simulation(SimulationConfig.from_params(sim_params))

    visualizer = None
    if not args.headless:
        from visualization import Visualizer
        visualizer = Visualizer(vis_params)

    profiler = cProfile.Profile()

    max_steps = args.max_steps if args.max_steps is not None else run_params.get('max_steps')
    if max_steps is None and visualizer is None:
        max_steps = 5000
        logging.warning(f"Headless run without max_steps; stopping after {max_steps}.")

    running = True
    frame = 0

    profiler.enable()
    while running:
        if sim.step():
            # Rule 2.4: Hot loops must throttle logs
            if sim.step_count % log_throttle == 0:
                logging.info(f"Simulation step {sim.step_count} | {len(sim.ensemble)} particles")
                stats = sim.stats()
                logging.debug(
                    f"Step {sim.step_count} | Mean speed: {stats['mean_speed']:.4f} | "
                    f"Diverged: {stats['diverged']}"
                )
        frame += 1

        # The visualizer reads the completed tick, then handles input.
        if visualizer is not None and not visualizer.draw(sim):
            running = False

        if max_steps is not None and sim.step_count >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
            running = False
    profiler.disable()

    if visualizer is not None:
        visualizer.close()
    sim.ensemble.clear()
    logging.info(f"Simulation loop finished after {frame} frames.")

    logging.info("--- Performance Profile ---")
    s = io.StringIO()
    # Sort by cumulative time spent in the function
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
    stats.print_stats(20)
    logging.info(f"\n{s.getvalue()}")

    logging.info("--- Lorenz Attractor Simulation Shutting Down ---")


if __name__ == "__main__":
    main()
