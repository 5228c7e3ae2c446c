#!/usr/bin/env python3
import argparse
import json
import logging
import time
from pathlib import Path

from tableau_simplex.lp.render import format_iterations
from tableau_simplex.lp.simplex import solve_problem
from tableau_simplex.schemas import SolveOptions, TableauProblem
from scripts.generate_instances import generate_random_lp


def load_example(name: str) -> TableauProblem:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return TableauProblem.model_validate(json.loads(path.read_text()))


def main() -> None:
    parser = argparse.ArgumentParser(description="Time the tableau solver on sample instances.")
    parser.add_argument("--show-trace", action="store_true", help="Print every tableau")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    opts = SolveOptions()
    cases = [("examples/small_lp.json", load_example("small_lp.json"))]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_lp(3, 3, seed)))

    print("name,status,objective,pivots,time_ms")
    for name, problem in cases:
        start = time.perf_counter()
        solution = solve_problem(problem, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(f"{name},{solution.status},{solution.objective_value},{solution.pivots},{elapsed_ms:.2f}")
        if args.show_trace:
            print(format_iterations(solution.iterations))


if __name__ == "__main__":
    main()
