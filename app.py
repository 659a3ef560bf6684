import argparse
import logging
import math

import numpy as np

from helper import BRUTE_FORCE_LIMIT, assignment_table, brute_force_minimum_cost, read_cost_matrix
from Hungarian import get_minimum_cost, get_minimum_cost_assignment

logger = logging.getLogger(__name__)


def configure_logging(level=logging.INFO):
    """Configure default logging if no handlers are present."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_parser():
    parser = argparse.ArgumentParser(description='Find the minimum total cost of assigning every row of a square \
                                                  cost matrix to a distinct column (Hungarian algorithm).')
    parser.add_argument('--input', type=str, required=True, help='Path to a headerless CSV file of costs.')
    parser.add_argument('--delimiter', type=str, default=',', help='Field separator used in the input file.')
    parser.add_argument('--assignment', action='store_true', help='Also print the chosen row -> column pairs.')
    parser.add_argument('--show-matrix', action='store_true', help='Print the cost matrix before solving.')
    parser.add_argument('--verify', action='store_true',
                        help='Cross-check the result by enumerating every permutation (at most %d rows).' % BRUTE_FORCE_LIMIT)
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        matrix = read_cost_matrix(args.input, delimiter=args.delimiter)
        if args.show_matrix:
            matrix.print_matrix()
        cost = get_minimum_cost(matrix)
    except (OSError, ValueError) as err:
        logger.error("cannot solve %s: %s", args.input, err)
        return 2

    print("Minimum total cost:", cost)

    if args.assignment:
        rows, cols = get_minimum_cost_assignment(matrix)
        print(assignment_table(matrix, rows, cols).to_string(index=False))

    if args.verify:
        if matrix.N > BRUTE_FORCE_LIMIT:
            logger.error("--verify supports at most %d rows, got %d", BRUTE_FORCE_LIMIT, matrix.N)
            return 2
        expected = brute_force_minimum_cost(matrix)
        if not np.isclose(cost, expected):
            logger.error("verification failed: solver returned %s, brute force found %s", cost, expected)
            return 1
        logger.info("verified against %d permutations", math.factorial(matrix.N))

    return 0


if __name__ == "__main__":

    raise SystemExit(main())
