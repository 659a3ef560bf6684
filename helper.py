import itertools

import numpy as np
import pandas as pd

from CostMatrix import CostMatrix

# n! permutations; keep the reference check to matrices that enumerate quickly
BRUTE_FORCE_LIMIT = 8


def read_cost_matrix(path, delimiter=","):
    """Load a headerless CSV of costs into a CostMatrix."""
    frame = pd.read_csv(path, header=None, sep=delimiter, dtype=np.float64)
    return CostMatrix.from_array(frame.to_numpy())


def brute_force_minimum_cost(matrix):
    costs = matrix.to_array() if isinstance(matrix, CostMatrix) else np.asarray(matrix, dtype=np.float64)
    n = costs.shape[0]
    if n > BRUTE_FORCE_LIMIT:
        raise ValueError("brute force is limited to %d rows, got %d" % (BRUTE_FORCE_LIMIT, n))

    rows = np.arange(n)
    best = None
    for perm in itertools.permutations(range(n)):
        total = costs[rows, list(perm)].sum()
        if best is None or total < best:
            best = total
    return float(best)


def assignment_table(matrix, rows, cols):
    costs = matrix.to_array()
    return pd.DataFrame({
        'row': np.asarray(rows, dtype=int),
        'col': np.asarray(cols, dtype=int),
        'cost': costs[rows, cols],
    })
