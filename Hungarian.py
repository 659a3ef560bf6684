import logging
from enum import Enum, IntEnum

import numpy as np

from CostMatrix import CostMatrix, NonFiniteInputError

logger = logging.getLogger(__name__)


class Mark(IntEnum):
    UNSET = 0
    STARRED = 1
    PRIMED = 2


class Step(Enum):
    REDUCE_ROWS = 1
    STAR_ZEROS = 2
    COVER_COLUMNS = 3
    PRIME_ZEROS = 4
    AUGMENT_PATH = 5
    GENERATE_ZEROS = 6
    DONE = 7


class Hungarian(object):
    """Working state of one Munkres run over a private copy of the costs.

    Each step method mutates the state and returns the Step to run next.
    """

    def __init__(self, matrix):
        n = matrix.N
        self.n = n
        self.X = np.array(matrix.A, dtype=np.float64).reshape(n, n)

        self.row_covered = np.zeros(n, dtype=bool)
        self.col_covered = np.zeros(n, dtype=bool)
        self.marked = np.full(n * n, Mark.UNSET, dtype=np.int8)
        self.z0_row = 0
        self.z0_col = 0
        self.row_path = np.zeros(2 * n, dtype=int)
        self.col_path = np.zeros(2 * n, dtype=int)

        self._steps = {
            Step.REDUCE_ROWS: self.row_reduction,
            Step.STAR_ZEROS: self.star_zeros,
            Step.COVER_COLUMNS: self.cover_columns,
            Step.PRIME_ZEROS: self.cover_zeros,
            Step.AUGMENT_PATH: self.augment_path,
            Step.GENERATE_ZEROS: self.generate_zeros,
        }

    def step(self, state):
        if state is Step.DONE:
            raise ValueError("no transition out of the terminal step")
        return self._steps[state]()

    def clear(self):
        self.row_covered[:] = False
        self.col_covered[:] = False

    def starred_count(self):
        return int(np.count_nonzero(self.marked == Mark.STARRED))

    def starred(self):
        return np.where(self.marked.reshape(self.n, self.n) == Mark.STARRED)

    def find_in_row(self, row, mark):
        hits = np.flatnonzero(self.marked[row * self.n:(row + 1) * self.n] == mark)
        return int(hits[0]) if hits.size else -1

    def find_in_col(self, col, mark):
        hits = np.flatnonzero(self.marked[col::self.n] == mark)
        return int(hits[0]) if hits.size else -1

    def row_reduction(self):
        self.X -= self.X.min(axis=1)[:, np.newaxis]
        return Step.STAR_ZEROS

    def star_zeros(self):
        for i, j in zip(*np.where(self.X == 0)):
            if not self.col_covered[j] and not self.row_covered[i]:
                self.marked[i * self.n + j] = Mark.STARRED
                self.col_covered[j] = True
                self.row_covered[i] = True

        self.clear()
        return Step.COVER_COLUMNS

    def cover_columns(self):
        check = self.marked.reshape(self.n, self.n) == Mark.STARRED
        self.col_covered[np.any(check, axis=0)] = True

        if check.sum() == self.n:
            return Step.DONE
        return Step.PRIME_ZEROS

    def cover_zeros(self):
        n = self.n
        while True:
            covered = (self.X == 0) & ~self.row_covered[:, np.newaxis] & ~self.col_covered
            pos = int(np.argmax(covered))
            if not covered.flat[pos]:
                return Step.GENERATE_ZEROS

            row, col = divmod(pos, n)
            self.marked[pos] = Mark.PRIMED
            star_col = self.find_in_row(row, Mark.STARRED)
            if star_col >= 0:
                self.row_covered[row] = True
                self.col_covered[star_col] = False
            else:
                self.z0_row = row
                self.z0_col = col
                return Step.AUGMENT_PATH

    def augment_path(self):
        course_r, course_c = self.row_path, self.col_path
        course_r[:] = 0
        course_c[:] = 0

        count = 0
        course_r[count] = self.z0_row
        course_c[count] = self.z0_col

        while True:
            row = self.find_in_col(course_c[count], Mark.STARRED)
            if row < 0:
                break
            count += 1
            course_r[count] = row
            course_c[count] = course_c[count - 1]

            col = self.find_in_row(course_r[count], Mark.PRIMED)
            count += 1
            course_r[count] = course_r[count - 1]
            course_c[count] = col

        for i in range(count + 1):
            pos = course_r[i] * self.n + course_c[i]
            if self.marked[pos] == Mark.STARRED:
                self.marked[pos] = Mark.UNSET
            else:
                self.marked[pos] = Mark.STARRED

        self.clear()
        self.marked[self.marked == Mark.PRIMED] = Mark.UNSET
        return Step.COVER_COLUMNS

    def generate_zeros(self):
        uncovered = ~self.row_covered[:, np.newaxis] & ~self.col_covered
        minimum_value = np.min(self.X[uncovered])
        self.X[self.row_covered] += minimum_value
        self.X[:, ~self.col_covered] -= minimum_value
        return Step.PRIME_ZEROS


def _validate(matrix):
    if not isinstance(matrix, CostMatrix):
        matrix = CostMatrix.from_array(matrix)
    if not np.all(np.isfinite(matrix.A)):
        raise NonFiniteInputError("cost matrix contains NaN or infinite entries")
    return matrix


def solve(matrix):
    """Run the step machine to completion and return the terminal state."""
    matrix = _validate(matrix)
    assignment = Hungarian(matrix)

    run = Step.REDUCE_ROWS
    steps = 0
    while run is not Step.DONE:
        run = assignment.step(run)
        steps += 1

    logger.debug("solved %dx%d cost matrix in %d steps", matrix.N, matrix.N, steps)
    return assignment


def get_minimum_cost(matrix):
    matrix = _validate(matrix)
    assignment = solve(matrix)
    cost = float(np.sum(matrix.A[assignment.marked == Mark.STARRED]))
    logger.debug("minimum assignment cost %s", cost)
    return cost


def get_minimum_cost_assignment(arr_costs):
    assignment = solve(arr_costs)
    return assignment.starred()
