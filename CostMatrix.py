import operator

import numpy as np


class MatrixError(ValueError):
    pass


class DimensionMismatchError(MatrixError):
    pass


class NonFiniteInputError(MatrixError):
    pass


class CostMatrix(object):
    """Dense N x N matrix of costs stored row-major in a flat float buffer."""

    def __init__(self, n):
        n = operator.index(n)
        if n < 1:
            raise DimensionMismatchError("matrix dimension must be positive, got %d" % n)
        self.N = n
        self.A = np.zeros(n * n, dtype=np.float64)

    @classmethod
    def from_array(cls, values):
        try:
            arr = np.asarray(values, dtype=np.float64)
        except ValueError as err:
            raise DimensionMismatchError("cost matrix must be a square grid of numbers") from err

        if arr.ndim != 2 or arr.shape[0] != arr.shape[1] or arr.size == 0:
            raise DimensionMismatchError("cost matrix must be square and non-empty, got shape %s" % (arr.shape,))

        matrix = cls(arr.shape[0])
        matrix.A[:] = arr.ravel()
        return matrix

    @property
    def shape(self):
        return self.N, self.N

    def _offset(self, i, j):
        if not (0 <= i < self.N and 0 <= j < self.N):
            raise IndexError("cell (%d, %d) outside %dx%d matrix" % (i, j, self.N, self.N))
        return i * self.N + j

    def get_element(self, i, j):
        return self.A[self._offset(i, j)]

    def set_element(self, i, j, v):
        self.A[self._offset(i, j)] = v

    def to_array(self):
        return self.A.reshape(self.N, self.N).copy()

    def render(self):
        rows = self.A.reshape(self.N, self.N)
        return "\n".join(" ".join("%f" % v for v in row) for row in rows)

    def print_matrix(self):
        print(self.render())
