from __future__ import annotations

import typing as t

import numpy as np

from pressure_management_core.exceptions import ConfigurationError


class Curve:
    """Piecewise-linear x/y curve, such as the head loss vs. flow curve of a general purpose valve.

    :param name: Curve identifier
    :param points: Sequence of ``(x, y)`` pairs with strictly increasing ``x``
    """

    def __init__(self, name: str, points: t.Sequence[t.Tuple[float, float]]):
        data = np.asarray(points, dtype=float)
        if data.ndim != 2 or data.shape[1] != 2 or len(data) == 0:
            raise ConfigurationError(f"Curve '{name}' must contain at least one (x, y) point")
        if np.any(np.diff(data[:, 0]) <= 0):
            raise ConfigurationError(f"Curve '{name}' must have strictly increasing x values")
        self.name = name
        self.x = data[:, 0]
        self.y = data[:, 1]

    def __len__(self):
        return len(self.x)

    def __repr__(self):
        return f"<Curve '{self.name}', {len(self)} points>"

    def find_segment(self, x: float) -> t.Tuple[float, float]:
        """Find the slope and intercept of the curve segment that contains ``x``. Values below
        the first point use the first segment, values beyond the last point extrapolate the last
        segment. A single point curve is flat.

        :return: ``(slope, intercept)`` such that ``y = intercept + slope * x``
        """
        if len(self) == 1:
            return 0.0, float(self.y[0])
        k = int(np.searchsorted(self.x, x, side="right"))
        k = min(max(k, 1), len(self) - 1)
        slope = (self.y[k] - self.y[k - 1]) / (self.x[k] - self.x[k - 1])
        intercept = self.y[k] - slope * self.x[k]
        return float(slope), float(intercept)

    def __call__(self, x: float) -> float:
        slope, intercept = self.find_segment(x)
        return intercept + slope * x
