from .series_solver import SeriesValveSolver

__all__ = ["SeriesValveSolver"]
