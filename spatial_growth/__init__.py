"""Stochastic spatial population growth on grids and continuous planes."""

__version__ = "0.1.0"
