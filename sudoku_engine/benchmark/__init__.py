"""Benchmark module for running the solver over puzzle collections."""

from .benchmark import Benchmark, BenchmarkResult
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "Visualizer"]
