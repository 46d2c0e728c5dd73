"""Benchmark module for comparing the search strategies."""

from .benchmark import Benchmark, BenchmarkResult, TrialSummary, list_puzzle_files
from .visualizer import Visualizer

__all__ = ["Benchmark", "BenchmarkResult", "TrialSummary", "list_puzzle_files", "Visualizer"]
