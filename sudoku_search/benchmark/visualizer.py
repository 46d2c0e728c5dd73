"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..solvers import STRATEGIES


class Visualizer:
    """
    Chart generator for strategy benchmark results.

    Compares node expansions and wall time of the three strategies.
    """

    # Color palette for strategies
    COLORS = {
        "B": "#e74c3c",      # Red
        "BTFC": "#f39c12",   # Orange
        "BTFCH": "#2ecc71",  # Green
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: Per-trial benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _labels(self) -> List[str]:
        strategies = sorted(set(r.strategy for r in self.results))
        return [STRATEGIES[s].label for s in strategies]

    def _by_label(self, label: str) -> List[BenchmarkResult]:
        return [r for r in self.results if STRATEGIES[r.strategy].label == label]

    def _set_count_scale(self, ax, values: List[float], ylabel: str) -> None:
        # Log scale needs at least one positive bar
        if max(values, default=0) > 0:
            ax.set_yscale('log')
            ax.set_ylabel(f'{ylabel} (Log Scale)', fontsize=12)
        else:
            ax.set_yscale('linear')
            ax.set_ylabel(ylabel, fontsize=12)

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_nodes_comparison(),
            self.plot_nodes_by_puzzle(),
            self.plot_nodes_distribution(),
        ]

    def plot_time_comparison(self) -> str:
        """Bar chart of mean solve time per strategy with std error bars."""
        fig, ax = plt.subplots(figsize=(10, 6))

        labels = self._labels()
        means, stds, colors = [], [], []
        for label in labels:
            times = [r.time_ms for r in self._by_label(label)]
            means.append(np.mean(times))
            stds.append(np.std(times))
            colors.append(self.COLORS.get(label, "#95a5a6"))

        bars = ax.bar(labels, means, yerr=stds, capsize=6, color=colors,
                      edgecolor='black', linewidth=0.5)

        for bar, mean in zip(bars, means):
            ax.annotate(f'{mean:.2f} ms',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_ylabel('Average Time (ms)', fontsize=12)
        ax.set_title('Average Solve Time by Strategy', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def plot_nodes_comparison(self) -> str:
        """Bar chart of mean node expansions per strategy, log scale when any are positive."""
        fig, ax = plt.subplots(figsize=(10, 6))

        labels = self._labels()
        means = [np.mean([r.nodes_expanded for r in self._by_label(l)]) for l in labels]
        stds = [np.std([r.nodes_expanded for r in self._by_label(l)]) for l in labels]
        colors = [self.COLORS.get(l, "#95a5a6") for l in labels]

        ax.bar(labels, means, yerr=stds, capsize=6, color=colors,
               edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_title('Node Expansions by Strategy', fontsize=14, fontweight='bold')
        # Counts span several orders of magnitude between strategies
        self._set_count_scale(ax, means, 'Average Nodes Expanded')

        return self._save("nodes_comparison.png")

    def plot_nodes_by_puzzle(self) -> str:
        """Grouped bar chart of mean node expansions per puzzle and strategy."""
        fig, ax = plt.subplots(figsize=(12, 6))

        labels = self._labels()
        puzzles = sorted(set(r.puzzle for r in self.results))

        x = np.arange(len(puzzles))
        width = 0.8 / len(labels)
        all_means = []

        for i, label in enumerate(labels):
            results = self._by_label(label)
            means = []
            for puzzle in puzzles:
                nodes = [r.nodes_expanded for r in results if r.puzzle == puzzle]
                means.append(np.mean(nodes) if nodes else 0)
            all_means.extend(means)

            offset = (i - len(labels) / 2 + 0.5) * width
            ax.bar(x + offset, means, width,
                   label=label,
                   color=self.COLORS.get(label, "#95a5a6"),
                   edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_title('Node Expansions by Puzzle and Strategy', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels([os.path.basename(p) for p in puzzles], rotation=45, ha='right')
        ax.legend(title='Strategy', bbox_to_anchor=(1.05, 1), loc='upper left')
        self._set_count_scale(ax, all_means, 'Average Nodes Expanded')

        return self._save("nodes_by_puzzle.png")

    def plot_nodes_distribution(self) -> str:
        """Box plot of node expansions across trials per strategy."""
        fig, ax = plt.subplots(figsize=(12, 6))

        labels = self._labels()
        data = [[r.nodes_expanded for r in self._by_label(l)] for l in labels]

        bp = ax.boxplot(data, patch_artist=True)
        for patch, label in zip(bp['boxes'], labels):
            patch.set_facecolor(self.COLORS.get(label, "#95a5a6"))
            patch.set_alpha(0.7)

        ax.set_xticks(range(1, len(labels) + 1), labels)
        ax.set_xlabel('Strategy', fontsize=12)
        ax.set_ylabel('Nodes Expanded', fontsize=12)
        ax.set_title('Node Expansion Distribution by Strategy', fontsize=14, fontweight='bold')

        return self._save("nodes_distribution.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Strategy | Solved | Avg Time (ms) | Avg Nodes | Avg Backtracks |",
            "|----------|--------|---------------|-----------|----------------|"
        ]

        for label in self._labels():
            results = self._by_label(label)
            solved = sum(1 for r in results if r.solved)
            avg_time = np.mean([r.time_ms for r in results])
            avg_nodes = np.mean([r.nodes_expanded for r in results])
            avg_backtracks = np.mean([r.backtracks for r in results])

            lines.append(
                f"| {label} | {solved}/{len(results)} | {avg_time:.3f} | "
                f"{int(avg_nodes):,} | {int(avg_backtracks):,} |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path
