"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Visualization generator for solver benchmark results.

    Creates charts of the propagation and search counters per puzzle.
    """

    # Color palette for deduction rules
    COLORS = {
        "singleton": "#2ecc71",  # Green
        "row": "#3498db",        # Blue
        "column": "#9b59b6",     # Purple
        "subsquare": "#f39c12",  # Orange
        "before": "#95a5a6",     # Grey
        "after": "#e74c3c",      # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results. Puzzles that failed to
                     load are left out of every chart.
            output_dir: Directory to save generated charts.
        """
        self.results = [r for r in results if r.size]
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        # Set style
        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    @property
    def labels(self) -> List[str]:
        return [os.path.splitext(os.path.basename(r.puzzle))[0] for r in self.results]

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        charts = []

        charts.append(self.plot_deductions_by_rule())
        charts.append(self.plot_unstackings())
        charts.append(self.plot_time_by_size())
        charts.append(self.plot_candidate_reduction())

        return charts

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_deductions_by_rule(self) -> str:
        """Create stacked bar chart of cells fixed by each deduction rule."""
        fig, ax = plt.subplots(figsize=(max(8, len(self.results) * 0.6), 6))

        x = np.arange(len(self.results))
        bottom = np.zeros(len(self.results))

        for rule in ("singleton", "row", "column", "subsquare"):
            counts = np.array([getattr(r, f"frozen_{rule}") for r in self.results], dtype=float)
            ax.bar(x, counts, bottom=bottom, label=rule.capitalize(),
                   color=self.COLORS[rule], edgecolor='black', linewidth=0.5)
            bottom += counts

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Cells Fixed', fontsize=12)
        ax.set_title('Preprocessing Deductions by Rule', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(self.labels, rotation=45, ha='right')
        ax.legend(title='Rule')
        ax.set_ylim(bottom=0)

        return self._save("deductions_by_rule.png")

    def plot_unstackings(self) -> str:
        """Create bar chart of backtracking retractions per puzzle."""
        fig, ax = plt.subplots(figsize=(max(8, len(self.results) * 0.6), 6))

        unstackings = [r.unstackings for r in self.results]
        bars = ax.bar(self.labels, unstackings, color=self.COLORS["after"],
                      edgecolor='black', linewidth=0.5)

        # Add value labels on bars
        for bar, count in zip(bars, unstackings):
            ax.annotate(f'{count:,}',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=8)

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Unstackings (Symlog Scale)', fontsize=12)
        ax.set_title('Backtracking Retractions by Puzzle', fontsize=14, fontweight='bold')
        ax.tick_params(axis='x', rotation=45)

        # Counts range from zero to millions
        ax.set_yscale('symlog')

        return self._save("unstackings.png")

    def plot_time_by_size(self) -> str:
        """Create box plot showing solve time distribution per board size."""
        fig, ax = plt.subplots(figsize=(10, 6))

        sizes = [f"{r.size}x{r.size}" for r in self.results]
        times = [r.time_seconds for r in self.results]
        order = [f"{s}x{s}" for s in sorted(set(r.size for r in self.results))]

        sns.boxplot(x=sizes, y=times, order=order, ax=ax)
        sns.stripplot(x=sizes, y=times, order=order, ax=ax, color='black', size=4)

        ax.set_xlabel('Board Size', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution by Board Size', fontsize=14, fontweight='bold')

        return self._save("time_by_size.png")

    def plot_candidate_reduction(self) -> str:
        """Create grouped bar chart of candidate sums before and after preprocessing."""
        fig, ax = plt.subplots(figsize=(max(8, len(self.results) * 0.6), 6))

        x = np.arange(len(self.results))
        width = 0.4

        before = [r.candidates_before for r in self.results]
        after = [r.candidates_after for r in self.results]

        ax.bar(x - width / 2, before, width, label='Before',
               color=self.COLORS["before"], edgecolor='black', linewidth=0.5)
        ax.bar(x + width / 2, after, width, label='After',
               color=self.COLORS["after"], edgecolor='black', linewidth=0.5)

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Sum of Candidates', fontsize=12)
        ax.set_title('Candidates Before and After Preprocessing', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(self.labels, rotation=45, ha='right')
        ax.legend(title='Preprocessing')
        ax.set_ylim(bottom=0)

        return self._save("candidate_reduction.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Puzzle | Size | Outcome | Time | Deductions | Placements | Unstackings |",
            "|--------|------|---------|------|------------|------------|-------------|"
        ]

        for label, r in zip(self.labels, self.results):
            lines.append(
                f"| {label} | {r.size}x{r.size} | {r.outcome} | {r.time_seconds:.4f}s "
                f"| {r.deductions:,} | {r.placements:,} | {r.unstackings:,} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
