"""
Visualization for genetic MKP runs

Plots the best-ever value trace of a search and the per-dimension
capacity utilization of its result.
"""

import matplotlib.pyplot as plt
import numpy as np
from typing import Optional, Tuple

from .statistics import ResultSummary


def plot_convergence(summary: ResultSummary, ax: plt.Axes = None):
    """Plot best-ever total value per generation"""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))

    history = summary.best_history or [summary.total_profit]
    ax.step(range(len(history)), history, where='post', color='tab:blue', label='Best value')

    if summary.known_optimum:
        ax.axhline(summary.known_optimum, color='tab:red', linestyle='--',
                   label=f'Known optimum ({summary.known_optimum})')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Total profit')
    ax.set_title('Convergence')
    ax.grid(True, alpha=0.3)
    ax.legend(loc='lower right')

    return ax


def plot_utilization(summary: ResultSummary, ax: plt.Axes = None):
    """Bar chart of capacity utilization per dimension"""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))

    ratios = np.array(summary.utilization_ratios, dtype=float) * 100
    dimensions = np.arange(1, len(ratios) + 1)

    bars = ax.bar(dimensions, ratios, color='tab:green', alpha=0.8)
    ax.axhline(100, color='black', linewidth=1)

    for bar, label in zip(bars, summary.utilization):
        ax.text(bar.get_x() + bar.get_width() / 2, bar.get_height(), label,
                ha='center', va='bottom', fontsize=8)

    ax.set_xticks(dimensions)
    ax.set_xlabel('Dimension')
    ax.set_ylabel('Utilization (%)')
    ax.set_ylim(0, 110)
    ax.set_title('Capacity utilization')

    return ax


def plot_run_summary(summary: ResultSummary,
                     figsize: Tuple[int, int] = (14, 5),
                     save_path: Optional[str] = None,
                     show: bool = False):
    """
    Create a two-panel figure: convergence and utilization

    Args:
        summary: Result of a search run
        figsize: Figure size (width, height)
        save_path: Optional path to save the figure
        show: Display the figure interactively

    Returns:
        The matplotlib Figure
    """
    fig, (ax_convergence, ax_utilization) = plt.subplots(1, 2, figsize=figsize)

    plot_convergence(summary, ax_convergence)
    plot_utilization(summary, ax_utilization)

    fig.suptitle(f"Total profit {summary.total_profit}, "
                 f"{len(summary.picked_items)} items, {summary.iterations} generations")
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')

    if show:
        plt.show()

    return fig
