"""
Plotting utilities for training progress.
"""

from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np


def plot_training_history(
    history: Dict[str, List[float]],
    save_path: Optional[str] = None,
    title: str = 'SDCA Training Progress',
    figsize: Tuple[int, int] = (15, 5),
    show: bool = False
):
    """
    Plot primal/dual objectives and the duality gap per epoch.

    Args:
        history: Trainer history with 'primal', 'dual' and 'duality_gap' lists
        save_path: Optional path to save the figure
        title: Figure title
        figsize: Figure size
        show: Whether to call ``plt.show()``

    Returns:
        The matplotlib Figure
    """
    primal = history.get('primal', [])
    dual = history.get('dual', [])
    gaps = history.get('duality_gap', [])
    epochs = np.arange(1, len(primal) + 1)

    fig, axes = plt.subplots(1, 3, figsize=figsize)
    fig.suptitle(title, fontsize=16, fontweight='bold')

    axes[0].plot(epochs, primal, 'b-', label='Primal', linewidth=2, alpha=0.8)
    axes[0].plot(epochs, dual, 'r--', label='Dual', linewidth=2, alpha=0.8)
    axes[0].set_title('Objective', fontsize=14)
    axes[0].set_xlabel('Epoch')
    axes[0].set_ylabel('Value')
    axes[0].legend(loc='upper right')
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(epochs, gaps, 'purple', linewidth=2, alpha=0.8)
    axes[1].set_title('Relative Duality Gap', fontsize=14)
    axes[1].set_xlabel('Epoch')
    axes[1].set_ylabel('Gap')
    if gaps and min(gaps) > 0:
        axes[1].set_yscale('log')
    axes[1].grid(True, alpha=0.3)

    axes[2].axis('off')
    stats_text = "Training Statistics\n" + "=" * 25 + "\n\n"
    stats_text += f"Epochs: {len(primal)}\n"
    if primal:
        stats_text += f"Final Primal: {primal[-1]:.4f}\n"
        stats_text += f"Final Dual: {dual[-1]:.4f}\n"
        stats_text += f"Final Gap: {gaps[-1]:.2e}\n"
    axes[2].text(
        0.1, 0.5, stats_text,
        transform=axes[2].transAxes,
        fontsize=11,
        verticalalignment='center',
        fontfamily='monospace'
    )

    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=100, bbox_inches='tight')
        print(f"Training plot saved to {save_path}")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return fig
