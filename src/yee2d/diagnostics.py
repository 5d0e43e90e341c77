# diagnostics.py
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt

if TYPE_CHECKING:
    from .algorithm.simulator import Simulator


# -----------------------------
# I/O helpers
# -----------------------------

def save_npz(path: Path, **arrays: np.ndarray) -> None:
    """Save compressed .npz (creates parent dirs)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez_compressed(path, **arrays)


def stream_run_to_npy(sim: "Simulator", path: Path, *, progress: bool = False) -> np.ndarray:
    """
    Run sim for its full nt steps, writing the Ez history straight into an
    on-disk .npy memmap of shape (nx, ny, nt) instead of RAM.

    Returns the memmap (reopen later with np.load(path, mmap_mode="r")).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    d = sim.discretizer
    mm = np.lib.format.open_memmap(path, mode="w+", dtype=np.float64, shape=(d.nx, d.ny, d.nt))
    sim.run(out=mm, progress=progress)
    mm.flush()
    return mm


# -----------------------------
# Plotting
# -----------------------------

def _extent(sim: "Simulator") -> Tuple[float, float, float, float]:
    return (0.0, float(sim.bound.max_x), 0.0, float(sim.bound.max_y))


def _finish(fig, path: Optional[Path], show: bool, close: bool) -> None:
    plt.tight_layout()
    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=200)
    if show:
        plt.show()
    if close:
        plt.close(fig)


def plot_permittivity(
    sim: "Simulator",
    *,
    path: Optional[Path] = None,
    cmap: str = "viridis",
    show: bool = False,
    close: bool = True,
):
    """Heatmap of the relative permittivity map in physical coordinates."""
    eps = sim.permittivity.eps

    fig, ax = plt.subplots(figsize=(3.5, 7.5))
    im = ax.imshow(eps.T, origin="lower", aspect="auto", cmap=cmap, extent=_extent(sim))
    ax.set_xlabel("x (m)")
    ax.set_ylabel("y (m)")
    ax.set_title("relative permittivity")
    plt.colorbar(im, ax=ax, fraction=0.046)

    _finish(fig, path, show, close)
    return fig


def plot_field(
    sim: "Simulator",
    *,
    path: Optional[Path] = None,
    cmap: str = "coolwarm",
    overlay: bool = True,
    show: bool = False,
    close: bool = True,
):
    """
    Ez heatmap with a symmetric colour range, optionally with the
    permittivity map drawn on top as contours (rescaled to the field limit).

    An all-zero field (t = 0 away from the source) is plotted with a unit range.
    """
    ez = sim.ez
    eps = sim.permittivity.eps

    lim = float(np.max(np.abs(ez)))
    if lim == 0.0:
        lim = 1.0

    fig, ax = plt.subplots(figsize=(3.0, 7.5))
    ax.imshow(
        ez.T,
        origin="lower",
        aspect="auto",
        cmap=cmap,
        vmin=-lim,
        vmax=lim,
        extent=_extent(sim),
    )

    if overlay and np.ptp(eps) > 0:
        X, Y = sim.discretizer.mesh()
        ax.contour(X, Y, lim * eps / np.max(np.abs(eps)), colors="k", linewidths=0.5)

    ax.set_xlabel("x (m)")
    ax.set_ylabel("y (m)")
    ax.set_title(f"Ez, step {sim.t}")

    _finish(fig, path, show, close)
    return fig
