from __future__ import annotations
from pathlib import Path
import numpy as np

from yee2d import SimulationConfig, Simulator
from yee2d.core import courant_number
from yee2d.diagnostics import save_npz, plot_field, plot_permittivity


def run_case(cfg: SimulationConfig, outdir: Path, n_frames: int = 10) -> dict[str, float]:
    outdir.mkdir(parents=True, exist_ok=True)

    sim = Simulator.from_config(cfg)
    d = sim.discretizer

    plot_permittivity(sim, path=outdir / "figs" / "eps.png")

    stride = max(1, d.nt // n_frames)
    frames = []
    for i, ez in enumerate(sim.iter_snapshots(d.nt), start=1):
        if i % stride == 0:
            frames.append(ez.astype(np.float32))
            plot_field(sim, path=outdir / "figs" / f"ez_{i:06d}.png")

    metrics = {
        "courant": courant_number(d),
        "nt": float(d.nt),
        "n_inclusions": float(len(sim.permittivity.inclusions)),
        "max_abs_ez": float(np.max(np.abs(sim.ez))),
        "energy": sim.energy(),
    }

    save_npz(outdir / "fields" / "ez_frames.npz",
             ez=np.stack(frames, axis=-1), eps=np.array(sim.permittivity.eps))
    save_npz(outdir / "metrics.npz", **{k: np.array(v) for k, v in metrics.items()})
    return metrics


def main() -> None:
    base_out = Path("outputs")

    for n in (0, 3):
        cfg = SimulationConfig(n=n, seed=1234)
        outdir = base_out / f"inclusions_{n}"
        metrics = run_case(cfg, outdir)
        print(f"n={n}", metrics)


if __name__ == "__main__":
    main()
