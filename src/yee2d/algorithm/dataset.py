# src/yee2d/algorithm/dataset.py
from __future__ import annotations

from dataclasses import asdict, replace
from pathlib import Path
import json
import time
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from joblib import Parallel, delayed
from tqdm import tqdm

from ..core.config import InvalidConfiguration, SimulationConfig
from ..diagnostics import save_npz
from .simulator import Simulator


def simulate_one_sample(
    cfg: SimulationConfig,
    *,
    n_steps: Optional[int] = None,
    every: int = 1,
) -> Tuple[np.ndarray, np.ndarray, Dict[str, Any]]:
    """
    Build a simulator from cfg (cfg.seed fixes the medium), step it and keep
    every `every`-th Ez snapshot.

    Returns (eps, ez_snapshots[nx, ny, k], meta).
    """
    if int(every) < 1:
        raise InvalidConfiguration("every must be >= 1")
    every = int(every)

    sim = Simulator.from_config(cfg)
    n = sim.nt if n_steps is None else int(n_steps)
    if n < 0:
        raise InvalidConfiguration("n_steps must be >= 0")

    frames = []
    t0 = time.perf_counter()
    for i, ez in enumerate(sim.iter_snapshots(n), start=1):
        if i % every == 0:
            frames.append(ez)
    run_time = time.perf_counter() - t0

    d = sim.discretizer
    if frames:
        ez_hist = np.stack(frames, axis=-1)
    else:
        ez_hist = np.zeros((d.nx, d.ny, 0), dtype=float)

    meta = {
        "config": asdict(cfg),
        "n_inclusions": len(sim.permittivity.inclusions),
        "inclusions": [asdict(inc) for inc in sim.permittivity.inclusions],
        "dx": d.dx,
        "dy": d.dy,
        "dt": d.dt,
        "nt": d.nt,
        "n_steps": n,
        "every": every,
        "run_time_sec": float(run_time),
        "max_abs_ez": float(np.max(np.abs(sim.ez))),
    }
    return np.array(sim.permittivity.eps), ez_hist, meta


def save_sample_npz(out_path: Path, *, eps: np.ndarray, ez: np.ndarray, meta: dict) -> None:
    save_npz(
        out_path,
        eps=eps.astype(np.float32),
        ez=ez.astype(np.float32),
        meta_json=np.array([json.dumps(meta)]),
    )


def append_jsonl(path: Path, row: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(row) + "\n")


def _run_and_save(
    cfg: SimulationConfig,
    out_path: Path,
    n_steps: Optional[int],
    every: int,
) -> Dict[str, Any]:
    eps, ez, meta = simulate_one_sample(cfg, n_steps=n_steps, every=every)
    save_sample_npz(out_path, eps=eps, ez=ez, meta=meta)
    return meta


def generate_random_media(
    *,
    out_root: Path,
    n_samples: int,
    rng: np.random.Generator,
    base: Optional[SimulationConfig] = None,
    n_steps: Optional[int] = None,
    every: int = 1,
    start_id: int = 0,
    n_jobs: int = 1,
    progress: bool = True,
) -> List[Dict[str, Any]]:
    """
    Generate n_samples independent random-media runs.

    Every sample gets its own integer seed drawn from rng up front, so the
    files written do not depend on n_jobs. One manifest.jsonl row is
    appended per sample, in sample order.
    """
    if base is None:
        base = SimulationConfig()
    if int(n_samples) < 0:
        raise InvalidConfiguration("n_samples must be >= 0")

    out_root = Path(out_root)
    out_root.mkdir(parents=True, exist_ok=True)

    manifest_path = out_root / "manifest.jsonl"
    if manifest_path.exists():
        manifest_path.unlink()

    seeds = rng.integers(0, 2**31 - 1, size=int(n_samples))
    jobs = []
    for k, seed in enumerate(seeds):
        sid = int(start_id) + k
        cfg = replace(base, seed=int(seed))
        jobs.append((sid, cfg, out_root / f"sample_{sid:06d}.npz"))

    # results come back in submission order as each job finishes
    results = Parallel(n_jobs=n_jobs, return_as="generator")(
        delayed(_run_and_save)(cfg, path, n_steps, every) for _, cfg, path in jobs
    )
    metas = list(tqdm(results, total=len(jobs), disable=not progress, desc="samples"))

    rows = []
    for (sid, cfg, path), meta in zip(jobs, metas):
        row = {
            "file": str(path.as_posix()),
            "sample_id": sid,
            "seed": int(cfg.seed),
            "n_inclusions": meta["n_inclusions"],
            "nx": int(cfg.nx),
            "ny": int(cfg.ny),
            "n_steps": meta["n_steps"],
            "run_time_sec": meta["run_time_sec"],
        }
        rows.append(row)
        append_jsonl(manifest_path, row)

    if progress:
        print(f"✅ Done: {len(rows)} samples -> {out_root}")
    return rows
