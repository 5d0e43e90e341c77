from pathlib import Path

import numpy as np

from yee2d import SimulationConfig
from yee2d.algorithm import generate_random_media


if __name__ == "__main__":
    base = SimulationConfig(nx=60, ny=200, max_t=2e-14)
    rows = generate_random_media(
        out_root=Path("outputs") / "smoke",
        n_samples=4,
        rng=np.random.default_rng(0),
        base=base,
        every=20,
        n_jobs=2,
    )
    for row in rows:
        print(row)
