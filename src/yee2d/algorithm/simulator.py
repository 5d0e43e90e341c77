from __future__ import annotations

from typing import Callable, Iterator, Optional

import numpy as np
from tqdm import tqdm

from ..core.config import Bound, InvalidConfiguration, SimulationConfig
from ..core.grid import Discretizer, discretize
from ..core.medium import (
    PermeabilityField,
    PermittivityField,
    random_permittivity,
    uniform_permeability,
)
from ..core.source import SOURCE_COLUMN, SOURCE_ROWS, Light, source_phase, source_profile
from ..operators.update import field_energy, update_e, update_h


# Above this a full in-memory history gets a warning (see run(out=...)).
HISTORY_WARN_BYTES = 1 << 30


def _readonly_view(a: np.ndarray) -> np.ndarray:
    v = a.view()
    v.setflags(write=False)
    return v


class Simulator:
    """
    2D TM-mode Yee FDTD simulator on a random dielectric medium.

    Owns the three live fields Ez, Hx, Hy (all (nx, ny), float64) and the
    step counter t. The fields change only through step(); callers get
    read-only views.

    Ez starts at zero except the seed column (y = 0, rows 1..nx-1), which
    holds the source envelope times sin(k c dt). step() then drives the same
    column every step with sin(k c dt t), so the source is continuous-wave
    and the t=0 seed is the only excitation seen by the first step.

    The outer one-cell halo is never updated, which makes it a reflecting
    wall; there is no absorbing boundary.
    """

    def __init__(
        self,
        bound: Bound,
        discretizer: Discretizer,
        light: Light,
        permittivity: PermittivityField,
        permeability: PermeabilityField,
    ):
        shape = discretizer.shape
        for name in ("eps", "eps_x", "eps_y"):
            arr = getattr(permittivity, name)
            if arr.shape != shape:
                raise InvalidConfiguration(f"permittivity.{name} has shape {arr.shape}, expected {shape}")

        self._bound = bound
        self._discretizer = discretizer
        self._light = light
        self._permittivity = permittivity
        self._permeability = permeability

        self._profile = source_profile(bound, discretizer)

        self._ez = np.zeros(shape, dtype=float)
        self._hx = np.zeros(shape, dtype=float)
        self._hy = np.zeros(shape, dtype=float)
        self._ez[SOURCE_ROWS, SOURCE_COLUMN] = self._profile * source_phase(light, discretizer, 1)

        self._t = 0

    @classmethod
    def from_config(
        cls,
        cfg: Optional[SimulationConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> "Simulator":
        """
        Build every sub-object from a configuration bundle.

        rng drives both the inclusion count (when cfg.n is None) and the
        inclusion placement; without one, a generator seeded by cfg.seed is used.
        """
        if cfg is None:
            cfg = SimulationConfig()
        if rng is None:
            rng = np.random.default_rng(cfg.seed)

        bound = cfg.bound()
        disc = discretize(bound, cfg.nx, cfg.ny)
        light = Light(float(cfg.wavelength))

        n = int(rng.integers(1, 6)) if cfg.n is None else int(cfg.n)
        eps = random_permittivity(n, float(cfg.r), bound, disc, rng)
        mu = uniform_permeability(float(cfg.mu), disc)

        return cls(bound, disc, light, eps, mu)

    # ---- read-only query surface ----

    @property
    def ez(self) -> np.ndarray:
        return _readonly_view(self._ez)

    @property
    def hx(self) -> np.ndarray:
        return _readonly_view(self._hx)

    @property
    def hy(self) -> np.ndarray:
        return _readonly_view(self._hy)

    @property
    def t(self) -> int:
        return self._t

    @property
    def bound(self) -> Bound:
        return self._bound

    @property
    def discretizer(self) -> Discretizer:
        return self._discretizer

    @property
    def light(self) -> Light:
        return self._light

    @property
    def permittivity(self) -> PermittivityField:
        return self._permittivity

    @property
    def permeability(self) -> PermeabilityField:
        return self._permeability

    @property
    def nt(self) -> int:
        return self.discretizer.nt

    def energy(self) -> float:
        return field_energy(self._ez, self._hx, self._hy)

    # ---- time stepping ----

    def step(self) -> "Simulator":
        """Advance one dt: source injection, H pass, E pass, t += 1."""
        d = self.discretizer
        self._ez[SOURCE_ROWS, SOURCE_COLUMN] += self._profile * source_phase(self.light, d, self.t)

        update_h(self._ez, self._hx, self._hy, self.permeability.mu_x, self.permeability.mu_y)
        update_e(self._ez, self._hx, self._hy, self.permittivity.eps_x, self.permittivity.eps_y)

        self._t += 1
        return self

    def iter_snapshots(self, n_steps: Optional[int] = None) -> Iterator[np.ndarray]:
        """Step n_steps times (default nt), yielding a copy of Ez after each step."""
        if n_steps is None:
            n_steps = self.nt
        for _ in range(int(n_steps)):
            self.step()
            yield self._ez.copy()

    def run(
        self,
        *,
        out: Optional[np.ndarray] = None,
        should_stop: Optional[Callable[[int], bool]] = None,
        progress: bool = False,
    ) -> np.ndarray:
        """
        Step exactly nt times and return the Ez history, indexed [x, y, step].

        The whole history lives in memory (nx * ny * nt doubles) unless `out`
        is given, e.g. an on-disk memmap of shape (nx, ny, nt).

        should_stop(t) is polled before every step; when it returns True the
        run stops early and only the filled prefix [:, :, :done] is returned.
        """
        d = self.discretizer
        shape = (d.nx, d.ny, d.nt)

        if out is None:
            nbytes = d.nx * d.ny * d.nt * np.dtype(float).itemsize
            if nbytes > HISTORY_WARN_BYTES:
                print(
                    f"⚠️ Ez history needs {nbytes / 2**30:.1f} GiB in memory "
                    f"({d.nx}x{d.ny}x{d.nt}); pass out= to stream it to storage."
                )
            out = np.empty(shape, dtype=float)
        elif tuple(out.shape) != shape:
            raise ValueError(f"out has shape {tuple(out.shape)}, expected {shape}")

        for i in tqdm(range(d.nt), disable=not progress, desc="fdtd"):
            if should_stop is not None and should_stop(self.t):
                return out[:, :, :i]
            self.step()
            out[:, :, i] = self._ez

        return out
