"""Taichi runtime configuration.

The backend is chosen from, in order: the arch argument, the
PATHTRACER_ARCH environment variable, then "cpu". Every backend runs with
64-bit floats as the default real type.
"""

import logging
import os

import taichi as ti

logger = logging.getLogger(__name__)

ARCH_ENV_VAR = "PATHTRACER_ARCH"
DEFAULT_ARCH = "cpu"

# Supported backend names
ARCHES = {
    "cpu": ti.cpu,
    "cuda": ti.cuda,
    "gpu": ti.gpu,
}


def resolve_arch(arch: str | None = None) -> str:
    """Pick the backend name from the argument or the environment.

    Args:
        arch: Explicit backend name, or None to consult PATHTRACER_ARCH.

    Returns:
        The lower-cased backend name.

    Raises:
        ValueError: If the name is not one of ARCHES.
    """
    name = arch if arch is not None else os.environ.get(ARCH_ENV_VAR, DEFAULT_ARCH)
    name = name.strip().lower()
    if name not in ARCHES:
        raise ValueError(f"Unknown arch {name!r}; expected one of {sorted(ARCHES)}")
    return name


def init_runtime(arch: str | None = None, *, debug: bool = False) -> str:
    """Initialize Taichi for rendering.

    Must be called once, before any scene or renderer is created.

    Args:
        arch: Backend name ("cpu", "cuda" or "gpu"). Defaults to the
            PATHTRACER_ARCH environment variable, then "cpu".
        debug: Enable Taichi's debug mode (bounds checks in kernels).

    Returns:
        The backend name used.

    Raises:
        ValueError: If the backend name is unknown. Taichi is not touched.
    """
    name = resolve_arch(arch)
    ti.init(arch=ARCHES[name], default_fp=ti.f64, debug=debug)
    logger.info("Taichi initialized (arch=%s, debug=%s)", name, debug)
    return name
