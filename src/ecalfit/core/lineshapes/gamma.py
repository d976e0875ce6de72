"""Gamma-ray peakshape for HPGe energy spectra.

The full-energy peak of a gamma line is modeled as a Gaussian with a small
low-energy exponential tail (incomplete charge collection), a smoothed step
(small-angle Compton scattering in front of the detector) and a flat
background:

    f(x) = n * ((1 - f_tail) * G(x; mu, sigma) + f_tail * EMG(-x; -mu, sigma, tau))
           + a_step * erfc((x - mu) / (sqrt(2) * sigma)) / 2
           + background

with ``tau = skew_width * mu``. The peak terms are normalized densities, so
``n`` is the number of counts in the peak and ``background`` a density in
counts per energy unit.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import erfc, erfcx

if TYPE_CHECKING:
    from ecalfit.core.shared.typing import FloatArray

_SQRT2 = np.sqrt(2.0)
_SQRT_2PI = np.sqrt(2.0 * np.pi)


def gauss_pdf(x: FloatArray | float, mu: float, sigma: float) -> FloatArray:
    """Normalized Gaussian density."""
    t = (np.asarray(x, dtype=float) - mu) / sigma
    return np.exp(-0.5 * t * t) / (sigma * _SQRT_2PI)


def ex_gauss_pdf(x: FloatArray | float, mu: float, sigma: float, theta: float) -> FloatArray:
    """Exponentially modified Gaussian density with decay length ``theta``.

    The exponential tail extends towards high ``x``; the gamma peakshape mirrors
    it onto the low-energy side by evaluating at ``-x`` and ``-mu``.

    Evaluated through the scaled complementary error function where the
    direct product ``exp(a) * erfc(z)`` would overflow.
    """
    t = (np.asarray(x, dtype=float) - mu) / sigma
    z = (sigma / theta - t) / _SQRT2
    with np.errstate(over="ignore", under="ignore"):
        scaled = erfcx(np.maximum(z, 0.0)) * np.exp(-0.5 * t * t)
        direct = np.exp(sigma**2 / (2 * theta**2) - t * sigma / theta) * erfc(np.minimum(z, 0.0))
    return np.where(z >= 0, scaled, direct) / (2 * theta)


def step_gauss(x: FloatArray | float, mu: float, sigma: float) -> FloatArray:
    """Gaussian-smoothed step, 1 far below ``mu`` and 0 far above."""
    return erfc((np.asarray(x, dtype=float) - mu) / (_SQRT2 * sigma)) / 2


def gamma_peakshape(x: FloatArray | float, params: Mapping[str, float]) -> FloatArray | float:
    """Evaluate the gamma peakshape density.

    Args:
        x: Energy value(s)
        params: Mapping with ``mu``, ``sigma``, ``n``, ``step_amplitude``,
            ``skew_fraction``, ``skew_width`` and ``background``

    Returns
    -------
        Density with the shape of ``x`` (a float for scalar input)
    """
    mu = params["mu"]
    sigma = params["sigma"]
    skew_fraction = params["skew_fraction"]
    skew = params["skew_width"] * mu

    values = (
        params["n"]
        * (
            (1 - skew_fraction) * gauss_pdf(x, mu, sigma)
            + skew_fraction * ex_gauss_pdf(-np.asarray(x, dtype=float), -mu, sigma, skew)
        )
        + params["step_amplitude"] * step_gauss(x, mu, sigma)
        + params["background"]
    )
    if np.ndim(x) == 0:
        return float(values)
    return values
