"""Core computational helpers shared by fitting and goodness-of-fit code."""

from collections.abc import Callable
from functools import partial

import numpy as np

from ecalfit.core.shared.typing import BoundModel, FloatArray, ParameterSet, PeakshapeModel


def fix_parameters(model: PeakshapeModel, params: ParameterSet) -> BoundModel:
    """Fix the parameters of a peakshape, leaving energy as the only argument."""
    return partial(_call_with_params, model, dict(params))


def _call_with_params(model: PeakshapeModel, params: ParameterSet, energy: object) -> object:
    return model(energy, params)


def evaluate_density(model: BoundModel, energies: FloatArray) -> FloatArray:
    """Evaluate a bound model at every energy.

    The model is called once with the whole array; models that only accept
    scalars (or return a scalar for array input) are evaluated point by point.

    Args:
        model: Peakshape with fixed parameters
        energies: Energies to evaluate at

    Returns
    -------
        Float array with the shape of ``energies``
    """
    try:
        values = np.asarray(model(energies), dtype=float)
    except (TypeError, ValueError):
        values = None
    if values is None or values.shape != energies.shape:
        values = np.array([float(model(float(energy))) for energy in energies], dtype=float)
    return values


def expected_counts(model: BoundModel, centers: FloatArray, widths: FloatArray) -> FloatArray:
    """Expected counts per bin: ``width * model(center)``."""
    return widths * evaluate_density(model, centers)


def numerical_hessian(
    func: Callable[[FloatArray], float],
    x: FloatArray,
    rel_step: float,
) -> FloatArray:
    """Central finite-difference Hessian of a scalar function.

    Args:
        func: Scalar function of a parameter vector
        x: Point at which to evaluate the Hessian
        rel_step: Step relative to each parameter's magnitude

    Returns
    -------
        Symmetric Hessian matrix, shape (n, n)
    """
    n = x.size
    steps = rel_step * np.where(np.abs(x) > 0, np.abs(x), 1.0)
    hessian = np.empty((n, n))
    f0 = func(x)
    for i in range(n):
        ei = np.zeros(n)
        ei[i] = steps[i]
        hessian[i, i] = (func(x + ei) - 2 * f0 + func(x - ei)) / steps[i] ** 2
        for j in range(i + 1, n):
            ej = np.zeros(n)
            ej[j] = steps[j]
            value = (
                func(x + ei + ej) - func(x + ei - ej) - func(x - ei + ej) + func(x - ei - ej)
            ) / (4 * steps[i] * steps[j])
            hessian[i, j] = hessian[j, i] = value
    return hessian


def covariance_from_hessian(hessian: FloatArray) -> FloatArray:
    """Invert a negative log-likelihood Hessian into a covariance matrix."""
    try:
        return np.linalg.inv(hessian)
    except np.linalg.LinAlgError:
        # Fallback to pseudo-inverse for singular matrices
        return np.linalg.pinv(hessian)
