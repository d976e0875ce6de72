"""Peakshape models."""

from ecalfit.core.lineshapes.gamma import ex_gauss_pdf, gamma_peakshape, gauss_pdf, step_gauss

__all__ = ["ex_gauss_pdf", "gamma_peakshape", "gauss_pdf", "step_gauss"]
