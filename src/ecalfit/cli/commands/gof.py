"""Goodness-of-fit command implementation."""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.markup import escape

from ecalfit.core.diagnostics.gof import (
    get_residuals,
    monte_carlo_gof,
    p_value,
    p_value_loglike_ratio,
)
from ecalfit.core.domain.config import ecal_peak_windows
from ecalfit.core.domain.peaks import PeakSampleSpec
from ecalfit.core.fitting.single_peak import fit_single_peak
from ecalfit.core.lineshapes.gamma import gamma_peakshape
from ecalfit.core.shared.exceptions import (
    ConfigError,
    EcalFitError,
    NumericalWarning,
)
from ecalfit.io.config import load_detector_config
from ecalfit.io.histogram import load_histogram
from ecalfit.plotting.diagnostics import save_diagnostic_plots
from ecalfit.ui import (
    close_logging,
    error,
    log_dict,
    print_gof_table,
    print_summary,
    sample_progress,
    setup_logging,
    show_header,
    success,
    warning,
)


def gof_command(
    histogram: Annotated[
        Path,
        typer.Argument(
            help="Histogram file (.npz with edges/counts, or left/right/counts table)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    config: Annotated[
        Path,
        typer.Option(
            "--config",
            "-c",
            help="Energy-calibration configuration file (TOML)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    peak: Annotated[
        str,
        typer.Option("--peak", "-p", help="Label of the calibration line to fit"),
    ],
    detector: Annotated[
        str,
        typer.Option("--detector", "-d", help="Detector identifier"),
    ] = "default",
    mc_samples: Annotated[
        int,
        typer.Option("--mc", min=0, help="Monte-Carlo samples (0 disables the test)"),
    ] = 0,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Random seed for the Monte-Carlo test"),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-j", min=1, help="Threads for Monte-Carlo refits"),
    ] = None,
    plot: Annotated[
        Path | None,
        typer.Option("--plot", help="Save diagnostic figures to this PDF file", dir_okay=False),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write a log file (.json for structured logs)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show log records on the console"),
    ] = False,
) -> None:
    """Fit one calibration peak and report its goodness of fit.

    The histogram is cut to the configured window of the peak, seeded from
    the data, fit by maximum likelihood and tested with the chi-square and
    likelihood-ratio tests (and optionally the Monte-Carlo test).

    Examples
    --------
      $ ecalfit gof th228.npz --config ecalfit.toml --peak Tl208FEP
      $ ecalfit gof th228.npz -c ecalfit.toml -p Tl208DEP --mc 200 --seed 1
    """
    setup_logging(log_file, verbose)
    try:
        ecal_cfg = load_detector_config(config, detector)
        windows = ecal_peak_windows(ecal_cfg)
        if peak not in windows:
            known = ", ".join(windows) or "none"
            error(f"Unknown peak '{peak}' (configured: {known})")
            raise typer.Exit(1)

        h = load_histogram(histogram).restrict(windows[peak])
        peak_spec = PeakSampleSpec.from_histogram(h)
        params, report = fit_single_peak(h, peak_spec, uncertainty=True)

        show_header(f"{peak} fit ({detector})")
        if not report.converged:
            warning(f"Optimizer did not report convergence: {report.message}")
        summary = {
            name: _format_value(value, report.stderr.get(name)) for name, value in params.items()
        }
        summary["fwhm"] = _format_value(report.fwhm, report.fwhm_err)
        print_summary(summary, title="Best-fit parameters")
        log_dict(summary)

        with warnings.catch_warnings():
            warnings.simplefilter("ignore", NumericalWarning)
            results: dict[str, object] = {
                "chi-square": p_value(gamma_peakshape, h, params),
                "likelihood ratio": p_value_loglike_ratio(gamma_peakshape, h, params),
            }

        mc_result = None
        if mc_samples > 0:
            with sample_progress(mc_samples) as report_progress:
                mc_result = monte_carlo_gof(
                    gamma_peakshape,
                    h,
                    peak_spec,
                    params,
                    mc_samples,
                    rng=seed,
                    n_workers=workers,
                    progress_callback=report_progress,
                )
            if mc_result.n_failed:
                warning(f"{mc_result.n_failed} of {mc_samples} refits failed and were skipped")
            results["monte carlo"] = mc_result.p_value

        print_gof_table(results)
        residuals = get_residuals(gamma_peakshape, h, params)
        print_summary(residuals.to_dict(), title="Residuals")
        if plot is not None:
            save_diagnostic_plots(
                plot, gamma_peakshape, h, params, mc_result, title=f"{peak} ({detector})"
            )
            success(f"Saved diagnostic plots: [path]{plot}[/path]")
        success("Goodness-of-fit analysis complete")
    except (ConfigError, ValidationError) as exc:
        error(f"Invalid configuration: {escape(str(exc))}")
        raise typer.Exit(1) from exc
    except EcalFitError as exc:
        error(escape(str(exc)))
        raise typer.Exit(1) from exc
    finally:
        close_logging()


def _format_value(value: float, stderr: float | None) -> str:
    if stderr is None:
        return f"{value:.6g}"
    return f"{value:.6g} ± {stderr:.2g}"
