"""
Figures for the simulation results: estimate histograms and power curves,
plus a helper that saves figures under parameter-encoding filenames.
"""

import os

import matplotlib.pyplot as plt
import numpy as np

from .inference import Z_CRIT

STYLE = {
    "figure.facecolor": "#FAFAFA", "axes.facecolor": "#FAFAFA",
    "axes.edgecolor": "#333", "axes.labelcolor": "#222",
    "xtick.color": "#555", "ytick.color": "#555", "text.color": "#222",
    "font.size": 10, "axes.titlesize": 12, "axes.titleweight": "bold",
    "axes.grid": True, "grid.alpha": 0.25, "grid.color": "#AAA", "figure.dpi": 140,
}
CB, CO, CG, CR = "#2171B5", "#E6550D", "#31A354", "#DE2D26"

NOMINAL_SIZE = 0.05


def _axes(ax):
    if ax is not None:
        return ax.figure, ax
    with plt.rc_context(STYLE):
        fig, ax = plt.subplots(figsize=(7, 4.5))
    return fig, ax


def plot_estimate_distribution(result, ax=None, bins=60, label="IV"):
    """
    Histogram of the simulated estimates with the true coefficient marked.

    Parameters
    ----------
    result : SimulationResult
    ax : matplotlib Axes or None

    Returns
    -------
    fig : matplotlib Figure
    """
    fig, ax = _axes(ax)
    est = result.estimates
    # Weak instruments give heavy tails; clip the view, not the data.
    lo, hi = np.percentile(est, [0.5, 99.5])
    ax.hist(est, bins=bins, range=(lo, hi), density=True, alpha=0.7,
            color=CB, edgecolor="white", label=f"{label} estimates")
    ax.axvline(result.true_coefficient, color=CG, ls="--", lw=2,
               label=f"True beta = {result.true_coefficient:g}")
    ax.axvline(np.median(est), color=CO, lw=1.5,
               label=f"Median = {np.median(est):.3f}")
    ax.set_xlabel("beta_hat")
    ax.set_ylabel("Density")
    ax.set_title(f"Sampling distribution (power = {result.power:.3f})")
    ax.legend(fontsize=8)
    return fig


def plot_power_curve(curve, ax=None):
    """
    Rejection rate of H0: beta = 0 against the true beta.

    Parameters
    ----------
    curve : PowerCurve
    ax : matplotlib Axes or None

    Returns
    -------
    fig : matplotlib Figure
    """
    fig, ax = _axes(ax)
    ax.plot(curve.grid, curve.power, "o-", color=CB, ms=3.5, lw=1.8,
            label=f"|t| > {Z_CRIT}")
    ax.axhline(NOMINAL_SIZE, color=CR, ls="--", lw=1.2,
               label=f"Nominal size {NOMINAL_SIZE}")
    if curve.size is not None:
        ax.plot([0], [curve.size], "s", color=CO, ms=7,
                label=f"Empirical size = {curve.size:.3f}")
    ax.set_ylim(-0.02, 1.02)
    ax.set_xlabel("True beta")
    ax.set_ylabel("Rejection rate")
    ax.set_title("Power function of the IV t-test")
    ax.legend(fontsize=8, loc="lower right")
    return fig


def figure_filename(prefix, params, ext="png"):
    """
    Filename embedding the design, e.g. 'iv_hist_N100_F10_rho0.5.png'.

    Parameters
    ----------
    prefix : str
    params : IVParameters or OLSParameters
    """
    if hasattr(params, "first_stage_strength"):
        tag = (f"N{params.sample_size}_F{params.first_stage_strength:g}"
               f"_rho{params.endogeneity:g}")
    else:
        tag = (f"N{params.sample_size}_a{params.intercept:g}"
               f"_b{params.slope:g}")
    return f"{prefix}_{tag}.{ext}"


def savefig(fig, name, outdir="."):
    """Save `fig` to outdir/name and close it. Returns the path."""
    os.makedirs(outdir, exist_ok=True)
    path = os.path.join(outdir, name)
    fig.savefig(path, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return path
