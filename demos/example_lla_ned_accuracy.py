"""
Example: Accuracy of the Second-Order LLA -> NED Series

The LLA -> NED conversion uses a truncated series around the origin, so it
is only exact in the limit of short baselines. This script measures how far
it drifts from the exact transform:

    1. Place targets on the local tangent plane at a given baseline and
       bearing: NED = [d cos(b), d sin(b), 0].
    2. Convert to LLA with the exact NED -> LLA path (ECEF + Bowring).
    3. Convert back with the series and compare against the known NED.

The worst case over all bearings is reported per baseline. The error grows
roughly with the cube of the baseline.

Usage:
    python demos/example_lla_ned_accuracy.py
    python demos/example_lla_ned_accuracy.py --lat 60 --max-baseline 100000
"""

import argparse
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

from navcore.coords import lla_to_ned, ned_to_lla


def series_error(lat_ref, lon_ref, alt_ref, baselines, bearings):
    """
    Worst-case LLA -> NED error over bearings for each baseline.

    Returns:
        Tuple (horizontal, vertical) arrays in meters, one entry per baseline.
    """
    horizontal = np.zeros(len(baselines))
    vertical = np.zeros(len(baselines))

    for i, d in enumerate(tqdm(baselines, desc="Baselines", unit="baseline")):
        for b in bearings:
            ned_true = np.array([d * np.cos(b), d * np.sin(b), 0.0])
            lla = ned_to_lla(*ned_true, lat_ref, lon_ref, alt_ref)
            ned = lla_to_ned(*lla, lat_ref, lon_ref, alt_ref)
            err = ned - ned_true
            horizontal[i] = max(horizontal[i], np.hypot(err[0], err[1]))
            vertical[i] = max(vertical[i], abs(err[2]))

    return horizontal, vertical


def main():
    """Main execution with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="LLA -> NED series error versus baseline length",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default: origin at 45 deg latitude, baselines 10 m .. 50 km
  python example_lla_ned_accuracy.py

  # High latitude, longer baselines
  python example_lla_ned_accuracy.py --lat 70 --max-baseline 100000
        """,
    )
    parser.add_argument("--lat", type=float, default=45.0,
                        help="Origin latitude in degrees (default: 45)")
    parser.add_argument("--lon", type=float, default=10.0,
                        help="Origin longitude in degrees (default: 10)")
    parser.add_argument("--alt", type=float, default=0.0,
                        help="Origin altitude in meters (default: 0)")
    parser.add_argument("--min-baseline", type=float, default=10.0,
                        help="Shortest baseline in meters (default: 10)")
    parser.add_argument("--max-baseline", type=float, default=50000.0,
                        help="Longest baseline in meters (default: 50000)")
    parser.add_argument("--num-baselines", type=int, default=40,
                        help="Number of log-spaced baselines (default: 40)")
    parser.add_argument("--num-bearings", type=int, default=36,
                        help="Number of bearings per baseline (default: 36)")
    parser.add_argument("--no-plot", action="store_true",
                        help="Skip figure generation")
    args = parser.parse_args()

    lat_ref = np.deg2rad(args.lat)
    lon_ref = np.deg2rad(args.lon)
    baselines = np.logspace(np.log10(args.min_baseline), np.log10(args.max_baseline),
                            args.num_baselines)
    bearings = np.linspace(0.0, 2.0 * np.pi, args.num_bearings, endpoint=False)

    print("\n" + "=" * 70)
    print("LLA -> NED series accuracy")
    print(f"Origin: lat {args.lat:.3f} deg, lon {args.lon:.3f} deg, alt {args.alt:.1f} m")
    print("=" * 70)

    horizontal, vertical = series_error(lat_ref, lon_ref, args.alt, baselines, bearings)

    print(f"\n{'Baseline [m]':>14} {'Horizontal [m]':>16} {'Vertical [m]':>14}")
    for d, h, v in zip(baselines[::4], horizontal[::4], vertical[::4]):
        print(f"{d:14.1f} {h:16.2e} {v:14.2e}")

    for limit in (1e-3, 1e-2):
        within = baselines[np.maximum(horizontal, vertical) <= limit]
        if within.size:
            print(f"\nError stays below {limit:g} m up to a baseline of {within.max():.0f} m")

    if args.no_plot:
        return

    figs_dir = Path(__file__).parent / "figs"
    figs_dir.mkdir(exist_ok=True)

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.loglog(baselines, horizontal, "o-", label="Horizontal")
    ax.loglog(baselines, vertical, "s-", label="Vertical")
    # Reference slope R (d/R)^3
    R = 6378137.0
    ax.loglog(baselines, R * (baselines / R) ** 3, "k--", alpha=0.5, label=r"$R\,(d/R)^3$")
    ax.set_xlabel("Baseline [m]")
    ax.set_ylabel("Worst-case error [m]")
    ax.set_title(f"LLA -> NED series error at {args.lat:.1f} deg latitude")
    ax.grid(True, which="both", alpha=0.3)
    ax.legend()

    output_file = figs_dir / "lla_ned_series_error.svg"
    fig.savefig(output_file, dpi=300, bbox_inches="tight")
    print(f"\n  [OK] Saved: {output_file}")
    plt.close(fig)


if __name__ == "__main__":
    main()
