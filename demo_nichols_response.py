#!/usr/bin/env python3
"""
Nichols-Form Frequency Response Demo

This script walks through the core operations of the Nichols-form toolkit
on a small loop-shaping example:

1. Plant P(s) = K / (s (s/a + 1)) from polynomial coefficients
2. Lead compensator C(s) from python-control, cascaded onto the plant
3. A pure gain adjustment in dB (canonicalized through unwrap)
4. Interpolated queries between grid points
5. Optional persistence to JSON/CSV

Cascading in Nichols form is pointwise addition of (phase deg, gain dB)
pairs, so every step below is an O(n) vector sum on a shared grid.

Usage:
------
    python demo_nichols_response.py

    # Or with custom parameters:
    python demo_nichols_response.py --w_min 0.01 --w_max 100 --n_points 200 --gain_db 6
"""

import argparse
from pathlib import Path
from typing import Dict

import numpy as np
import control as ctrl

from nichols_response.core.frequency_response import (
    NicholsResponse,
    NicholsResponseLogger,
    LoggerConfig,
    DEFAULT_CONFIG,
)


def build_responses(
    w_min: float = 0.01,
    w_max: float = 100.0,
    n_points: int = 200,
    plant_gain: float = 4.0,
    plant_pole: float = 2.0,
    gain_db: float = 0.0
) -> Dict[str, NicholsResponse]:
    """
    Build plant, compensator and loop responses on a shared grid.

    Parameters
    ----------
    w_min : float
        Minimum angular frequency [rad/s]
    w_max : float
        Maximum angular frequency [rad/s]
    n_points : int
        Number of logarithmically-spaced frequency points
    plant_gain : float
        Plant gain K
    plant_pole : float
        Plant pole a [rad/s]
    gain_db : float
        Additional loop gain [dB]

    Returns
    -------
    Dict[str, NicholsResponse]
        'plant', 'compensator', 'loop' and 'loop_adjusted' responses
    """
    omega = np.logspace(np.log10(w_min), np.log10(w_max), n_points)

    print("\n" + "=" * 70)
    print("NICHOLS-FORM FREQUENCY RESPONSE DEMO")
    print("=" * 70)
    print(f"  Frequency Range: {w_min:.3g} - {w_max:.3g} rad/s ({n_points} points)")
    print(f"  Plant: {plant_gain:g} / (s (s/{plant_pole:g} + 1))")
    print(f"  Gain Adjustment: {gain_db:+.1f} dB")
    print("=" * 70)

    plant = NicholsResponse.from_polynomial([plant_gain], [1.0 / plant_pole, 1.0, 0.0], omega)

    # 40 deg lead centred at 2 rad/s
    lead = ctrl.tf([1.0 / 0.93, 1.0], [1.0 / 4.3, 1.0])
    compensator = NicholsResponse.from_lti(lead, omega)

    loop = plant.series(lead).unwrap()
    loop_adjusted = loop.series_gain(gain_db)

    return {
        'plant': plant,
        'compensator': compensator,
        'loop': loop,
        'loop_adjusted': loop_adjusted,
    }


def print_table(responses: Dict[str, NicholsResponse], query: np.ndarray) -> None:
    """Print interpolated phase/gain for each response at the query frequencies."""
    for name, response in responses.items():
        phase_deg = response.phase(query)
        magnitude_db = response.magnitude(query)

        print(f"\n{'-'*50}")
        print(f"{name}")
        print(f"{'-'*50}")
        print(f"  {'w [rad/s]':>12}  {'phase [deg]':>12}  {'gain [dB]':>10}")
        for w, p, m in zip(query, phase_deg, magnitude_db):
            print(f"  {w:>12.4g}  {p:>12.2f}  {m:>10.2f}")


def main():
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description='Nichols-form frequency response demo',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demo_nichols_response.py
  python demo_nichols_response.py --w_min 0.01 --w_max 100 --n_points 200
  python demo_nichols_response.py --gain_db 6 --save --output_dir results
        """
    )

    parser.add_argument('--w_min', type=float, default=0.01,
                       help='Minimum frequency [rad/s] (default: 0.01)')
    parser.add_argument('--w_max', type=float, default=100.0,
                       help='Maximum frequency [rad/s] (default: 100)')
    parser.add_argument('--n_points', type=int, default=200,
                       help='Number of frequency points (default: 200)')
    parser.add_argument('--gain_db', type=float, default=0.0,
                       help='Additional loop gain [dB] (default: 0)')
    parser.add_argument('--save', action='store_true',
                       help='Save responses as JSON/CSV')
    parser.add_argument('--output_dir', type=Path, default=Path('nichols_response_data'),
                       help='Output directory for --save')

    args = parser.parse_args()

    responses = build_responses(
        w_min=args.w_min,
        w_max=args.w_max,
        n_points=args.n_points,
        gain_db=args.gain_db
    )

    query = np.logspace(np.log10(args.w_min), np.log10(args.w_max), 7)
    print_table(responses, query)

    if args.save:
        logger = NicholsResponseLogger(LoggerConfig(output_dir=args.output_dir))
        logger.add_responses_dict(responses)
        logger.set_config(DEFAULT_CONFIG)
        logger.save()


if __name__ == '__main__':
    main()
