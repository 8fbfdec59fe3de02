"""
Demo Runner
===========
Runs every example program in sequence and logs the results.

Usage:
    $ python -m numericaltoolkit
"""
import logging

from numericaltoolkit import examples
from numericaltoolkit.logging_config import setup_logging

logger = logging.getLogger(__name__)

DEMOS = (
    examples.bisection_method,
    examples.newtons_method,
    examples.minimum_with_gradient_descent,
    examples.fifteen_dimensional_minimum,
    examples.prisoners_dilemma,
    examples.find_pi,
    examples.compare_integrals,
    examples.spline_interpolation,
    examples.data_bundle_features,
)


def main() -> None:
    setup_logging(level=logging.INFO)

    for demo in DEMOS:
        logger.info(f"--- {demo.__name__} ---")
        demo()


if __name__ == "__main__":
    main()
