"""
Accumulator Demonstration Driver

Runs a scripted sequence of adds, deletes, witness updates and
verifications against a fresh accumulator and logs the progress.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

try:
    from .accumulator import Accumulator
    from .config import AccumulatorSettings
    from .logging_config import setup_logging
except ImportError:
    from accumulator import Accumulator
    from config import AccumulatorSettings
    from logging_config import setup_logging

logger = logging.getLogger(__name__)


class DemoFailure(Exception):
    """A scripted verification did not hold."""


class Scenario:
    """Tracks witnesses for live elements while the script runs."""

    def __init__(self, acc: Accumulator):
        self.acc = acc
        self.witnesses: Dict[bytes, int] = {}

    def add(self, *elements: bytes) -> None:
        for x in elements:
            self.witnesses[x] = self.acc.add(x)
            logger.info(f"Added {x.decode()}")

    def delete(self, y: bytes) -> None:
        """Delete y and refresh the witness of every remaining element."""
        self.acc.delete(y)
        self.witnesses.pop(y, None)
        logger.info(f"Deleted {y.decode()}")

        for x, w in list(self.witnesses.items()):
            self.witnesses[x] = self.acc.update_witness_on_deletion(x, w, y)

    def expect(self, x: bytes, w: Optional[int] = None, valid: bool = True) -> None:
        w = self.witnesses[x] if w is None else w
        if self.acc.verify(x, w) != valid:
            state = "valid" if valid else "invalid"
            raise DemoFailure(f"Expected witness for {x.decode()} to be {state}")

    def expect_all(self) -> None:
        for x in self.witnesses:
            self.expect(x)
        logger.info(f"Verified {len(self.witnesses)} element(s)")


def run_demo(acc: Accumulator) -> None:
    """
    Exercise the accumulator with the standard scripted scenario.

    Raises:
        DemoFailure: If any verification does not match expectations
        AccumulatorError: If an operation fails
    """
    s = Scenario(acc)

    logger.info("Case 1: basic add, delete, verify")
    s.add(b"element_x")
    s.expect_all()
    stale = s.witnesses[b"element_x"]
    s.add(b"element_y")
    s.delete(b"element_y")
    s.expect(b"element_x")
    s.expect(b"element_x", stale, valid=False)

    logger.info("Case 2: multiple elements")
    s.add(b"element_z", b"element_d", b"element_e")
    s.expect_all()

    logger.info("Case 3: delete middle element")
    s.delete(b"element_d")
    s.expect_all()

    logger.info("Case 4: delete multiple elements")
    s.delete(b"element_z")
    s.delete(b"element_e")
    s.expect_all()

    logger.info("Case 5: add elements after deletion")
    s.add(b"element_f", b"element_g")
    s.expect_all()

    logger.info("Case 6: delete and re-add same element")
    s.delete(b"element_f")
    s.add(b"element_f")
    s.expect_all()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description='Trapdoor accumulator demonstration',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Demo-sized 64-bit safe primes
  python -m trapdoor_accum.demo

  # Larger primes with debug diagnostics
  python -m trapdoor_accum.demo --bits 256 --log-level DEBUG --log-format text
        """
    )
    parser.add_argument('--bits', type=int, default=None, help='Safe prime bit length (default: from settings)')
    parser.add_argument('--log-level', default=None, help='Logging level')
    parser.add_argument('--log-format', choices=('json', 'text'), default=None, help='Log format')

    args = parser.parse_args(argv)

    overrides = {}
    if args.log_level:
        overrides['log_level'] = args.log_level
    if args.log_format:
        overrides['log_format'] = args.log_format
    settings = AccumulatorSettings(**overrides)
    setup_logging(settings)

    try:
        acc = Accumulator.setup(args.bits, settings=settings)
        run_demo(acc)
    except (ValueError, DemoFailure) as e:
        logger.error(f"✗ Demo failed: {e}")
        return 1

    logger.info("✓ All demo cases completed successfully")
    return 0


if __name__ == '__main__':
    sys.exit(main())
