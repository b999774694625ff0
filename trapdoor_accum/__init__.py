"""
Trapdoor Accumulator Package

This package provides an RSA-style dynamic accumulator managed by the
holder of the group order: element add, delete, membership verification
and witness refresh after deletions.
"""

try:
    # Try relative imports first (when used as package)
    from .accumulator import (
        Accumulator,
        setup,
        add,
        delete,
        verify,
        update_witness_on_deletion,
    )
    from .bezout import bezout_coefficients, bezout_inverse, extended_gcd
    from .config import AccumulatorSettings, get_settings
    from .element_mapper import ElementMapper
    from .exceptions import (
        AccumulatorError,
        SetupError,
        NotInvertible,
        BezoutVerificationFailed,
    )
    from .modexp import mont_mod_exp
    from .montgomery import MontyForm, MontyParams
    from .trapdoor import Trapdoor, generate_trapdoor
except ImportError:
    # Fall back to absolute imports (when imported from outside)
    from accumulator import (
        Accumulator,
        setup,
        add,
        delete,
        verify,
        update_witness_on_deletion,
    )
    from bezout import bezout_coefficients, bezout_inverse, extended_gcd
    from config import AccumulatorSettings, get_settings
    from element_mapper import ElementMapper
    from exceptions import (
        AccumulatorError,
        SetupError,
        NotInvertible,
        BezoutVerificationFailed,
    )
    from modexp import mont_mod_exp
    from montgomery import MontyForm, MontyParams
    from trapdoor import Trapdoor, generate_trapdoor

__version__ = "0.1.0"
__all__ = [
    "Accumulator",
    "setup",
    "add",
    "delete",
    "verify",
    "update_witness_on_deletion",
    "bezout_coefficients",
    "bezout_inverse",
    "extended_gcd",
    "AccumulatorSettings",
    "get_settings",
    "ElementMapper",
    "AccumulatorError",
    "SetupError",
    "NotInvertible",
    "BezoutVerificationFailed",
    "mont_mod_exp",
    "MontyForm",
    "MontyParams",
    "Trapdoor",
    "generate_trapdoor",
]
