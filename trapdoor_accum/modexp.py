"""
Modular Exponentiation Engine

Left-to-right square-and-multiply over a fixed-width exponent, operating
on Montgomery residues.
"""

try:
    from .montgomery import MontyForm, MontyParams, LIMB_BITS, limb_width, widen
except ImportError:
    from montgomery import MontyForm, MontyParams, LIMB_BITS, limb_width, widen

DEFAULT_EXPONENT_BITS = 512
DEFAULT_REDUCTION_INTERVAL = LIMB_BITS


def mont_mod_exp(
    base: MontyForm,
    exponent: int,
    *,
    width: int = DEFAULT_EXPONENT_BITS,
    reduction_interval: int = DEFAULT_REDUCTION_INTERVAL,
) -> MontyForm:
    """
    Compute base^exponent in the ring of ``base``.

    Scans all ``width`` bits of the exponent from the most significant
    down, squaring every step and multiplying by the base on set bits.
    After each group of ``reduction_interval`` bits the running result is
    taken out of Montgomery form, reduced mod n and brought back in.

    Args:
        base: Ring element in Montgomery form
        exponent: Non-negative exponent that fits in ``width`` bits
        width: Fixed exponent width in bits (rounded up to whole limbs)
        reduction_interval: Bits between explicit reductions (0 disables)

    Returns:
        MontyForm: base^exponent mod n

    Raises:
        ValueError: If the exponent is negative or wider than ``width``

    Example:
        >>> params = MontyParams(209)
        >>> r = mont_mod_exp(MontyForm(4, params), 13)
        >>> assert r.retrieve() == pow(4, 13, 209)
    """
    width = limb_width(width)
    exponent = widen(exponent, width)
    if reduction_interval < 0:
        raise ValueError("reduction_interval must be non-negative")

    params = base.params
    result = MontyForm.one(params)

    for i in range(width - 1, -1, -1):
        result = result.square()

        if (exponent >> i) & 1:
            result = result.mul(base)

        if reduction_interval and i % reduction_interval == 0:
            result = MontyForm(result.retrieve() % params.modulus, params)

    return result


def mod_exp(value: int, exponent: int, modulus: int, **kwargs) -> int:
    """Standard-form convenience wrapper around :func:`mont_mod_exp`."""
    params = MontyParams(modulus)
    return mont_mod_exp(MontyForm(value, params), exponent, **kwargs).retrieve()
