"""
Trapdoor Accumulator Core Operations

Implements the dynamic accumulator held by the manager of the trapdoor
(the group order sk): add, delete, verify and witness update after a
deletion.

Every element is mapped to a prime exponent e. With sk known, e^-1 mod sk
exists for any e coprime to sk, so the manager can take e-th roots of the
accumulator value directly:

    add(x)        w  = a^(e^-1)              (a unchanged)
    delete(y)     a' = a^(f^-1)              (a replaced)
    verify(x, w)  w^e == a
    update(x, w, y) w' = w^(f^-1)            so that w'^e == a'

The accumulator value starts as the square of a random ring element, so
it lies in the quadratic-residue subgroup whose order is sk.
"""

import logging
from typing import Any, Callable, Dict, Optional

import gmpy2

try:
    from .config import AccumulatorSettings, get_settings
    from .element_mapper import ElementLike, ElementMapper, element_key
    from .exceptions import NotInvertible
    from .modexp import mont_mod_exp
    from .montgomery import MontyForm, MontyParams, limb_width
    from .number_theory import generate_safe_prime, random_below, random_bits
    from .trapdoor import Trapdoor, generate_trapdoor
except ImportError:
    from config import AccumulatorSettings, get_settings
    from element_mapper import ElementLike, ElementMapper, element_key
    from exceptions import NotInvertible
    from modexp import mont_mod_exp
    from montgomery import MontyForm, MontyParams, limb_width
    from number_theory import generate_safe_prime, random_below, random_bits
    from trapdoor import Trapdoor, generate_trapdoor

logger = logging.getLogger(__name__)

PRF_KEY_BITS = 256

Observer = Callable[[str, Dict[str, Any]], None]


class Accumulator:
    """
    Trapdoor-based accumulator instance.

    One logical owner drives an instance. ``delete`` replaces the stored
    value and every operation may grow the element cache, so callers
    sharing an instance across threads must serialize calls themselves.

    Args:
        trapdoor: Validated trapdoor material
        settings: Accumulator settings (defaults to :func:`get_settings`)
        initial: Ring element whose square becomes the initial value
            (random when omitted)
        prf_key: 256-bit PRF key (random when omitted)
        prime_generator: Oracle assigning element primes, called with the
            element bit length
        observer: Callback receiving ``(event, fields)`` for each operation
    """

    def __init__(
        self,
        trapdoor: Trapdoor,
        *,
        settings: Optional[AccumulatorSettings] = None,
        initial: Optional[int] = None,
        prf_key: Optional[int] = None,
        prime_generator: Optional[Callable[[int], int]] = None,
        observer: Optional[Observer] = None,
    ):
        self._settings = settings or get_settings()
        self._trapdoor = trapdoor
        self._observer = observer

        n = trapdoor.n
        self._params = MontyParams(n)
        self._exponent_bits = limb_width(
            max(self._settings.exponent_bits, n.bit_length(), self._settings.element_bits)
        )

        # a = (a')^2 for a' uniform in [0, n)
        if initial is None:
            initial = random_below(n)
        a_prime = MontyForm(initial, self._params)
        self._a = a_prime.mul(a_prime)

        if prf_key is None:
            prf_key = random_bits(PRF_KEY_BITS)

        if prime_generator is None:
            rounds = self._settings.primality_rounds

            def prime_generator(bits: int) -> int:
                return generate_safe_prime(bits, rounds)

        self._mapper = ElementMapper(
            prf_key,
            element_bits=self._settings.element_bits,
            prime_generator=prime_generator,
        )

        self._emit(
            "setup",
            modulus_bits=n.bit_length(),
            exponent_bits=self._exponent_bits,
            element_bits=self._settings.element_bits,
        )

    @classmethod
    def setup(
        cls,
        prime_bits: Optional[int] = None,
        *,
        settings: Optional[AccumulatorSettings] = None,
        safe_prime_generator: Optional[Callable[[int], int]] = None,
        **kwargs: Any,
    ) -> "Accumulator":
        """
        Generate trapdoor material and build a fresh accumulator.

        Args:
            prime_bits: Bit length of p and q (defaults to settings.prime_bits)
            settings: Accumulator settings
            safe_prime_generator: Oracle used for p and q
            **kwargs: Forwarded to the constructor

        Raises:
            SetupError: If the generated primes fail the safe-prime checks
        """
        settings = settings or get_settings()
        if prime_bits is None:
            prime_bits = settings.prime_bits

        trapdoor = generate_trapdoor(
            prime_bits,
            rounds=settings.primality_rounds,
            safe_prime_generator=safe_prime_generator,
        )
        acc = cls(trapdoor, settings=settings, **kwargs)
        logger.info(
            f"Accumulator initialized: {prime_bits}-bit primes, "
            f"{acc.modulus.bit_length()}-bit modulus"
        )
        return acc

    # ------------------------------------------------------------------
    # Read-only state

    @property
    def modulus(self) -> int:
        """Public modulus n."""
        return self._trapdoor.n

    @property
    def value(self) -> int:
        """Current accumulator value in standard form."""
        return self._a.retrieve() % self._trapdoor.n

    @property
    def trapdoor(self) -> Trapdoor:
        """Secret trapdoor material; only the manager should read this."""
        return self._trapdoor

    @property
    def exponent_bits(self) -> int:
        return self._exponent_bits

    @property
    def element_count(self) -> int:
        """Number of elements that have been assigned an exponent."""
        return len(self._mapper)

    @property
    def mapper(self) -> ElementMapper:
        return self._mapper

    def element_exponent(self, x: ElementLike) -> int:
        """Prime exponent assigned to x (assigning one if needed)."""
        return self._resolve(x)

    # ------------------------------------------------------------------
    # Operations

    def add(self, x: ElementLike) -> int:
        """
        Compute the membership witness for x.

        w = a^(e^-1 mod sk) mod n. The stored accumulator value is not
        changed.

        Returns:
            int: Witness for x

        Raises:
            TypeError: If x is not bytes
            NotInvertible: If x's exponent shares a factor with sk
        """
        e = self._resolve(x)
        e_inv = self._require_inverse(e)

        w = self._exp(self._a, e_inv).retrieve() % self.modulus
        self._emit("add", exponent_bits=e.bit_length())
        return w

    def delete(self, x: ElementLike) -> None:
        """
        Remove x from the accumulator: a = a^(e^-1 mod sk) mod n.

        Raises:
            TypeError: If x is not bytes
            NotInvertible: If x's exponent shares a factor with sk
        """
        e = self._resolve(x)
        e_inv = self._require_inverse(e)

        new_a = self._exp(self._a, e_inv)
        self._a = MontyForm(new_a.retrieve() % self.modulus, self._params)
        self._emit("delete", exponent_bits=e.bit_length())

    def verify(self, x: ElementLike, w: int) -> bool:
        """
        Check w^e == a (mod n) for x's exponent e.

        Returns:
            bool: True if w is a valid witness for x against the current value

        Raises:
            TypeError: If x is not bytes or w is not an integer
        """
        e = self._resolve(x)
        w = self._check_witness(w)

        computed = self._exp(MontyForm(w % self.modulus, self._params), e)
        ok = computed.retrieve() % self.modulus == self.value

        self._emit("verify", result=ok)
        return ok

    def update_witness_on_deletion(self, x: ElementLike, w: int, y: ElementLike) -> int:
        """
        Refresh x's witness after y has been deleted.

        Given w with w^e == a before ``delete(y)``, returns
        w' = w^(f^-1 mod sk) mod n where f is y's exponent, so that
        w'^e == a' after the deletion.

        Args:
            x: Element whose witness is refreshed
            w: Witness for x against the pre-deletion value
            y: Element that was deleted

        Returns:
            int: Updated witness for x

        Raises:
            TypeError: If x or y is not bytes, or w is not an integer
            NotInvertible: If y's exponent shares a factor with sk
        """
        e_x = self._resolve(x)
        e_y = self._resolve(y)
        w = self._check_witness(w) % self.modulus

        e_y_inv = self._require_inverse(e_y)

        result_monty = self._exp(MontyForm(w, self._params), e_y_inv)
        result = result_monty.retrieve() % self.modulus

        if self._observer is not None or logger.isEnabledFor(logging.DEBUG):
            # result^f should give back w, result^e the current value
            root_matches_witness = self._exp(result_monty, e_y).retrieve() == w
            root_matches_accumulator = self._exp(result_monty, e_x).retrieve() == self.value
            self._emit(
                "witness_updated",
                root_matches_witness=root_matches_witness,
                root_matches_accumulator=root_matches_accumulator,
            )

        return result

    # ------------------------------------------------------------------
    # Internals

    def _resolve(self, x: ElementLike) -> int:
        key = element_key(x)
        is_new = key not in self._mapper
        e = self._mapper.get_or_generate(key)
        if is_new:
            self._emit("element_assigned", exponent_bits=e.bit_length(), cached=len(self._mapper))
        return e

    def _inverse(self, e: int) -> Optional[int]:
        try:
            return int(gmpy2.invert(e, self._trapdoor.sk))
        except ZeroDivisionError:
            return None

    def _require_inverse(self, e: int) -> int:
        e_inv = self._inverse(e)
        if e_inv is None:
            raise NotInvertible("Element not invertible modulo sk", exponent=e)
        return e_inv

    def _exp(self, base: MontyForm, exponent: int) -> MontyForm:
        return mont_mod_exp(
            base,
            exponent,
            width=self._exponent_bits,
            reduction_interval=self._settings.reduction_interval,
        )

    @staticmethod
    def _check_witness(w: Any) -> int:
        if isinstance(w, bool) or not isinstance(w, int):
            raise TypeError("witness must be an integer")
        return w

    def _emit(self, event: str, **fields: Any) -> None:
        logger.debug(f"{event}: {fields}")
        if self._observer is not None:
            self._observer(event, fields)

    def __repr__(self) -> str:
        return f"Accumulator(modulus_bits={self.modulus.bit_length()}, elements={self.element_count})"


# ----------------------------------------------------------------------
# Functional surface


def setup(prime_bits: Optional[int] = None, **kwargs: Any) -> Accumulator:
    """Build a new accumulator; see :meth:`Accumulator.setup`."""
    return Accumulator.setup(prime_bits, **kwargs)


def add(acc: Accumulator, element: ElementLike) -> int:
    """Witness for element; see :meth:`Accumulator.add`."""
    return acc.add(element)


def delete(acc: Accumulator, element: ElementLike) -> None:
    """Delete element; see :meth:`Accumulator.delete`."""
    acc.delete(element)


def verify(acc: Accumulator, element: ElementLike, witness: int) -> bool:
    """Membership check; see :meth:`Accumulator.verify`."""
    return acc.verify(element, witness)


def update_witness_on_deletion(acc: Accumulator, element: ElementLike, witness: int, deleted: ElementLike) -> int:
    """Witness refresh; see :meth:`Accumulator.update_witness_on_deletion`."""
    return acc.update_witness_on_deletion(element, witness, deleted)
