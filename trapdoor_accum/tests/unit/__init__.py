"""
Unit tests for Trapdoor Accumulator components

Tests individual modules in isolation:
- test_number_theory.py: Primality and safe-prime generation
- test_montgomery.py: Montgomery residues and the exponentiation engine
- test_trapdoor.py: Trapdoor setup and validation
- test_element_mapper.py: Element-to-exponent mapping
- test_accumulator.py: Accumulator operations
- test_bezout.py: Extended Euclid and Bezout coefficients
- test_config.py: Settings and logging configuration
"""
