"""
Tests package for the Trapdoor Accumulator

- Unit tests: Test individual components in isolation
- Integration tests: Test complete add/delete/update workflows
"""
