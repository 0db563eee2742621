"""
Core fraction primitives and invariants.

This module contains the exact fraction value type, the fixed-width integer
arithmetic it is built on, and its structured serialization. None of it
depends on external systems.
"""
