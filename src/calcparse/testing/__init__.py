"""
calcparse benchmarking support.

Random expression generation for timing the two parsing modes against
inputs of known size.
"""

from calcparse.testing.generator import generate_expression, write_expression

__all__ = ["generate_expression", "write_expression"]
