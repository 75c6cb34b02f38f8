"""Performance benchmarks for fdbench.

Timing scripts for the stepping hot path of each finite-difference scheme.
"""
