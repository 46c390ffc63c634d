"""
Determinism-friendly simulation helpers.

This package intentionally contains *small* primitives (seeded RNG, fixed-step clock,
phase/action contracts) so gameplay code can avoid wall-clock time and the global
`random` module.
"""
