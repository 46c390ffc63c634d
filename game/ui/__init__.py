"""
UI layers drawn on top of (or instead of) a simulation.
"""
