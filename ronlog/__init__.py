"""
Replicated Object Log toolkit

Frame scanning, per-object indexing and conflict-free reduction for
compact replicated-object operation logs.
"""

__version__ = "0.1.0"
