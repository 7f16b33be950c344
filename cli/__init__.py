"""
ronlog CLI - replicated object log tools

Commands:
- ronlog frames - List the frames of a log batch
- ronlog index - Group frames by object
- ronlog reduce - Reduce every object to its converged state
"""

__version__ = "0.1.0"
