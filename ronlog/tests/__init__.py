"""
Test suite for ronlog.

Focus areas:
- Frame boundary scanning
- Frame iteration over borrowed and owned text
- Per-object indexing
- Reduction dispatch and built-in reductions
"""
