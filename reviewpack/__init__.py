"""
ReviewPack - class review for interactive checkpoint-video assignments.

Reconstructs, per student and per checkpoint, what was answered and whether
it was correct, and rolls it up into class statistics and an answer matrix.
"""

__version__ = "0.1.0"
