"""
Syllabus-to-assignments extractor.

Turns raw syllabus text into a list of dated assignments using table
detection first, deterministic line patterns second, and an AI-assisted
pass as the last resort.
"""

__version__ = "0.1.0"
