"""
linegauge - Line length analysis for tokenized source files.

Provides:
- A token stream model with bounded backward search
- A minimal line-oriented lexer for PHP-flavoured source
- The line length rule (soft/hard limits, comment and import exemptions)
- Length-distribution metrics and a command-line runner

A line is measured by where its last token ends, not by counting raw
characters, so tab expansion done by the lexer carries through to the
reported length.
"""

__version__ = "0.1.0"
