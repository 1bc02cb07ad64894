"""
Fitness CSV Logger - Daily fitness measurement record keeping.

Validated fitness entries persisted to a delimited text file, with a
tolerant loader and a small command-line shell.
"""

__version__ = "0.1.0"
