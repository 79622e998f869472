"""Exceptions raised inside the diagnosis engine.

None of these escape ``DiagnosisEngine.classify``: the engine degrades to a
partial result instead.
"""


class DiagnosisError(Exception):
    """Base exception for diagnosis engine errors."""


class SourceReadError(DiagnosisError):
    """Failed to read a source file named by a stack trace."""
