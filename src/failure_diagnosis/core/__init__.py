"""Core diagnosis components.

This module exports the engine and its stages:
- DiagnosisEngine: Runs the full pipeline for one error message
- StackTraceParser: Extracts call stacks and the failing test frame
- ErrorClassifier: Maps a message to an error type tag by weighted rules
- ContextExtractor: Resolves file, line, snippet and enclosing function
- LocatorExtractor: Pulls selector/action metadata from UI-automation errors
- SolutionSynthesizer: Builds causes, solutions, confidence and severity
"""

from failure_diagnosis.core.classifier import (
    CLASSIFICATION_RULES,
    ClassificationRule,
    ErrorClassifier,
)
from failure_diagnosis.core.context_extractor import (
    ContextExtractor,
    find_containing_function,
    find_related_files,
)
from failure_diagnosis.core.engine import DiagnosisEngine, classify, get_engine
from failure_diagnosis.core.errors import DiagnosisError, SourceReadError
from failure_diagnosis.core.knowledge import KNOWLEDGE_BASE, KnowledgeEntry
from failure_diagnosis.core.locator_extractor import LocatorExtractor
from failure_diagnosis.core.stack_trace_parser import StackTraceParser
from failure_diagnosis.core.synthesizer import SolutionSynthesizer

__all__ = [
    "CLASSIFICATION_RULES",
    "KNOWLEDGE_BASE",
    "ClassificationRule",
    "ContextExtractor",
    "DiagnosisEngine",
    "DiagnosisError",
    "ErrorClassifier",
    "KnowledgeEntry",
    "LocatorExtractor",
    "SolutionSynthesizer",
    "SourceReadError",
    "StackTraceParser",
    "classify",
    "find_containing_function",
    "find_related_files",
    "get_engine",
]
