"""Reachability and unused-export analysis for JS/TS module graphs."""

from tsreach.analyzer import AnalysisResult, ProjectAnalyzer, analyze
from tsreach.records import AllExport, ImportRecord, ModuleTable, NamedExport, ParsedFile, UnusedExport

__all__ = [
    "AllExport",
    "AnalysisResult",
    "ImportRecord",
    "ModuleTable",
    "NamedExport",
    "ParsedFile",
    "ProjectAnalyzer",
    "UnusedExport",
    "analyze",
]
