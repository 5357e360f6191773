"""Ingestion pipeline for problem-list folders."""

from .classifier import DepthAnalysis, PathClassifier, analyze_depths, classify_path
from .discovery import DirectoryScanner
from .errors import EmptyBatchError, IngestionError
from .models import IngestionResult, SourceFile
from .parser import CsvParser, parse_csv
from .pipeline import IngestionPipeline

__all__ = [
    "CsvParser",
    "DepthAnalysis",
    "DirectoryScanner",
    "EmptyBatchError",
    "IngestionError",
    "IngestionPipeline",
    "IngestionResult",
    "PathClassifier",
    "SourceFile",
    "analyze_depths",
    "classify_path",
    "parse_csv",
]
