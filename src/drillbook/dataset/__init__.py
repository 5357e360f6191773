"""Merged problem dataset and the field vocabulary it uses."""

from .fields import Record, acceptance_value, split_topics
from .merge import label_record, merge_batches
from .models import Dataset, FileBatch, FileLabels

__all__ = [
    "Record",
    "Dataset",
    "FileBatch",
    "FileLabels",
    "acceptance_value",
    "split_topics",
    "label_record",
    "merge_batches",
]
