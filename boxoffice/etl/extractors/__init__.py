"""Extractors reading collected source batches."""

from boxoffice.etl.extractors.yaml_reader import YAMLBatchReader, YAMLReadStats

__all__ = ["YAMLBatchReader", "YAMLReadStats"]
