"""
Base Analyzer class to handle common file operations.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from model_inspect.analysis.base import ModelDetails, ModelFormat
from model_inspect.io.file_reader import LocalFileSource, PositionedFile
from model_inspect.observability import Timer


class Analyzer(ABC):
    """Abstract base class for file format analyzers.

    One analyzer instance handles one file; ``run`` opens its own handle, so
    instances can be used from several threads at once.
    """

    format: ModelFormat = ModelFormat.UNKNOWN

    def __init__(self, path: str):
        self.path = path
        self.src = LocalFileSource(path)

    def run(self) -> ModelDetails:
        """Open the file, parse its header and return the format record.

        Raises:
            ModelFormatError: The file does not match the format.
            OSError: The file cannot be opened or read.
        """
        with self.src.open() as f:
            with Timer(f"{self.format.value} header parse", subject=self.path):
                return self._parse(f)

    @abstractmethod
    def _parse(self, f: PositionedFile) -> ModelDetails:
        """
        Format-specific parsing logic to be implemented by subclasses.
        Must only read header bytes.
        """
        raise NotImplementedError
