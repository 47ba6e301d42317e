"""Cross-file dependency mapping for pull request review."""

__version__ = "0.1.0"

from .analyzers import DependencyMapper, DependencyMap, MapperConfiguration, Symbol, CallIndex

__all__ = ["DependencyMapper", "DependencyMap", "MapperConfiguration", "Symbol", "CallIndex"]
