"""Context assembly: selection, compression and the engine that drives them."""

from repoctx.context.compression import CompressionPipeline
from repoctx.context.engine import ContextEngine
from repoctx.context.models import Context, SelectedFile, TokenEstimator
from repoctx.context.selector import ContentSelector, summarize_file

__all__ = [
    "CompressionPipeline",
    "ContentSelector",
    "Context",
    "ContextEngine",
    "SelectedFile",
    "TokenEstimator",
    "summarize_file",
]
