"""
JNI Managed Peer Generator - Generate C++ peer classes for tagged Java classes
"""

from .generator import PeerGenerator
from .type_mapper import TypeMapper
from .code_generators import CodeGenerator, OutputBuilder
from .config import GeneratorConfig
from .constants import (
    NativeTypeCategory,
    DEFAULT_INCLUDES,
    PEER_BASE_CLASS,
    PEER_SUFFIX,
)

__version__ = "0.1.0"

__all__ = [
    "PeerGenerator",
    "TypeMapper",
    "CodeGenerator",
    "OutputBuilder",
    "GeneratorConfig",
    "NativeTypeCategory",
    "DEFAULT_INCLUDES",
    "PEER_BASE_CLASS",
    "PEER_SUFFIX",
]
