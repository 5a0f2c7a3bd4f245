"""Translation dictionaries: collaborator contracts and in-memory implementation.

Python 3.13+.
"""

from .memory import MappingDictionary, MappingDictionaryFactory, UsageCallback
from .protocols import Dictionary, DictionaryFactory

__all__ = [
    "Dictionary",
    "DictionaryFactory",
    "MappingDictionary",
    "MappingDictionaryFactory",
    "UsageCallback",
]
