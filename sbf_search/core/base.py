"""
Base classes and interfaces for sbf-search frequency filters.

This module defines the abstract base class that frequency filters implement
to provide a consistent interface for querying, serialization, size
estimation and statistics.
"""

import abc
import json
import sys
from typing import Any, Dict


class FrequencyFilter(abc.ABC):
    """
    Abstract base class for read-only approximate frequency filters.

    A frequency filter is built once from a finished multiset and is never
    mutated afterwards. Subclasses answer frequency queries and know how to
    convert themselves to and from a plain dictionary.
    """

    @abc.abstractmethod
    def get_frequency(self, key: str) -> int:
        """
        Estimate the frequency of a key.

        Args:
            key: The key to estimate the frequency for.

        Returns:
            The estimated frequency of the key.
        """
        pass

    def query(self, key: str) -> int:
        """
        Query the filter for a key's estimated frequency.

        This is a convenience method that calls get_frequency.
        """
        return self.get_frequency(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get_frequency(key) > 0

    @abc.abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the filter to a dictionary for serialization.

        Returns:
            A dictionary representation of the filter.
        """
        pass

    def _base_dict(self) -> Dict[str, Any]:
        """Create a dictionary with the attributes common to all filters."""
        return {"type": self.__class__.__name__}

    @classmethod
    @abc.abstractmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrequencyFilter":
        """
        Create a filter from a dictionary representation.

        Args:
            data: The dictionary containing the filter state.

        Returns:
            A new filter initialized with the given state.
        """
        pass

    def serialize(self) -> str:
        """
        Serialize the filter to a JSON string.

        Returns:
            The JSON representation of to_dict().
        """
        return json.dumps(self.to_dict())

    @classmethod
    def deserialize(cls, data: str) -> "FrequencyFilter":
        """
        Deserialize a filter from a JSON string produced by serialize.

        Args:
            data: The serialized filter.

        Returns:
            A new filter.
        """
        return cls.from_dict(json.loads(data))

    def estimate_size(self) -> int:
        """
        Estimate the in-memory size of this filter in bytes.

        Derived classes should override this method to add the size of their
        counter storage.

        Returns:
            Estimated memory usage in bytes.
        """
        size = sys.getsizeof(self)
        if hasattr(self, "__dict__"):
            size += sys.getsizeof(self.__dict__)
        return size

    def error_bounds(self) -> Dict[str, float]:
        """
        Get the theoretical error bounds for this filter.

        The base implementation returns an empty dictionary.
        """
        return {}

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the filter.

        Derived classes should call super().get_stats() and add their own
        entries.

        Returns:
            A dictionary containing various statistics about the filter.
        """
        stats: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "memory_bytes": self.estimate_size(),
        }
        stats.update(self.error_bounds())
        return stats
