"""Exception taxonomy for orgtree."""

from typing import List


class OrgTreeError(Exception):
    """Base class for all orgtree errors."""


class HierarchyCycleError(OrgTreeError):
    """Raised when parent references form a cycle and the policy is RAISE."""

    def __init__(self, cycle: List[int]):
        self.cycle = list(cycle)
        chain = " -> ".join(str(i) for i in self.cycle + self.cycle[:1])
        super().__init__(f"Reporting cycle detected: {chain}")


class ConfigError(OrgTreeError):
    """Raised when the configuration file cannot be read or validated."""


class RecordError(OrgTreeError):
    """Raised when input records are not a list of JSON objects."""
