"""Lock files --- reproducible, auditable dependency pins.

The package is split into focused submodules:

- ``models``: The ``LockDependency`` data class.
- ``lockfile``: The ``Lockfile`` class with entry management and
  serialization.
- ``operations``: Parsing (``from_lines``, ``read``), validation and
  diffing.

All public names are re-exported here so that imports like
``from repolock.core.lockfile import Lockfile`` work.
"""

# Re-export data models
from repolock.core.lockfile.models import LockDependency

# Re-export the Lockfile class
from repolock.core.lockfile.lockfile import Lockfile

# Attach operations to Lockfile as methods/classmethods
from repolock.core.lockfile import operations as _ops

Lockfile.from_lines = classmethod(_ops._from_lines)
Lockfile.read = classmethod(_ops._read)
Lockfile.validate = _ops._validate
Lockfile.diff = _ops._diff

__all__ = [
    "Lockfile",
    "LockDependency",
]
