"""repolock: Resolve, fetch, and pin graphs of interdependent Git repositories."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
