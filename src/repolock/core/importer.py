"""External importer hook run by ``repolock install``.

After a strict restore, ``install`` hands the root working copy and every
locked dependency to an external command, which is expected to wire the
dependencies into the root's build (for example by adding their projects to
a solution file). The command is configured as ``importer`` in the config
file and receives the paths as trailing arguments::

    <importer...> <root-path> <dependency-path>...
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from repolock.core.workspace import Repository
from repolock.exceptions import ImporterError

logger = logging.getLogger(__name__)

NO_IMPORTER_MESSAGE = "No importer configured; set 'importer' in the repolock config file"


def run_importer(
    command: Sequence[str] | None,
    root: Repository,
    dependencies: Sequence[Repository],
    timeout: float | None = None,
) -> None:
    """Run the importer command for ``root`` and its dependencies.

    Args:
        command: Importer argv prefix from the settings.
        root: Repository whose build receives the dependencies.
        dependencies: Locked dependencies, in lock order.
        timeout: Upper bound in seconds, or None for no limit.

    Raises:
        ImporterError: If no importer is configured, it cannot be started,
            it times out, or it exits non-zero.
    """
    if not command:
        raise ImporterError(NO_IMPORTER_MESSAGE)

    argv = [*command, str(root.path), *(str(d.path) for d in dependencies)]
    logger.info("Importing %d dependencies into %s", len(dependencies), root.name)
    logger.debug("Running %s", " ".join(argv))
    try:
        completed = subprocess.run(argv, cwd=root.path, check=False, timeout=timeout)
    except FileNotFoundError as exc:
        raise ImporterError(f"Cannot run importer {command[0]!r}: {exc}") from exc
    except subprocess.TimeoutExpired:
        raise ImporterError(f"Importer timed out after {timeout:g}s") from None

    if completed.returncode != 0:
        raise ImporterError(f"Importer failed with exit code {completed.returncode}")
