"""
Filesystem staging area for ancillary configuration files.

{base_dir}/
    staging/
        {scope}/
            {transaction_id}/
                {artifact name}
    files/
        {scope}/
            {artifact name}

Files live under staging/ while their transaction runs; a committing
transaction promotes them to files/, everything else is cleaned away.
"""

import logging
import os
import shutil
from pathlib import Path

from configtx.domain.exceptions import StagingError
from configtx.domain.interfaces import StagingAreaInterface
from configtx.domain.models import StagedArtifact
from configtx.infrastructure.persistence.filesystem import SCOPE_PATTERN

logger = logging.getLogger(__name__)


class FilesystemStagingArea(StagingAreaInterface):
    """Temporary per-transaction directories plus a durable per-scope file home."""

    def __init__(self, base_dir: str | Path):
        self._root = Path(base_dir) / "staging"
        self._files_root = Path(base_dir) / "files"

    @property
    def root(self) -> Path:
        return self._root

    @staticmethod
    def _check_name(name: str, kind: str) -> str:
        # One path component only: no "", ".", ".." or separators
        if not SCOPE_PATTERN.match(name):
            raise StagingError(f"Invalid {kind} name: '{name}'")
        return name

    def _scope_dir(self, scope: str) -> Path:
        return self._root / self._check_name(scope, "scope")

    def staging_dir(self, scope: str, transaction_id: str) -> Path:
        return self._scope_dir(scope) / self._check_name(transaction_id, "transaction")

    def files_dir(self, scope: str) -> Path:
        """Durable home of the scope's promoted files."""
        return self._files_root / self._check_name(scope, "scope")

    def stage(self, artifact: StagedArtifact, destination: Path) -> Path:
        if not destination.resolve().is_relative_to(self._root.resolve()):
            raise StagingError(f"Destination {destination} is outside {self._root}")
        target = (destination / artifact.name).resolve()
        if not target.is_relative_to(destination.resolve()):
            raise StagingError(
                f"Artifact name '{artifact.name}' escapes staging directory {destination}"
            )
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(artifact.content)
        except OSError as e:
            raise StagingError(f"Failed to stage '{artifact.name}': {e}") from e
        logger.debug("Staged %s (%d bytes)", target, len(artifact.content))
        return target

    def staged(self, scope: str) -> list[Path]:
        """Every staged file of the scope, across transactions."""
        scope_dir = self._scope_dir(scope)
        if not scope_dir.exists():
            return []
        return sorted(p for p in scope_dir.rglob("*") if p.is_file())

    def promote(self, scope: str, transaction_id: str) -> list[Path]:
        source = self.staging_dir(scope, transaction_id)
        if not source.exists():
            return []
        target_dir = self.files_dir(scope)
        promoted = []
        try:
            for path in sorted(p for p in source.rglob("*") if p.is_file()):
                target = target_dir / path.relative_to(source)
                target.parent.mkdir(parents=True, exist_ok=True)
                os.replace(path, target)
                promoted.append(target)
        except OSError as e:
            raise StagingError(f"Failed to promote staged files of '{scope}': {e}") from e
        logger.debug("Promoted %d file(s) to %s", len(promoted), target_dir)
        return promoted

    def clean(self, scope: str, transaction_id: str | None = None) -> None:
        try:
            if transaction_id is None:
                target = self._scope_dir(scope)
            else:
                target = self.staging_dir(scope, transaction_id)
        except StagingError as e:
            logger.warning("Not cleaning staging (ignored): %s", e)
            return
        if not target.exists():
            return
        try:
            shutil.rmtree(target)
            if transaction_id is not None and not any(target.parent.iterdir()):
                target.parent.rmdir()
        except OSError as e:
            logger.warning("Could not clean staging for '%s' (ignored): %s", scope, e)
