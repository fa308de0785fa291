"""Artifact source backed by files on the local disk."""

from pathlib import Path

from configtx.domain.interfaces import ArtifactSourceInterface
from configtx.domain.models import StagedArtifact


class LocalFileSource(ArtifactSourceInterface):
    """
    Ancillary files attached to an edit by path.

    Each file is staged under its base name, so two attachments with the
    same name are rejected up front.
    """

    def __init__(self, *paths: Path | str):
        self.paths = [Path(p) for p in paths]
        names = [p.name for p in self.paths]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Attachments share a file name: {', '.join(duplicates)}")

    def local_artifacts(self) -> list[StagedArtifact]:
        return [StagedArtifact(name=p.name, content=p.read_bytes()) for p in self.paths]
