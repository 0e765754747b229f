"""All-or-nothing commit of generated artifacts."""

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from src.browser.errors import WriteError
from src.models.page_models import GeneratedArtifact

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """Write the artifacts of one page as a unit.

    Every artifact is first staged as a temporary file next to its target.
    Targets are replaced only once all staging succeeded; if a replacement
    fails, targets already replaced are restored to their previous content.

    Regeneration replaces prior artifacts unconditionally. Concurrent runs
    against the same output root are not coordinated.
    """

    def __init__(self, out_dir: str):
        self.out_dir = Path(out_dir)

    def commit(self, artifacts: Sequence[GeneratedArtifact]) -> List[Path]:
        """Write artifacts to the output root.

        Args:
            artifacts: Artifacts with paths relative to the output root

        Returns:
            Target paths in artifact order

        Raises:
            WriteError: If any artifact cannot be written
        """
        staged: List[Tuple[Path, Path]] = []

        try:
            for artifact in artifacts:
                target = self.out_dir / artifact.path
                staged.append((self._stage(target, artifact.content), target))
        except OSError as e:
            self._discard(staged)
            raise WriteError(f"Failed to stage artifacts in {self.out_dir}: {e}")

        replaced: List[Tuple[Path, Optional[bytes]]] = []
        try:
            for temp_path, target in staged:
                previous = target.read_bytes() if target.exists() else None
                os.replace(temp_path, target)
                replaced.append((target, previous))
        except OSError as e:
            self._restore(replaced)
            self._discard(staged)
            raise WriteError(f"Failed to write artifacts to {self.out_dir}: {e}")

        targets = [target for _, target in staged]
        for target in targets:
            logger.info(f"Wrote {target}")
        return targets

    def _stage(self, target: Path, content: str) -> Path:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError:
            Path(temp_name).unlink(missing_ok=True)
            raise
        return Path(temp_name)

    def _discard(self, staged: List[Tuple[Path, Path]]) -> None:
        for temp_path, _ in staged:
            try:
                temp_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning(f"Could not remove staged file {temp_path}: {e}")

    def _restore(self, replaced: List[Tuple[Path, Optional[bytes]]]) -> None:
        for target, previous in reversed(replaced):
            try:
                if previous is None:
                    target.unlink()
                else:
                    target.write_bytes(previous)
            except OSError as e:
                logger.error(f"Could not restore {target}: {e}")
