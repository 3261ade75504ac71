from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


class UploadStore:
    """Stores supporting documents on disk and hands out their public URL."""

    def __init__(self, directory: str | Path, *, url_prefix: str = "/uploads"):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, file: FileStorage, *, now: datetime) -> str:
        filename = secure_filename(file.filename or "")
        if not filename:
            raise ValidationError("Uploaded file name is not valid")

        self.directory.mkdir(parents=True, exist_ok=True)
        stored = f"{int(now.timestamp() * 1000)}-{filename}"
        file.save(str(self.directory / stored))
        logger.info("Stored supporting document %s", stored)
        return self.url_for(stored)

    def stored_name(self, url: str) -> str:
        return url.rsplit("/", 1)[-1]

    def url_for(self, stored: str) -> str:
        return f"{self.url_prefix}/{stored}"

    def discard(self, url: str) -> None:
        """Remove a stored document; missing files are ignored."""

        path = self.directory / self.stored_name(url)
        path.unlink(missing_ok=True)
        logger.info("Removed supporting document %s", path.name)
