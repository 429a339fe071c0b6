from pathlib import Path

from pydantic import BaseModel


class StagedFile(BaseModel):
    id: str
    filename: str
    content_type: str
    directory: Path
    size_bytes: int

    @property
    def path(self) -> Path:
        return self.directory / self.filename
