"""Source files as the checker, walker and marker count see them."""

from dataclasses import dataclass
from pathlib import Path

from .exceptions import InvalidPathError
from .expectation import patch_source_text
from .walker import dialect_for_suffix


@dataclass(frozen=True)
class SourceFile:
    """A source file whose annotations have been patched to the ``%`` marker."""

    path: Path
    text: str

    @property
    def dialect(self) -> str:
        return dialect_for_suffix(self.path.suffix)

    @classmethod
    def load(cls, path: Path) -> "SourceFile":
        """Read and patch a source file.

        Raises:
            InvalidPathError: If the file cannot be read
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidPathError(path, str(e)) from e
        return cls(path=path, text=patch_source_text(text))
