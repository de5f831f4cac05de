"""Views backed by template files on disk."""

import os
from pathlib import Path

from dingo.views.view import View, ViewRegistry

FILE_MODE = 0o600


class FileView(View):
    """A view read from ``registry.template_dir / name``.

    ``save`` refuses sources that don't compile, so a bad edit never
    reaches the file.
    """

    @property
    def path(self) -> Path:
        return self.registry.template_dir / self.name

    def load(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def save(self, source: str) -> None:
        self.registry.validate(source)
        self.path.write_text(source, encoding="utf-8")
        os.chmod(self.path, FILE_MODE)
        self.reload()
