"""In-memory view of a build's output files, handed to build plugins."""

from pathlib import Path
from typing import Optional

from static_i18n.core.errors import ConfigurationError


class Bundle:
    """Ordered mapping of output file name to source text.

    Plugins read assets, replace them or emit new ones; nothing touches the
    disk until ``write`` is called, so a plugin that raises leaves the
    build output as it was.
    """

    def __init__(self, assets: Optional[dict[str, str]] = None):
        self.assets: dict[str, str] = dict(assets or {})
        self.emitted: list[str] = []

    @classmethod
    def from_directory(cls, dist_dir: Path) -> "Bundle":
        """Load every HTML file of a build output directory, top-level files first."""
        dist_dir = Path(dist_dir)
        if not dist_dir.is_dir():
            raise ConfigurationError(f"Build output directory not found: {dist_dir}")

        files = sorted(
            dist_dir.rglob("*.html"),
            key=lambda p: (len(p.relative_to(dist_dir).parts), p.as_posix())
        )
        return cls({
            path.relative_to(dist_dir).as_posix(): path.read_text(encoding="utf-8")
            for path in files
        })

    def __getitem__(self, file_name: str) -> str:
        return self.assets[file_name]

    def __len__(self) -> int:
        return len(self.assets)

    def html_assets(self) -> list[str]:
        return [name for name in self.assets if name.endswith(".html")]

    def emit_file(self, file_name: str, source: str) -> None:
        """Add an asset, or replace the source of an existing one."""
        self.assets[file_name] = source
        if file_name not in self.emitted:
            self.emitted.append(file_name)

    def write(self, dist_dir: Path) -> list[Path]:
        """Write every emitted asset below ``dist_dir``. Returns the written paths."""
        dist_dir = Path(dist_dir)
        written = []
        for file_name in self.emitted:
            path = dist_dir / file_name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.assets[file_name], encoding="utf-8")
            written.append(path)
        return written
