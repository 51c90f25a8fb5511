"""Abstract base class for build plugins."""

from abc import ABC, abstractmethod
from pathlib import Path

from static_i18n.core.bundle import Bundle


class BuildPlugin(ABC):
    """Hook that runs after bundling and before the output is written."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Plugin name (e.g., 'i18n')."""
        pass

    @abstractmethod
    def generate_bundle(self, bundle: Bundle) -> None:
        """
        Transform the bundle in place.

        Args:
            bundle: Output files of the build; emit new files through
                bundle.emit_file()
        """
        pass

    def run(self, dist_dir: Path) -> Bundle:
        """Run the plugin against an already built output directory."""
        bundle = Bundle.from_directory(dist_dir)
        self.generate_bundle(bundle)
        bundle.write(dist_dir)
        return bundle
