"""ContextSync library.

This library synchronizes a repository's `.ai-context/` folder with a
GitHub Gist, keyed by a hash of the repository's origin URL.
"""

from importlib.metadata import PackageNotFoundError, version

from .config import Config, ConfigStore
from .gist import GistClient, Manifest, ManifestStore
from .identity import derive_project_key
from .pathcodec import decode_path, encode_path
from .sync import ProjectSynchronizer

try:
    __version__ = version("contextsync")
except PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0"

__all__ = [
    "Config",
    "ConfigStore",
    "GistClient",
    "Manifest",
    "ManifestStore",
    "ProjectSynchronizer",
    "decode_path",
    "derive_project_key",
    "encode_path",
    "__version__",
]
