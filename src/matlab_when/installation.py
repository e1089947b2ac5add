from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from xml.dom import minidom
from xml.parsers.expat import ExpatError

logger = logging.getLogger(__name__)

_CODE_SUFFIXES = (".m", ".p", ".mlx", ".mlapp")


def _is_code_file(filename: str) -> bool:
    lowered = filename.lower()
    if lowered.endswith(_CODE_SUFFIXES):
        return True
    stem, dot, ext = lowered.rpartition(".")
    return bool(dot and stem) and ext.startswith("mex")


def _symbol_name(filename: str) -> str:
    return filename.split(".", 1)[0].lower()


def _off_path(dirname: str) -> bool:
    # private/, +namespace and @class folders are not on the MATLAB path; only
    # the class name itself resolves.
    return dirname.lower() == "private" or dirname.startswith(("+", "@"))


def discover_root() -> Path | None:
    """Find a MATLAB install from the ``matlab`` executable on PATH."""

    exe = shutil.which("matlab")
    if exe is None:
        return None
    # <root>/bin/matlab
    return Path(exe).resolve().parent.parent


@dataclass
class MatlabInstallation:
    """Read-only view of a local MATLAB installation.

    ``root`` may be ``None`` (no installation); every symbol is then reported
    as absent and the release is whatever was configured.
    """

    root: Path | None
    configured_release: str | None = None
    _index: dict[str, Path] | None = field(default=None, init=False, repr=False)

    def _build_index(self) -> dict[str, Path]:
        index: dict[str, Path] = {}
        root = self.root
        if root is None:
            return index
        tbroot = root / "toolbox"
        if not tbroot.is_dir():
            return index
        for dirpath, dirnames, filenames in os.walk(tbroot):
            here = Path(dirpath)
            for d in sorted(dirnames):
                if d.startswith("@"):
                    index.setdefault(d[1:].lower(), (here / d).relative_to(root))
            dirnames[:] = sorted(d for d in dirnames if not _off_path(d))
            for filename in sorted(filenames):
                if not _is_code_file(filename):
                    continue
                index.setdefault(
                    _symbol_name(filename), (here / filename).relative_to(root)
                )
        logger.debug(f"Indexed toolbox tree (root={root} symbols={len(index)})")
        return index

    def locate(self, name: str) -> Path | None:
        """Installation-relative path of ``name`` under ``toolbox/``."""

        if self._index is None:
            self._index = self._build_index()
        return self._index.get(name.lower())

    def release(self) -> str | None:
        if self.root is not None:
            found = _read_version_info(self.root / "VersionInfo.xml")
            if found:
                return found
        return self.configured_release


def _read_version_info(path: Path) -> str | None:
    if not path.is_file():
        return None
    try:
        doc = minidom.parseString(path.read_bytes())
    except (ExpatError, OSError, ValueError) as e:
        logger.warning(f"Unreadable VersionInfo.xml (path={path} error={e})")
        return None
    nodes = doc.getElementsByTagName("release")
    if not nodes:
        return None
    text = "".join(
        n.data for n in nodes[0].childNodes if n.nodeType == n.TEXT_NODE
    ).strip()
    return text or None
