"""
System Font Provider
===================

Resolves a font family name to the raw bytes of an installed font file.
Handles lookup through configuration overrides, the Windows registry,
fontconfig and a scan of the standard system font directories.
"""

import logging
import os
import platform
import re
import shutil
import subprocess
import threading
from pathlib import Path
from typing import Protocol

from ..core.config import FontRasterConfig
from ..core.models import FontFamily

# Optional Windows dependency
try:
    import winreg
except ImportError:
    winreg = None

logger = logging.getLogger(__name__)

FONT_EXTENSIONS = frozenset({".ttf", ".otf", ".ttc", ".otc"})

# Styles preferred when a family has several faces installed
REGULAR_STYLES = ("regular", "book", "normal", "roman", "medium")


class FontProvider(Protocol):
    """Font resolution collaborator used by the font cache."""

    def load_font_data(self, family: str) -> bytes | None:
        """Return raw font bytes for ``family``, or None when nothing matches."""
        ...


def normalize_font_name(name: str) -> str:
    """Lowercase a family or file name and strip separators."""
    return re.sub(r"[\s_\-]+", "", name).lower()


class SystemFontProvider:
    """
    Provider for fonts installed on the local machine.

    Named families must match an installed family exactly; only the generic
    families (sans, sans-serif, serif, monospace) are mapped to a default face.
    """

    GENERIC_FAMILIES = FontFamily.GENERIC_NAMES

    def __init__(self, config: FontRasterConfig | None = None):
        """Initialize system font provider."""
        self.config = config or FontRasterConfig()
        self.system = platform.system().lower()
        self.font_directories = self._get_system_font_directories()
        self.resolved_paths: dict[str, Path] = {}
        self._file_index: dict[str, Path] | None = None
        self._index_lock = threading.Lock()

        logger.debug(f"SystemFontProvider initialized for {self.system}")
        logger.debug(f"Font directories: {self.font_directories}")

    def _get_system_font_directories(self) -> list[Path]:
        """Get font directories for this operating system plus configured extras."""
        directories = list(self.config.font_dirs)

        if self.system == "windows":
            directories.extend(
                [
                    Path(os.environ.get("WINDIR", "C:\\Windows")) / "Fonts",
                    Path(os.environ.get("LOCALAPPDATA", "")) / "Microsoft" / "Windows" / "Fonts",
                ]
            )

        elif self.system == "darwin":  # macOS
            directories.extend(
                [
                    Path("/System/Library/Fonts"),
                    Path("/Library/Fonts"),
                    Path.home() / "Library" / "Fonts",
                ]
            )

        else:  # Linux and other Unix-like systems
            directories.extend(
                [
                    Path("/usr/share/fonts"),
                    Path("/usr/local/share/fonts"),
                    Path.home() / ".fonts",
                    Path.home() / ".local" / "share" / "fonts",
                ]
            )

        return [d for d in directories if d.exists() and d.is_dir()]

    def load_font_data(self, family: str) -> bytes | None:
        """
        Load the raw bytes of the font matching ``family``.

        Args:
            family: Canonical family name

        Returns:
            Font file contents, or None if no installed font matches
        """
        font_path = self.find_font(family)
        if font_path is None:
            logger.debug(f"No font file found for family {family!r}")
            return None

        try:
            data = font_path.read_bytes()
        except OSError as e:
            logger.warning(f"Failed to read font file {font_path}: {e}")
            return None

        self.resolved_paths[family] = font_path
        logger.debug(f"Resolved family {family!r} to {font_path}")
        return data

    def find_font(self, family: str) -> Path | None:
        """
        Find the font file for a family.

        Args:
            family: Font family name

        Returns:
            Path to the font file if found, None otherwise
        """
        family = family.strip()
        if not family:
            return None

        override = self.config.font_files.get(family.lower())
        if override is not None:
            if override.is_file():
                return override
            logger.warning(f"Configured font file for {family!r} does not exist: {override}")

        if self.system == "windows":
            font_path = self._find_windows_font(family)
            if font_path:
                return font_path

        if self.config.use_fontconfig:
            font_path = self._find_fontconfig_font(family)
            if font_path:
                return font_path

        return self._find_scanned_font(family)

    def _find_windows_font(self, family: str) -> Path | None:
        """Find font on Windows using registry."""
        if winreg is None or family in self.GENERIC_FAMILIES:
            return None

        wanted = normalize_font_name(family)
        try:
            font_key = winreg.OpenKey(
                winreg.HKEY_LOCAL_MACHINE,
                r"SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts",
            )
        except OSError as e:
            logger.debug(f"Failed to open Windows font registry: {e}")
            return None

        try:
            index = 0
            while True:
                try:
                    value_name, value_data, _ = winreg.EnumValue(font_key, index)
                except OSError:
                    break
                index += 1

                # Values look like "Arial (TrueType)" or "Arial Bold (TrueType)"
                face_name = value_name.split("(")[0].strip()
                if normalize_font_name(face_name) != wanted:
                    continue

                font_path = Path(value_data)
                if not font_path.is_absolute():
                    font_path = Path(os.environ.get("WINDIR", "C:\\Windows")) / "Fonts" / font_path
                if font_path.exists():
                    return font_path
        finally:
            winreg.CloseKey(font_key)

        return None

    def _find_fontconfig_font(self, family: str) -> Path | None:
        """Find font using fontconfig."""
        if family in self.GENERIC_FAMILIES:
            # fc-match always answers, which is what a generic family wants
            output = self._run_fontconfig("fc-match", "--format=%{file}", family)
            if output:
                font_path = Path(output.strip())
                if font_path.is_file():
                    return font_path
            return None

        # fc-list only lists exact family matches, so unknown names stay unknown
        output = self._run_fontconfig(
            "fc-list", "--format=%{file}\t%{style}\n", f":family={_escape_fc_value(family)}"
        )
        if not output:
            return None

        candidates = []
        for line in output.splitlines():
            file_part, _, style_part = line.partition("\t")
            font_path = Path(file_part.strip())
            if font_path.suffix.lower() in FONT_EXTENSIONS and font_path.is_file():
                candidates.append((_style_rank(style_part), str(font_path), font_path))

        if not candidates:
            return None
        candidates.sort()
        return candidates[0][2]

    def _run_fontconfig(self, tool: str, *args: str) -> str | None:
        tool_path = shutil.which(tool)
        if not tool_path:
            logger.debug(f"{tool} not found in PATH")
            return None

        try:
            result = subprocess.run(
                [tool_path, *args],
                capture_output=True,
                text=True,
                timeout=self.config.fontconfig_timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"{tool} failed: {e}")
            return None

        if result.returncode != 0:
            logger.debug(f"{tool} exited with {result.returncode}: {result.stderr.strip()}")
            return None
        return result.stdout

    def _find_scanned_font(self, family: str) -> Path | None:
        """Find font by file name in the known font directories."""
        index = self._get_file_index()

        if family in self.GENERIC_FAMILIES:
            for file_name in self.config.generic_fonts.get(family, []):
                font_path = index.get(normalize_font_name(Path(file_name).stem))
                if font_path is not None:
                    return font_path
            return None

        wanted = normalize_font_name(family)
        for stem in (wanted, f"{wanted}regular", f"{wanted}book"):
            font_path = index.get(stem)
            if font_path is not None:
                return font_path
        return None

    def _get_file_index(self) -> dict[str, Path]:
        """Map normalized file stems to font files, built on first use."""
        with self._index_lock:
            if self._file_index is None:
                index: dict[str, Path] = {}
                for font_dir in self.font_directories:
                    for font_path in self._scan_font_directory(font_dir):
                        index.setdefault(normalize_font_name(font_path.stem), font_path)
                self._file_index = index
                logger.debug(f"Indexed {len(index)} font files")
            return self._file_index

    def _scan_font_directory(self, font_dir: Path) -> list[Path]:
        """Scan a font directory for font files."""
        fonts = []

        try:
            for font_file in sorted(font_dir.rglob("*")):
                if font_file.suffix.lower() in FONT_EXTENSIONS and font_file.is_file():
                    fonts.append(font_file)
        except PermissionError:
            logger.debug(f"Permission denied accessing {font_dir}")
        except OSError as e:
            logger.warning(f"Error scanning {font_dir}: {e}")

        return fonts


def _escape_fc_value(value: str) -> str:
    """Escape characters with a meaning in fontconfig patterns."""
    return re.sub(r"([\\:,=\-])", r"\\\1", value)


def _style_rank(style: str) -> int:
    """Rank a fontconfig style list; regular faces first."""
    styles = [s.strip().lower() for s in style.split(",")]
    for rank, regular in enumerate(REGULAR_STYLES):
        if regular in styles:
            return rank
    return len(REGULAR_STYLES)
