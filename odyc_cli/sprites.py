"""Build an Odyc.js game configuration from a directory of PNG sprites."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger("odyc_cli")

SUCCESS = logging.INFO + 2
TRANSPARENT = "#00000000"

_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
MAX_COLORS = 10 + len(_LETTERS)


class SpriteError(Exception):
    """Raised when a sprite configuration cannot be generated."""


@dataclass
class ColorInfo:
    """A colour seen in the sprites, with its palette index and usage."""

    color: str
    index: int
    count: int = 0
    files: list[str] = field(default_factory=list)

    def add(self, filename: str) -> None:
        """Record one more pixel of this colour found in ``filename``."""
        self.count += 1
        if filename not in self.files:
            self.files.append(filename)


@dataclass
class SpriteConfig:
    """Palette and sprite grids gathered from a set of PNG images."""

    cell_width: int
    cell_height: int
    colors: dict[str, ColorInfo]
    sprites: dict[str, list[str]]

    @property
    def palette(self) -> list[str]:
        """Colour codes ordered by palette index."""
        return [info.color for info in sorted(self.colors.values(), key=lambda c: c.index)]

    def render(self) -> str:
        """Return the JavaScript source defining ``gameConfig``."""
        color_lines = "".join(f'\t\t"{color}",\n' for color in self.palette)
        blocks = []
        for name, rows in self.sprites.items():
            body = "\n".join(f"\t\t\t{row}" for row in rows)
            blocks.append(f'\t\t"{name}": `\n{body}\n\t\t`,')
        sprite_lines = "\n".join(blocks)
        return (
            "var gameConfig = {\n"
            f"\tcellWidth: {self.cell_width},\n"
            f"\tcellHeight: {self.cell_height},\n"
            "\tcolors: [\n"
            f"{color_lines}"
            "\t],\n"
            "\tsprites: {\n"
            f"{sprite_lines}\n"
            "\t}\n"
            "};"
        )


def color_symbol(index: int) -> str:
    """Return the single character that stands for palette entry ``index``."""
    if index < 0 or index >= MAX_COLORS:
        raise SpriteError(f"Too many colors. You can only use up to {MAX_COLORS} colors")
    if index < 10:
        return str(index)
    return _LETTERS[index - 10]


def pixel_hex(rgba: tuple[int, int, int, int]) -> str:
    """Return ``#rrggbbaa`` for an 8-bit RGBA pixel, alpha-premultiplied."""
    red, green, blue, alpha = rgba
    alpha16 = alpha * 0x101

    def channel(value: int) -> int:
        return (value * 0x101 * alpha16 // 0xFFFF) >> 8

    return f"#{channel(red):02x}{channel(green):02x}{channel(blue):02x}{alpha:02x}"


def list_pngs(assets_dir: str | os.PathLike[str]) -> list[str]:
    """Return the names of PNG files in ``assets_dir``, sorted by name."""
    try:
        with os.scandir(assets_dir) as scan:
            entries = sorted(scan, key=lambda entry: entry.name)
    except OSError as exc:
        raise SpriteError(f"Error reading assets directory: {exc}") from exc

    pngs = []
    for entry in entries:
        if entry.name.endswith(".png"):
            pngs.append(entry.name)
        elif entry.is_dir():
            logger.warning("Assets directory contains a directory: %s", entry.name)
        else:
            logger.info("Skipping non-PNG file: %s", entry.name)
    return pngs


def _load_rgba(path: Path) -> Image.Image | None:
    try:
        handle = open(path, "rb")
    except OSError as exc:
        logger.error("Error opening file %s: %s", path.name, exc)
        return None
    with handle:
        try:
            with Image.open(handle) as image:
                return image.convert("RGBA")
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise SpriteError(f"Error decoding image: {exc}") from exc


def _pixel_rows(image: Image.Image):
    width = image.size[0]
    stride = width * 4
    data = image.tobytes()
    for start in range(0, len(data), stride):
        row = iter(data[start:start + stride])
        yield list(zip(row, row, row, row))


def build_config(assets_dir: str | os.PathLike[str]) -> SpriteConfig:
    """Read every PNG in ``assets_dir`` and build the sprite configuration."""
    assets = Path(assets_dir)
    pngs = list_pngs(assets)
    if not pngs:
        raise SpriteError("No PNG files found in assets directory")

    colors: dict[str, ColorInfo] = {}
    sprites: dict[str, list[str]] = {}
    max_width = max_height = 0
    warned_width = warned_height = False

    for filename in pngs:
        image = _load_rgba(assets / filename)
        if image is None:
            continue
        width, height = image.size

        if width > max_width:
            if max_width and not warned_width:
                logger.warning(
                    "Images have different widths, which usually indicate a sprite sheet problem"
                )
                warned_width = True
            max_width = width
        if height > max_height:
            if max_height and not warned_height:
                logger.warning(
                    "Images have different heights, which usually indicate a sprite sheet problem"
                )
                warned_height = True
            max_height = height

        rows = []
        for pixels in _pixel_rows(image):
            symbols = []
            for pixel in pixels:
                code = pixel_hex(pixel)
                if code == TRANSPARENT:
                    symbols.append(".")
                    continue
                info = colors.get(code)
                if info is None:
                    info = ColorInfo(color=code, index=len(colors))
                    colors[code] = info
                info.add(filename)
                symbols.append(color_symbol(info.index))
            rows.append("".join(symbols))
        sprites[filename[: -len(".png")]] = rows

    if not colors:
        raise SpriteError("No colors found in PNG images")
    if not sprites:
        raise SpriteError("No sprites made from PNG images")

    for info in colors.values():
        word = "files" if info.count > 1 else "file"
        logger.debug("%s found %d times in %d %s", info.color, info.count, len(info.files), word)
    logger.info("%d colors found across all sprites", len(colors))
    logger.info("%d sprites found across all PNG files", len(sprites))

    return SpriteConfig(
        cell_width=max_width, cell_height=max_height, colors=colors, sprites=sprites
    )


def generate(
    assets_dir: str | os.PathLike[str],
    output_path: str | os.PathLike[str],
    force: bool = False,
) -> SpriteConfig | None:
    """Write the configuration for ``assets_dir`` to ``output_path``.

    Returns the configuration, or ``None`` when the output file already
    exists and ``force`` is false.
    """
    output = Path(output_path)
    if not output.parent.exists():
        raise SpriteError("Directory of output path does not exist")
    if output.exists() and not force:
        logger.warning(
            "Output file already exists. Please remove it first, or add --force flag to overwrite it"
        )
        return None
    if not Path(assets_dir).exists():
        raise SpriteError("Assets directory does not exist")

    config = build_config(assets_dir)
    try:
        output.write_text(config.render(), encoding="utf-8")
    except OSError as exc:
        raise SpriteError(f"Failed to write code to output file: {exc}") from exc

    logger.log(SUCCESS, "Sprites configuration generated successfully")
    return config