"""Writing a map to disk: SVG verbatim, anything else rasterized.

Raster output is rendered by cairosvg to PNG, then opened with Pillow,
optionally resized to fit a geometry and saved in the format implied by
the file extension. Geometry follows the ImageMagick shape: '1024x768'
fits inside the box keeping the aspect ratio, '1024x' or 'x768' fix one
side. A (width, height) tuple works like '1024x768'.
"""

import io
import logging
import re
from pathlib import Path

from PIL import Image

from datamap.core.errors import ExportError

logger = logging.getLogger(__name__)

Geometry = str | tuple[int, int]

# Formats Pillow can write with an alpha channel; the rest get a white background
ALPHA_FORMATS = {'PNG', 'WEBP', 'TIFF', 'GIF', 'ICO'}

_GEOMETRY_RE = re.compile(r'^\s*(\d*)\s*[xX]\s*(\d*)\s*$')


def output_format(path: str | Path) -> str:
    """Lowercase extension without the dot ('svg', 'png', ...)."""
    return Path(path).suffix.lstrip('.').lower()


def parse_geometry(size: Geometry) -> tuple[int | None, int | None]:
    if isinstance(size, tuple):
        width, height = (int(side) for side in size)
    else:
        m = _GEOMETRY_RE.match(size)
        if not m or not (m.group(1) or m.group(2)):
            raise ExportError(f'Invalid size {size!r}, expected WIDTHxHEIGHT')
        width = int(m.group(1)) if m.group(1) else None
        height = int(m.group(2)) if m.group(2) else None
    if any(side is not None and side <= 0 for side in (width, height)):
        raise ExportError(f'Invalid size {size!r}, width and height must be positive')
    return width, height


def fit_size(current: tuple[int, int], size: Geometry) -> tuple[int, int]:
    """Target dimensions for resizing current into the geometry, aspect ratio kept."""
    cur_w, cur_h = current
    width, height = parse_geometry(size)
    scales = []
    if width:
        scales.append(width / cur_w)
    if height:
        scales.append(height / cur_h)
    scale = min(scales)
    return max(1, round(cur_w * scale)), max(1, round(cur_h * scale))


def save_svg(svg: str, output: str | Path) -> None:
    with open(output, 'w', encoding='utf-8', newline='') as f:
        f.write(svg)


def rasterize(svg: str) -> Image.Image:
    """Render SVG text to a Pillow image."""
    import cairosvg

    png = cairosvg.svg2png(bytestring=svg.encode('utf-8'))
    image = Image.open(io.BytesIO(png))
    image.load()
    return image


def _pillow_format(fmt: str) -> str:
    pil_format = Image.registered_extensions().get(f'.{fmt}')
    if pil_format is None:
        raise ExportError(f'Unsupported output format: {fmt!r}')
    return pil_format


def _flatten(image: Image.Image) -> Image.Image:
    if image.mode in ('RGBA', 'LA'):
        background = Image.new('RGB', image.size, 'white')
        background.paste(image, mask=image.getchannel('A'))
        return background
    return image.convert('RGB')


def save_file(svg: str, output: str | Path, size: Geometry | None = None, quality: int = 100) -> Path:
    """Write svg to output in the format given by its extension. Returns the path written."""
    output = Path(output)
    fmt = output_format(output)
    if fmt == 'svg':
        save_svg(svg, output)
        logger.info('Wrote SVG %s', output)
        return output

    if not 0 <= quality <= 100:
        raise ExportError(f'Quality must be between 0 and 100, got {quality}')
    pil_format = _pillow_format(fmt)
    if size is not None:
        parse_geometry(size)

    image = rasterize(svg)
    if size is not None:
        target = fit_size(image.size, size)
        if target != image.size:
            image = image.resize(target, Image.Resampling.LANCZOS)
    if pil_format not in ALPHA_FORMATS:
        image = _flatten(image)

    image.save(output, format=pil_format, quality=quality)
    logger.info('Wrote %s %s (%dx%d)', pil_format, output, image.width, image.height)
    return output
