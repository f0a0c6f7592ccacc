"""App icon renderer.

Draws a small Orion-like constellation on a dark blue radial gradient and
exports it as PNG via CairoSVG at the sizes the web manifest expects.
"""
import logging
from pathlib import Path

import numpy as np

from stella.errors import StellaError

logger = logging.getLogger(__name__)

ICON_SIZES = (192, 512)

# -- Colors --
BG_INNER = "#000428"
BG_OUTER = "#004e92"
STAR_COLOR = "#4fb3ff"
CENTER_COLOR = "#ffffff"

# -- Layout (fractions of icon size) --
STAR_LAYOUT = np.array([
    (0.5, 0.2),   # top center
    (0.3, 0.4),   # left middle
    (0.7, 0.4),   # right middle
    (0.5, 0.6),   # center
    (0.2, 0.8),   # bottom left
    (0.8, 0.8),   # bottom right
])
LINES = [(0, 1), (1, 3), (3, 2), (2, 0), (3, 4), (3, 5)]
CENTER_STAR = 3
STAR_RADIUS = 0.08
LINE_WIDTH = 0.01
CENTER_SCALE = 1.5


def render_icon_svg(size: int) -> str:
    """Icon as an SVG string, size x size px.

    Layer order: gradient -> lines -> glowing stars -> white center star.
    """
    xy = STAR_LAYOUT * size
    r = STAR_RADIUS * size
    center_r = r * CENTER_SCALE
    cx, cy = xy[CENTER_STAR]

    parts: list[str] = []
    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {size} {size}" width="{size}" height="{size}">'
    )

    parts.append("<defs>")
    parts.append('<radialGradient id="bg" cx="50%" cy="50%" r="50%">')
    parts.append(f'<stop offset="0" stop-color="{BG_INNER}"/>')
    parts.append(f'<stop offset="1" stop-color="{BG_OUTER}"/>')
    parts.append("</radialGradient>")
    # blur radius ~ star radius
    parts.append('<filter id="glow" x="-200%" y="-200%" width="500%" height="500%">')
    parts.append(f'<feGaussianBlur stdDeviation="{r:.2f}" result="blur"/>')
    parts.append('<feMerge><feMergeNode in="blur"/><feMergeNode in="SourceGraphic"/></feMerge>')
    parts.append("</filter>")
    parts.append('<filter id="glow-center" x="-300%" y="-300%" width="700%" height="700%">')
    parts.append(f'<feGaussianBlur stdDeviation="{center_r * 1.5:.2f}" result="blur"/>')
    parts.append(f'<feFlood flood-color="{STAR_COLOR}"/><feComposite in2="blur" operator="in"/>')
    parts.append('<feMerge><feMergeNode/><feMergeNode in="SourceGraphic"/></feMerge>')
    parts.append("</filter>")
    parts.append("</defs>")

    parts.append('<rect width="100%" height="100%" fill="url(#bg)"/>')

    for a, b in LINES:
        (x1, y1), (x2, y2) = xy[a], xy[b]
        parts.append(
            f'<line x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}" '
            f'stroke="{STAR_COLOR}" stroke-width="{size * LINE_WIDTH:.2f}" '
            f'stroke-linecap="round"/>'
        )

    parts.append('<g filter="url(#glow)">')
    for x, y in xy:
        parts.append(f'<circle cx="{x:.1f}" cy="{y:.1f}" r="{r:.2f}" fill="{STAR_COLOR}"/>')
    parts.append("</g>")

    parts.append(
        f'<circle cx="{cx:.1f}" cy="{cy:.1f}" r="{center_r:.2f}" '
        f'fill="{CENTER_COLOR}" filter="url(#glow-center)"/>'
    )

    parts.append("</svg>")
    return "\n".join(parts)


def rasterize(svg: str, size: int) -> bytes:
    """SVG string -> PNG bytes at size x size."""
    try:
        import cairosvg
    except ImportError as exc:
        raise StellaError("PNG export requires cairosvg. Install: pip install cairosvg") from exc
    return cairosvg.svg2png(bytestring=svg.encode("utf-8"),
                            output_width=size, output_height=size)


def write_icons(out_dir: Path, sizes: tuple[int, ...] = ICON_SIZES) -> list[Path]:
    """Write icon-<size>.png for each size. Returns the written paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for size in sizes:
        path = out_dir / f"icon-{size}.png"
        path.write_bytes(rasterize(render_icon_svg(size), size))
        logger.info("Created %s (%dx%d)", path.name, size, size)
        written.append(path)
    return written
