"""Splice the processed star catalog into the Stella app's index.html.

The page declares two array literals that this module rewrites in place:

    const stars = [ ... ];
    const constellationLines = [ ... ];

The stars literal must exist; the constellation literal is replaced only
when present. Nothing is written unless the stars literal was found.
"""
import json
import logging
import re
from pathlib import Path

from stella.catalog import CatalogEntry, load_catalog
from stella.errors import MissingInputFile, TargetPatternNotFound

logger = logging.getLogger(__name__)

STARS_PATTERN = re.compile(r"const stars = \[.*?\];", re.DOTALL)
LINES_PATTERN = re.compile(r"const constellationLines = \[.*?\];", re.DOTALL)

DEFAULT_LIMIT = 100
ITEM_INDENT = " " * 12
CLOSE_INDENT = " " * 8

# Named-star pairs drawn as constellation figures
CONSTELLATION_LINES = [
    # Orion
    ("Betelgeuse", "Rigel"),
    ("Betelgeuse", "Bellatrix"),
    ("Rigel", "Saiph"),
    # Ursa Major (Big Dipper)
    ("Dubhe", "Merak"),
    ("Merak", "Phecda"),
    ("Phecda", "Megrez"),
    ("Megrez", "Alioth"),
    ("Alioth", "Mizar"),
    ("Mizar", "Alkaid"),
    # Cassiopeia
    ("Schedar", "Caph"),
    ("Caph", "Cih"),
    ("Cih", "Ruchbah"),
    ("Ruchbah", "Segin"),
    # Cygnus (Northern Cross)
    ("Deneb", "Sadr"),
    ("Sadr", "Gienah"),
    ("Gienah", "Albireo"),
    ("Albireo", "Deneb"),
]


def star_fact(star: CatalogEntry) -> str:
    parts = []
    if star.get("dist_ly"):
        parts.append(f"This star is {star['dist_ly']} light years away.")
    if star.get("spectral"):
        parts.append(f"It's a {star['spectral']} type star.")
    if star.get("constellation"):
        parts.append(f"Located in the constellation {star['constellation']}.")
    return " ".join(parts) or "A beautiful star visible to the naked eye!"


def enhance(star: CatalogEntry) -> dict:
    """Catalog entry -> display record used by the app's star popups."""
    return {
        "name": star.get("name") or f"Star {star['id']}",
        "constellation": star.get("constellation") or "Unknown",
        "ra": star["ra"],
        "dec": star["dec"],
        "magnitude": star["mag"],
        "distance": f"{star['dist_ly']} light years" if star.get("dist_ly") else "Unknown",
        "type": f"{star['spectral']} Star" if star.get("spectral") else "Main Sequence",
        "fact": star_fact(star),
        "size": max(0.5, 1 - (star["mag"] + 2) / 5),
    }


def _js_array(name: str, items: list[dict]) -> str:
    """`const <name> = [...];` with one indented JSON object per item."""
    body = ",\n".join(
        "\n".join(ITEM_INDENT + line for line in json.dumps(item, indent=8, ensure_ascii=False).splitlines())
        for item in items
    )
    return f"const {name} = [\n{body}\n{CLOSE_INDENT}];"


def splice(html: str, stars: list[dict], lines: list[tuple[str, str]]) -> tuple[str, bool]:
    """Replace the stars (and, if present, constellation) literals in html.

    Returns (new_html, constellation_lines_replaced).
    Raises TargetPatternNotFound when the stars literal is missing.
    """
    if not STARS_PATTERN.search(html):
        raise TargetPatternNotFound("Could not find `const stars = [...];` in HTML")
    stars_js = _js_array("stars", stars)
    html = STARS_PATTERN.sub(lambda _: stars_js, html, count=1)

    replaced_lines = False
    if LINES_PATTERN.search(html):
        lines_js = _js_array("constellationLines", [{"from": a, "to": b} for a, b in lines])
        html = LINES_PATTERN.sub(lambda _: lines_js, html, count=1)
        replaced_lines = True
    return html, replaced_lines


def integrate(catalog_path: Path, html_path: Path, limit: int = DEFAULT_LIMIT) -> int:
    """Write the brightest `limit` catalog stars into html_path.

    Returns the number of stars written.
    Raises MissingInputFile, TargetPatternNotFound.
    """
    stars = load_catalog(catalog_path)
    logger.info("Loaded %d stars from %s", len(stars), catalog_path)

    html_path = Path(html_path)
    if not html_path.exists():
        raise MissingInputFile(f"{html_path.name} not found")
    html = html_path.read_text(encoding="utf-8")

    enhanced = [enhance(s) for s in stars[:limit]]
    html, replaced_lines = splice(html, enhanced, CONSTELLATION_LINES)
    logger.info("Replaced stars array")
    if replaced_lines:
        logger.info("Enhanced constellation lines")

    html_path.write_text(html, encoding="utf-8")
    logger.info("Saved updated %s", html_path)
    return len(enhanced)
