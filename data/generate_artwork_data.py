"""Generate a synthetic artworks catalogue for offline browsing.

Produces data/artworks.csv with the same fields the Art Institute of
Chicago API returns for artworks:
id, title, place_of_origin, artist_display, inscriptions, date_start, date_end

No paged-select dependency; only numpy and pandas.
"""

import numpy as np
import pandas as pd
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

SEED = 42
N_ARTWORKS = 2500
FIRST_ID = 10000

PLACES = [
    "France", "Italy", "Japan", "China", "United States", "Netherlands",
    "Spain", "Germany", "Mexico", "Egypt", "India", "England",
]

ARTISTS = [
    ("Claude Monet", "French", 1840, 1926),
    ("Mary Cassatt", "American", 1844, 1926),
    ("Katsushika Hokusai", "Japanese", 1760, 1849),
    ("Rembrandt van Rijn", "Dutch", 1606, 1669),
    ("Francisco Goya", "Spanish", 1746, 1828),
    ("Georgia O'Keeffe", "American", 1887, 1986),
    ("Albrecht Dürer", "German", 1471, 1528),
    ("Frida Kahlo", "Mexican", 1907, 1954),
    ("Unknown", "", None, None),
]

SUBJECTS = [
    "Landscape", "Portrait", "Still Life", "Study", "Harbor", "Garden",
    "Interior", "Figure", "River", "Mountain", "Vase", "Bowl",
]

MODIFIERS = [
    "with Poplars", "at Dusk", "in Winter", "No. 2", "with Flowers",
    "in Blue", "at Rest", "by the Sea", "",
]

INSCRIPTIONS = [
    None, None, None, "Signed lower right", "Dated lower left",
    "Inscribed on reverse", "Stamped with collector's mark",
]


def _artist_display(rng: np.random.Generator) -> tuple[str, int]:
    """Return (artist_display, anchor year) for one artwork."""
    name, nationality, born, died = ARTISTS[rng.integers(len(ARTISTS))]
    if born is None:
        return name, int(rng.integers(1400, 1950))
    display = f"{name}\n{nationality}, {born}–{died}"
    return display, int(rng.integers(born + 18, died + 1))


def generate(n: int = N_ARTWORKS, seed: int = SEED) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    rows = []
    for i in range(n):
        artist, year = _artist_display(rng)
        title = f"{SUBJECTS[rng.integers(len(SUBJECTS))]} {MODIFIERS[rng.integers(len(MODIFIERS))]}"
        span = int(rng.choice([0, 0, 0, 1, 2, 5]))
        rows.append({
            "id": FIRST_ID + i,
            "title": title.strip(),
            "place_of_origin": PLACES[rng.integers(len(PLACES))],
            "artist_display": artist,
            "inscriptions": INSCRIPTIONS[rng.integers(len(INSCRIPTIONS))],
            "date_start": year,
            "date_end": year + span,
        })
    return pd.DataFrame(rows)


if __name__ == "__main__":
    out = Path(__file__).parent / "artworks.csv"
    df = generate()
    df.to_csv(out, index=False)
    print(f"Wrote {len(df)} artworks to {out}")
