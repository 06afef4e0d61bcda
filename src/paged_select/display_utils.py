"""Display utilities for prettifying record field names."""

_ACRONYMS = {
    "id", "url", "api", "iiif", "uuid",
}

# Field names whose display title is not derivable from the name itself.
_TITLE_OVERRIDES = {
    "artist_display": "Artist",
    "date_start": "Start Date",
    "date_end": "End Date",
}


def prettify_name(name: str) -> str:
    """Convert snake_case names to Title Case with smart acronyms.

    Examples::

        prettify_name("place_of_origin")  # -> "Place Of Origin"
        prettify_name("image_id")         # -> "Image ID"
        prettify_name("date_start")       # -> "Start Date"
    """
    if name in _TITLE_OVERRIDES:
        return _TITLE_OVERRIDES[name]
    words = name.replace("_", " ").split()
    return " ".join(
        w.upper() if w.lower() in _ACRONYMS else w.capitalize()
        for w in words
    )


def column_titles(columns, upper: bool = True) -> dict[str, str]:
    """Map field names to table header titles (upper-cased by default)."""
    titles = {}
    for col in columns:
        title = prettify_name(col)
        titles[col] = title.upper() if upper else title
    return titles
