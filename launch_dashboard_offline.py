"""Launch the paged-select browser on the synthetic artworks CSV.

Run ``python data/generate_artwork_data.py`` first.
"""

import logging

import paged_select as ps

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

provider = ps.DataFrameProvider.from_csv("data/artworks.csv", delay=0.3)
print(f"Dataset: {provider.total_count} artworks")
print("Launching dashboard...")

ps.browse(provider=provider, config=ps.BrowserConfig(title="Artworks (offline)"))
