"""Launch the paged-select browser against the Art Institute of Chicago API."""

import logging

import paged_select as ps

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

config = ps.BrowserConfig.from_env()
print(f"API: {config.api_url} ({config.page_size} rows per page)")
print("Launching dashboard...")

ps.browse(config=config)
