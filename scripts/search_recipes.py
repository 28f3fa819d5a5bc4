"""Recipe search script using the SearchSession abstraction.

Configuration via constants below (no CLI args). Run:
	uv run python scripts/search_recipes.py

Environment:
	EDAMAM_CREDENTIALS_FILE  (default API.env, keys API_ID / API_KEY)
	EDAMAM_BASE_URL          (default from src/recipes/config.yaml)
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
import sys
from typing import List

# Ensure repo root on path
CURRENT_DIR = Path(__file__).resolve().parent
ROOT_DIR = CURRENT_DIR.parent
if str(ROOT_DIR) not in sys.path:
	sys.path.insert(0, str(ROOT_DIR))

from src.recipes import EdamamClient, RecipeRecord, SearchSession, load_credentials, load_settings  # noqa: E402


# ---------------------------------------------------------------------------
# Configuration Constants
# ---------------------------------------------------------------------------
QUERY_TEXT: str = "chicken"
MAX_PAGES: int = 2
LOG_LEVEL: str = "INFO"


def format_record(record: RecipeRecord) -> str:
	recipe = record.recipe
	calories = f"{recipe.calories:.0f} kcal" if recipe.calories is not None else "? kcal"
	return f"{recipe.label} ({calories}) {recipe.source_url or recipe.uri}"


async def search(query: str, max_pages: int = MAX_PAGES) -> List[RecipeRecord]:
	"""Run a text search, follow up to `max_pages - 1` continuation links and log the results."""
	logger = logging.getLogger(__name__)

	async with EdamamClient(load_settings()) as client:
		session = SearchSession(client, load_credentials())
		result = await session.search_by_text(query)
		logger.info(f"Initial search: {result.status.value} (+{result.added})")

		pages = 1
		while session.has_more and pages < max_pages:
			result = await session.fetch_next_page()
			logger.info(f"Page {pages + 1}: {result.status.value} (+{result.added})")
			if not result.ok:
				break
			pages += 1

	items = session.results
	lines: List[str] = [f"Returned {len(items)} results over {pages} page(s). \nQuery: {query!r} \n"]
	for idx, item in enumerate(items, start=1):
		lines.append(f"{idx}. {format_record(item)}")
	logger.info("\n".join(lines))
	return items


def main() -> int:
	logging.basicConfig(
		level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
		format="%(asctime)s %(levelname)s %(name)s - %(message)s",
	)
	try:
		asyncio.run(search(QUERY_TEXT, MAX_PAGES))
		return 0
	except Exception as e:  # pragma: no cover
		logging.exception("Search failed: %s", e)
		return 1

if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
