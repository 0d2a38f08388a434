"""Page-walking over indexed Blockfrost collections."""

import logging
from typing import Any, Dict, List

from utxo_provider.blockfrost import BlockfrostClient
from utxo_provider.errors import ApiError, FetchError

logger = logging.getLogger(__name__)


async def fetch_all_pages(client: BlockfrostClient, path: str, start_page: int = 1) -> List[Dict[str, Any]]:
    """
    Fetch `path` page by page until a page comes back empty.

    A 404 on any page means the resource does not exist and returns [] even
    if earlier pages had entries. Any other error aborts the whole walk.
    """
    results: List[Dict[str, Any]] = []
    page = start_page
    while True:
        try:
            page_result = await client.get(path, params={"page": page})
        except ApiError as e:
            if e.is_not_found:
                logger.debug(f"{path} not found, treating as empty")
                return []
            raise FetchError("Could not fetch UTxOs from Blockfrost. Try again.") from e

        if not isinstance(page_result, list):
            raise FetchError(f"Unexpected page body for {path} page {page}: {type(page_result).__name__}")
        if not page_result:
            break
        results.extend(page_result)
        page += 1

    logger.debug(f"Fetched {len(results)} entries from {path} over {page - start_page} pages")
    return results
