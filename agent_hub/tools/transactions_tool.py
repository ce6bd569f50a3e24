from __future__ import annotations
from typing import Callable, Dict, Optional

import httpx
from langchain_core.tools import ToolException

from ..config import get_logger

log = get_logger(__name__)

def fetch_transactions_csv(url: Optional[str], *, client: Optional[httpx.Client] = None, timeout_s: float = 30.0) -> Dict[str, str]:
    """Download the published transactions sheet and return it as raw CSV text."""
    if not url:
        raise ToolException(
            "Transactions source is not configured (set TRANSACTIONS_CSV_URL or transactions_url)."
        )
    own_client = client is None
    http = client or httpx.Client(timeout=timeout_s, follow_redirects=True)
    try:
        resp = http.get(url)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        log.warning("transactions.fetch_failed", extra={"error": str(e)})
        raise ToolException(f"Could not fetch transactions: {e}") from e
    finally:
        if own_client:
            http.close()
    log.info("transactions.fetched", extra={"bytes": len(resp.content)})
    return {"csv_data": resp.text}

def make_get_transactions(url: Optional[str], *, client: Optional[httpx.Client] = None) -> Callable[[], Dict[str, str]]:
    """Bind the configured URL into a zero-argument tool function."""
    def get_transactions() -> Dict[str, str]:
        """Get the user's financial transaction data as CSV (date, description, category, amount, ...)."""
        return fetch_transactions_csv(url, client=client)
    return get_transactions
