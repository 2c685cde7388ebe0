"""
Token-account to mint mapping from RPC token balance metadata.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping

from solders.pubkey import Pubkey

logger = logging.getLogger(__name__)


def token_account_mints(
    token_balances: Iterable[Mapping[str, Any]],
    account_keys: List[Pubkey]
) -> Dict[Pubkey, Pubkey]:
    """
    Build the ``token_mints`` mapping used to classify swaps.

    Args:
        token_balances: ``preTokenBalances`` and/or ``postTokenBalances``
            entries from a ``getTransaction`` response
        account_keys: the transaction's account keys, in message order

    Returns:
        token account -> mint
    """
    mints = {}
    for balance in token_balances:
        idx = balance.get("accountIndex")
        mint = balance.get("mint")
        if idx is None or mint is None:
            continue
        if idx >= len(account_keys):
            logger.warning(f"Token balance references account {idx} outside {len(account_keys)} keys")
            continue
        try:
            mints[account_keys[idx]] = Pubkey.from_string(mint)
        except ValueError as e:
            logger.warning(f"Invalid mint in token balance: {mint}: {e}")
    return mints
