"""
AMM v4 instruction handlers: swap and liquidity migration.
"""
import logging
from typing import Mapping

from solders.pubkey import Pubkey

from ..registry import is_base_currency
from .base import DecodedInstruction, Migration, ParsedTransaction, SwapBuy, SwapSell

logger = logging.getLogger(__name__)


def parse_swap(ix: DecodedInstruction, tx: ParsedTransaction, token_mints: Mapping[Pubkey, Pubkey]):
    """
    Record a swap as a buy or a sell.

    Swap accounts are token accounts, not mints; ``token_mints`` resolves
    them and an unresolved account is taken to be the mint itself. Spending
    the base currency is a buy, receiving it is a sell. A swap with no base
    currency on either side is not recorded.
    """
    accounts = ix.accounts
    source = accounts["user_source_token"]
    destination = accounts["user_dest_token"]
    source_mint = token_mints.get(source, source)
    destination_mint = token_mints.get(destination, destination)

    if is_base_currency(source_mint):
        record_cls, target = SwapBuy, tx.swap_buys
    elif is_base_currency(destination_mint):
        record_cls, target = SwapSell, tx.swap_sells
    else:
        logger.debug(f"Swap at instruction {ix.index} has no base currency side, skipping")
        return

    target.append(record_cls(
        instruction_index=ix.index,
        owner=accounts["user_owner"],
        amm=accounts["amm_id"],
        source_account=source,
        destination_account=destination,
        source_mint=source_mint,
        destination_mint=destination_mint,
        amount_in=ix.args["amount_in"],
        minimum_amount_out=ix.args["minimum_amount_out"]
    ))


def parse_migrate(ix: DecodedInstruction, tx: ParsedTransaction, token_mints: Mapping[Pubkey, Pubkey]):
    accounts = ix.accounts
    tx.migrations.append(Migration(
        instruction_index=ix.index,
        authority=accounts["user_authority"],
        from_pool=accounts["from_pool"],
        to_pool=accounts["to_pool"],
        token_account=accounts["token_account"],
        amount=ix.args["amount"]
    ))
