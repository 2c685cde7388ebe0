"""
Launchpad v1 instruction handlers: token creation, buy and sell.
"""
import logging
from typing import Mapping

from solders.pubkey import Pubkey

from ..layouts import InstructionKind
from .base import CreateInfo, DecodedInstruction, ParsedTransaction, TradeInfo

logger = logging.getLogger(__name__)


def parse_create(ix: DecodedInstruction, tx: ParsedTransaction, token_mints: Mapping[Pubkey, Pubkey]):
    accounts = ix.accounts
    args = ix.args
    tx.creates.append(CreateInfo(
        instruction_index=ix.index,
        creator=accounts["payer"],
        mint=accounts["mint"],
        mint_authority=accounts["mint_authority"],
        freeze_authority=accounts["freeze_authority"],
        decimals=args["decimals"],
        initial_supply=args["initial_supply"],
        name=args["name"],
        symbol=args["symbol"],
        uri=args["uri"]
    ))
    logger.debug(f"Token created: {args['symbol']} mint={accounts['mint']}")


def parse_trade(ix: DecodedInstruction, tx: ParsedTransaction, token_mints: Mapping[Pubkey, Pubkey]):
    """
    Record a launchpad buy or sell.

    The opcode alone decides direction: a buy spends up to ``max_sol_cost``
    lamports for ``amount`` tokens, a sell returns at least
    ``min_sol_received`` lamports for them.
    """
    is_buy = ix.kind == InstructionKind.BUY
    accounts = ix.accounts
    args = ix.args

    trade = TradeInfo(
        instruction_index=ix.index,
        is_buy=is_buy,
        trader=accounts["user_authority"],
        mint=accounts["token_mint"],
        pool=accounts["amm_id"],
        user_token_account=accounts["user_token_account"],
        user_sol_account=accounts["user_sol_account"],
        token_amount=args["amount"],
        sol_limit=args["max_sol_cost"] if is_buy else args["min_sol_received"]
    )
    idx = tx.add_trade(trade)
    logger.debug(f"Trade {idx} ({ix.kind.value}): {trade.token_amount} of {trade.mint}")
