"""
Raydium AMM v4 instruction configs: swap and liquidity migration.
"""
from dataclasses import dataclass
from typing import Optional, Union

from solders.pubkey import Pubkey

from ..layouts import InstructionKind
from .base import InstructionConfig

Key = Optional[Union[Pubkey, str]]


@dataclass(frozen=True)
class SwapConfig(InstructionConfig):
    """Fields of an AMM v4 swap (base in). The token program is filled in."""
    KIND = InstructionKind.SWAP

    amm_id: Key = None
    amm_authority: Key = None
    amm_open_orders: Key = None
    amm_target_orders: Key = None
    pool_coin_token: Key = None
    pool_pc_token: Key = None
    serum_program: Key = None
    serum_market: Key = None
    serum_bids: Key = None
    serum_asks: Key = None
    serum_event_queue: Key = None
    serum_coin_vault: Key = None
    serum_pc_vault: Key = None
    serum_vault_signer: Key = None
    user_source_token: Key = None
    user_dest_token: Key = None
    user_owner: Key = None
    amount_in: Optional[int] = None
    minimum_amount_out: Optional[int] = None


@dataclass(frozen=True)
class MigrateConfig(InstructionConfig):
    """Fields of a liquidity migration from one pool to another."""
    KIND = InstructionKind.MIGRATE

    user_authority: Key = None
    from_pool: Key = None
    to_pool: Key = None
    token_account: Key = None
    amount: Optional[int] = None


def new_swap_instruction(**fields) -> SwapConfig:
    return SwapConfig(**fields)


def new_migrate_instruction(**fields) -> MigrateConfig:
    return MigrateConfig(**fields)
