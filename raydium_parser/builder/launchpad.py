"""
Raydium Launchpad v1 instruction configs: buy, sell and token creation.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from solders.pubkey import Pubkey

from .. import config
from ..errors import InvalidFieldError
from ..layouts import InstructionKind
from .base import InstructionConfig

Key = Optional[Union[Pubkey, str]]


@dataclass(frozen=True)
class _LaunchpadTradeConfig(InstructionConfig):
    user_authority: Key = None
    token_mint: Key = None
    amm_id: Key = None
    amm_authority: Key = None
    user_token_account: Key = None
    user_sol_account: Key = None
    token_vault: Key = None
    sol_vault: Key = None
    amount: Optional[int] = None


@dataclass(frozen=True)
class BuyConfig(_LaunchpadTradeConfig):
    """Buy ``amount`` tokens paying at most ``max_sol_cost`` lamports."""
    KIND = InstructionKind.BUY

    max_sol_cost: Optional[int] = None


@dataclass(frozen=True)
class SellConfig(_LaunchpadTradeConfig):
    """Sell ``amount`` tokens for at least ``min_sol_received`` lamports."""
    KIND = InstructionKind.SELL

    min_sol_received: Optional[int] = None


@dataclass(frozen=True)
class CreateTokenConfig(InstructionConfig):
    KIND = InstructionKind.CREATE_TOKEN

    payer: Key = None
    mint: Key = None
    mint_authority: Key = None
    freeze_authority: Key = None
    decimals: Optional[int] = None
    initial_supply: Optional[int] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    uri: Optional[str] = None

    def validate_args(self, args: Dict[str, Any]) -> None:
        limits = {
            "name": config.MAX_NAME_LENGTH,
            "symbol": config.MAX_SYMBOL_LENGTH,
            "uri": config.MAX_URI_LENGTH,
        }
        for field, limit in limits.items():
            value = args[field]
            if not isinstance(value, str):
                raise InvalidFieldError(field, f"expected str, got {type(value).__name__}")
            size = len(value.encode("utf-8"))
            if size > limit:
                raise InvalidFieldError(field, f"{size} bytes exceeds limit of {limit}")

        super().validate_args(args)

        # decimals 为 u8
        if args["decimals"] > 255:
            raise InvalidFieldError("decimals", f"{args['decimals']} does not fit in u8")


def new_buy_instruction(**fields) -> BuyConfig:
    return BuyConfig(**fields)


def new_sell_instruction(**fields) -> SellConfig:
    return SellConfig(**fields)


def new_create_token_instruction(**fields) -> CreateTokenConfig:
    return CreateTokenConfig(**fields)
