"""
Raydium交易解析器模块
"""
from typing import Mapping, Optional, Sequence

from solders.pubkey import Pubkey

from ..layouts import InstructionKind
from .amm import parse_migrate, parse_swap
from .balances import token_account_mints
from .base import (
    CreateInfo,
    DecodedInstruction,
    Migration,
    ParsedTransaction,
    SwapBuy,
    SwapInfo,
    SwapSell,
    TradeInfo,
    TransactionParser,
    decode_envelope,
)
from .launchpad import parse_create, parse_trade


def default_parser() -> TransactionParser:
    """A parser with handlers for every instruction kind."""
    parser = TransactionParser()
    parser.register_instruction_parser(InstructionKind.SWAP, parse_swap)
    parser.register_instruction_parser(InstructionKind.MIGRATE, parse_migrate)
    parser.register_instruction_parser(InstructionKind.CREATE_TOKEN, parse_create)
    parser.register_instruction_parser(InstructionKind.BUY, parse_trade)
    parser.register_instruction_parser(InstructionKind.SELL, parse_trade)
    return parser


# 创建解析器实例
parser = default_parser()


def parse_transaction(
    encoded: str,
    slot: int,
    token_mints: Optional[Mapping[Pubkey, Pubkey]] = None,
    loaded_addresses: Optional[Sequence[Pubkey]] = None
) -> ParsedTransaction:
    return parser.parse_transaction(encoded, slot, token_mints, loaded_addresses)


__all__ = [
    'CreateInfo',
    'DecodedInstruction',
    'Migration',
    'ParsedTransaction',
    'SwapBuy',
    'SwapInfo',
    'SwapSell',
    'TradeInfo',
    'TransactionParser',
    'decode_envelope',
    'default_parser',
    'parse_transaction',
    'token_account_mints'
]
