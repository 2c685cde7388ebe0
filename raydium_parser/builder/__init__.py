"""
Raydium指令构建模块
"""
from .base import BuiltInstruction, InstructionConfig, RoleAccount
from .amm import MigrateConfig, SwapConfig, new_migrate_instruction, new_swap_instruction
from .launchpad import (
    BuyConfig,
    CreateTokenConfig,
    SellConfig,
    new_buy_instruction,
    new_create_token_instruction,
    new_sell_instruction,
)

__all__ = [
    'BuiltInstruction',
    'InstructionConfig',
    'RoleAccount',
    'SwapConfig',
    'MigrateConfig',
    'BuyConfig',
    'SellConfig',
    'CreateTokenConfig',
    'new_swap_instruction',
    'new_migrate_instruction',
    'new_buy_instruction',
    'new_sell_instruction',
    'new_create_token_instruction'
]
