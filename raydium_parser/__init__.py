"""
Raydium instruction builders, transaction parser and validator.
"""
from .builder import (
    BuiltInstruction,
    BuyConfig,
    CreateTokenConfig,
    MigrateConfig,
    RoleAccount,
    SellConfig,
    SwapConfig,
    new_buy_instruction,
    new_create_token_instruction,
    new_migrate_instruction,
    new_sell_instruction,
    new_swap_instruction,
)
from .errors import (
    BuildError,
    DecodeError,
    EmptyInputError,
    InvalidFieldError,
    MissingFieldError,
    ParseError,
    RaydiumParserError,
)
from .layouts import InstructionKind
from .parser import ParsedTransaction, parse_transaction, token_account_mints
from .registry import is_base_currency, is_known_program
from .validator import ValidationIssue, validate_transaction

__version__ = "0.1.0"
