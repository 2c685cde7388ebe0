"""
Known Raydium programs and base-currency mints.
"""
from typing import Union

from solders.pubkey import Pubkey
from spl.token.constants import WRAPPED_SOL_MINT

# Raydium 程序 ID
RAYDIUM_V4_PROGRAM_ID = Pubkey.from_string("675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8")
RAYDIUM_V5_PROGRAM_ID = Pubkey.from_string("CPMMoo8L3F4NbTegBCKVNunggL7H1ZpdTHKxQB5qKP1C")
RAYDIUM_STAKING_PROGRAM_ID = Pubkey.from_string("EhhTKczWMGQt46ynNeRX1WfeagwwJd7ufHvCDjRxjo5Q")
RAYDIUM_LIQUIDITY_PROGRAM_ID = Pubkey.from_string("27haf8L6oxUeXrHrgEgsexjSY5hbVUWEmvv9Nyxg8vQv")
RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID = Pubkey.from_string("LanMV9sAd7wArD4vJFi2qDdfnVhFxYSUg6eADduJ3uj")

KNOWN_PROGRAMS = {
    RAYDIUM_V4_PROGRAM_ID: "Raydium AMM v4",
    RAYDIUM_V5_PROGRAM_ID: "Raydium AMM v5",
    RAYDIUM_STAKING_PROGRAM_ID: "Raydium Staking",
    RAYDIUM_LIQUIDITY_PROGRAM_ID: "Raydium Liquidity",
    RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID: "Raydium Launchpad v1",
}

USDC_MINT = Pubkey.from_string("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v")
USDT_MINT = Pubkey.from_string("Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB")

BASE_CURRENCY_MINTS = frozenset({
    WRAPPED_SOL_MINT,
    USDC_MINT,
    USDT_MINT,
})


def _to_pubkey(value: Union[Pubkey, str]) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    return Pubkey.from_string(value)


def is_known_program(program_id: Union[Pubkey, str]) -> bool:
    """Return True if ``program_id`` is one of the Raydium programs we decode."""
    try:
        return _to_pubkey(program_id) in KNOWN_PROGRAMS
    except (ValueError, TypeError):
        return False


def is_base_currency(mint: Union[Pubkey, str]) -> bool:
    """Return True if ``mint`` is a reference asset such as wrapped SOL."""
    try:
        return _to_pubkey(mint) in BASE_CURRENCY_MINTS
    except (ValueError, TypeError):
        return False


def program_name(program_id: Union[Pubkey, str]) -> str:
    try:
        return KNOWN_PROGRAMS.get(_to_pubkey(program_id), "unknown")
    except (ValueError, TypeError):
        return "unknown"
