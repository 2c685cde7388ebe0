"""
Shared instruction table: opcodes, account role orderings and payload layouts.

Builders encode with these layouts and the parser dispatches and decodes with
them, so the two sides always agree on the wire format. Account orderings are
the program's account interface, listed position by position:

SWAP (AMM v4, 18 accounts)
    0 token_program, 1 amm_id, 2 amm_authority, 3 amm_open_orders,
    4 amm_target_orders, 5 pool_coin_token, 6 pool_pc_token, 7 serum_program,
    8 serum_market, 9 serum_bids, 10 serum_asks, 11 serum_event_queue,
    12 serum_coin_vault, 13 serum_pc_vault, 14 serum_vault_signer,
    15 user_source_token, 16 user_dest_token, 17 user_owner (signer)

BUY / SELL (Launchpad v1, 10 accounts)
    0 user_authority (signer), 1 token_mint, 2 amm_id (pool),
    3 amm_authority, 4 user_token_account, 5 user_sol_account,
    6 token_vault, 7 sol_vault, 8 token_program, 9 system_program

CREATE_TOKEN (Launchpad v1, 6 accounts)
    0 payer (signer), 1 mint (signer), 2 mint_authority,
    3 freeze_authority, 4 token_program, 5 system_program

MIGRATE (AMM v4, 5 accounts)
    0 user_authority (signer), 1 from_pool, 2 to_pool, 3 token_account,
    4 token_program

Index 0 of a launchpad instruction is the signer, not the mint.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from borsh_construct import CStruct, String, U8, U64
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from spl.token.constants import TOKEN_PROGRAM_ID

from .registry import RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID, RAYDIUM_V4_PROGRAM_ID

# 指令判别符(payload 第 0 字节)
INSTRUCTION_CREATE_POOL = 1
INSTRUCTION_BUY = 2
INSTRUCTION_SELL = 3
INSTRUCTION_MIGRATE = 5
INSTRUCTION_SWAP = 9


class InstructionKind(Enum):
    SWAP = "swap"
    BUY = "buy"
    SELL = "sell"
    CREATE_TOKEN = "create_token"
    MIGRATE = "migrate"


@dataclass(frozen=True)
class AccountSpec:
    """One position in an instruction's account list."""
    role: str
    is_signer: bool = False
    is_writable: bool = False
    # 固定程序账户，不需要调用方提供
    fixed: Optional[Pubkey] = None


@dataclass(frozen=True)
class InstructionLayout:
    kind: InstructionKind
    program_id: Pubkey
    opcode: int
    accounts: Tuple[AccountSpec, ...]
    args: CStruct
    arg_names: Tuple[str, ...]

    @property
    def account_count(self) -> int:
        return len(self.accounts)

    def role_index(self, role: str) -> int:
        for idx, spec in enumerate(self.accounts):
            if spec.role == role:
                return idx
        raise KeyError(role)

    def encode(self, args: Dict[str, Any]) -> bytes:
        """Opcode byte followed by the borsh-packed arguments."""
        return bytes([self.opcode]) + self.args.build(args)

    def decode(self, data: bytes) -> Dict[str, Any]:
        """Decode the argument block that follows the opcode byte."""
        parsed = self.args.parse(data[1:])
        consumed = len(self.args.build(parsed)) + 1
        if consumed != len(data):
            raise ValueError(f"{self.kind.value} payload is {len(data)} bytes, expected {consumed}")
        return {name: parsed[name] for name in self.arg_names}


def _layout(kind, program_id, opcode, accounts, *fields) -> InstructionLayout:
    return InstructionLayout(
        kind=kind,
        program_id=program_id,
        opcode=opcode,
        accounts=tuple(accounts),
        args=CStruct(*fields),
        arg_names=tuple(f.name for f in fields),
    )


_LAUNCHPAD_TRADE_ACCOUNTS = (
    AccountSpec("user_authority", is_signer=True, is_writable=True),
    AccountSpec("token_mint"),
    AccountSpec("amm_id", is_writable=True),
    AccountSpec("amm_authority"),
    AccountSpec("user_token_account", is_writable=True),
    AccountSpec("user_sol_account", is_writable=True),
    AccountSpec("token_vault", is_writable=True),
    AccountSpec("sol_vault", is_writable=True),
    AccountSpec("token_program", fixed=TOKEN_PROGRAM_ID),
    AccountSpec("system_program", fixed=SYSTEM_PROGRAM_ID),
)

SWAP_LAYOUT = _layout(
    InstructionKind.SWAP,
    RAYDIUM_V4_PROGRAM_ID,
    INSTRUCTION_SWAP,
    (
        AccountSpec("token_program", fixed=TOKEN_PROGRAM_ID),
        AccountSpec("amm_id", is_writable=True),
        AccountSpec("amm_authority"),
        AccountSpec("amm_open_orders", is_writable=True),
        AccountSpec("amm_target_orders", is_writable=True),
        AccountSpec("pool_coin_token", is_writable=True),
        AccountSpec("pool_pc_token", is_writable=True),
        AccountSpec("serum_program"),
        AccountSpec("serum_market", is_writable=True),
        AccountSpec("serum_bids", is_writable=True),
        AccountSpec("serum_asks", is_writable=True),
        AccountSpec("serum_event_queue", is_writable=True),
        AccountSpec("serum_coin_vault", is_writable=True),
        AccountSpec("serum_pc_vault", is_writable=True),
        AccountSpec("serum_vault_signer"),
        AccountSpec("user_source_token", is_writable=True),
        AccountSpec("user_dest_token", is_writable=True),
        AccountSpec("user_owner", is_signer=True),
    ),
    "amount_in" / U64,
    "minimum_amount_out" / U64,
)

BUY_LAYOUT = _layout(
    InstructionKind.BUY,
    RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID,
    INSTRUCTION_BUY,
    _LAUNCHPAD_TRADE_ACCOUNTS,
    "amount" / U64,
    "max_sol_cost" / U64,
)

SELL_LAYOUT = _layout(
    InstructionKind.SELL,
    RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID,
    INSTRUCTION_SELL,
    _LAUNCHPAD_TRADE_ACCOUNTS,
    "amount" / U64,
    "min_sol_received" / U64,
)

CREATE_TOKEN_LAYOUT = _layout(
    InstructionKind.CREATE_TOKEN,
    RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID,
    INSTRUCTION_CREATE_POOL,
    (
        AccountSpec("payer", is_signer=True, is_writable=True),
        AccountSpec("mint", is_signer=True, is_writable=True),
        AccountSpec("mint_authority"),
        AccountSpec("freeze_authority"),
        AccountSpec("token_program", fixed=TOKEN_PROGRAM_ID),
        AccountSpec("system_program", fixed=SYSTEM_PROGRAM_ID),
    ),
    "decimals" / U8,
    "initial_supply" / U64,
    "name" / String,
    "symbol" / String,
    "uri" / String,
)

MIGRATE_LAYOUT = _layout(
    InstructionKind.MIGRATE,
    RAYDIUM_V4_PROGRAM_ID,
    INSTRUCTION_MIGRATE,
    (
        AccountSpec("user_authority", is_signer=True),
        AccountSpec("from_pool", is_writable=True),
        AccountSpec("to_pool", is_writable=True),
        AccountSpec("token_account", is_writable=True),
        AccountSpec("token_program", fixed=TOKEN_PROGRAM_ID),
    ),
    "amount" / U64,
)

LAYOUTS: Dict[InstructionKind, InstructionLayout] = {
    layout.kind: layout
    for layout in (SWAP_LAYOUT, BUY_LAYOUT, SELL_LAYOUT, CREATE_TOKEN_LAYOUT, MIGRATE_LAYOUT)
}


def _build_dispatch() -> Dict[Pubkey, Dict[int, InstructionKind]]:
    dispatch: Dict[Pubkey, Dict[int, InstructionKind]] = {}
    for layout in LAYOUTS.values():
        table = dispatch.setdefault(layout.program_id, {})
        if layout.opcode in table:
            raise ValueError(f"duplicate opcode {layout.opcode} for {layout.program_id}")
        table[layout.opcode] = layout.kind
    return dispatch


# program id -> opcode -> kind
DISPATCH = _build_dispatch()


def lookup_kind(program_id: Pubkey, opcode: int) -> Optional[InstructionKind]:
    return DISPATCH.get(program_id, {}).get(opcode)
