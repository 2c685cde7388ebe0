"""
基础解析器模块，将 base64 交易解码为 Raydium 事件记录。
"""
import base64
import binascii
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from construct import ConstructError
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import VersionedTransaction

from ..errors import DecodeError, EmptyInputError
from ..layouts import LAYOUTS, InstructionKind, lookup_kind
from ..registry import is_known_program, program_name

logger = logging.getLogger(__name__)


@dataclass
class CreateInfo:
    """A launchpad token creation"""
    instruction_index: int
    creator: Pubkey
    mint: Pubkey
    mint_authority: Pubkey
    freeze_authority: Pubkey
    decimals: int
    initial_supply: int
    name: str
    symbol: str
    uri: str


@dataclass
class TradeInfo:
    """A launchpad buy or sell"""
    instruction_index: int
    is_buy: bool
    trader: Pubkey
    mint: Pubkey
    pool: Pubkey
    user_token_account: Pubkey
    user_sol_account: Pubkey
    token_amount: int
    # 买入为最大花费，卖出为最少收到(lamports)
    sol_limit: int


@dataclass
class Migration:
    instruction_index: int
    authority: Pubkey
    from_pool: Pubkey
    to_pool: Pubkey
    token_account: Pubkey
    amount: int


@dataclass
class SwapInfo:
    """An AMM v4 swap, classified by which side carries the base currency"""
    instruction_index: int
    owner: Pubkey
    amm: Pubkey
    source_account: Pubkey
    destination_account: Pubkey
    source_mint: Pubkey
    destination_mint: Pubkey
    amount_in: int
    minimum_amount_out: int


@dataclass
class SwapBuy(SwapInfo):
    """Base currency in, token out"""


@dataclass
class SwapSell(SwapInfo):
    """Token in, base currency out"""


@dataclass
class ParsedTransaction:
    """解析后的交易数据结构"""
    signature: Signature
    slot: int
    account_keys: List[Pubkey] = field(default_factory=list)
    creates: List[CreateInfo] = field(default_factory=list)
    trades: List[TradeInfo] = field(default_factory=list)
    trade_buys: List[int] = field(default_factory=list)
    trade_sells: List[int] = field(default_factory=list)
    migrations: List[Migration] = field(default_factory=list)
    swap_buys: List[SwapBuy] = field(default_factory=list)
    swap_sells: List[SwapSell] = field(default_factory=list)

    def add_trade(self, trade: TradeInfo) -> int:
        """Append a trade and index it by direction."""
        self.trades.append(trade)
        idx = len(self.trades) - 1
        if trade.is_buy:
            self.trade_buys.append(idx)
        else:
            self.trade_sells.append(idx)
        return idx


@dataclass
class DecodedInstruction:
    """A known instruction with its accounts mapped to roles"""
    index: int
    kind: InstructionKind
    program_id: Pubkey
    accounts: Dict[str, Pubkey]
    args: Dict[str, Any]


InstructionHandler = Callable[[DecodedInstruction, ParsedTransaction, Mapping[Pubkey, Pubkey]], None]


def decode_envelope(encoded: str) -> VersionedTransaction:
    """
    Decode a base64 wire transaction (legacy or v0).

    Raises:
        EmptyInputError: ``encoded`` is empty
        DecodeError: not base64, or not a transaction
    """
    if not encoded or not encoded.strip():
        raise EmptyInputError("empty transaction data")

    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"invalid base64 transaction data: {e}") from e

    if not raw:
        raise DecodeError("transaction data decoded to zero bytes")

    try:
        tx = VersionedTransaction.from_bytes(raw)
    except Exception as e:
        raise DecodeError(f"failed to deserialize transaction: {e}") from e

    if len(bytes(tx)) != len(raw):
        raise DecodeError("trailing bytes after transaction")
    return tx


class TransactionParser:
    """Dispatches Raydium instructions of a transaction to per-kind handlers."""

    def __init__(self):
        self.instruction_parsers: Dict[InstructionKind, InstructionHandler] = {}

    def register_instruction_parser(self, kind: InstructionKind, parser_func: InstructionHandler):
        """
        注册指令解析器

        Args:
            kind: 指令类型
            parser_func: 解析函数
        """
        self.instruction_parsers[kind] = parser_func

    def parse_transaction(
        self,
        encoded: str,
        slot: int,
        token_mints: Optional[Mapping[Pubkey, Pubkey]] = None,
        loaded_addresses: Optional[Sequence[Pubkey]] = None
    ) -> ParsedTransaction:
        """
        Parse a transaction.

        Args:
            encoded: base64 wire transaction
            slot: slot the transaction landed in, supplied by the caller
            token_mints: token account -> mint, used to classify swaps
            loaded_addresses: address-lookup-table keys of a v0 transaction,
                writable first then readonly, as the RPC reports them

        Returns:
            Parsed transaction data
        """
        tx = decode_envelope(encoded)
        message = tx.message

        account_keys = list(message.account_keys)
        if loaded_addresses:
            if not isinstance(message, MessageV0):
                logger.warning("Ignoring loaded addresses for a legacy transaction")
            else:
                account_keys.extend(loaded_addresses)

        signatures = tx.signatures
        result = ParsedTransaction(
            signature=signatures[0] if signatures else Signature.default(),
            slot=slot,
            account_keys=account_keys
        )
        token_mints = token_mints or {}

        for idx, ix in enumerate(message.instructions):
            if ix.program_id_index >= len(account_keys):
                raise DecodeError(
                    f"instruction {idx} program index {ix.program_id_index} "
                    f"out of range for {len(account_keys)} account keys"
                )
            program_id = account_keys[ix.program_id_index]
            if not is_known_program(program_id):
                continue

            decoded = self._decode_instruction(idx, program_id, ix.accounts, ix.data, account_keys)
            if decoded is None:
                continue

            handler = self.instruction_parsers.get(decoded.kind)
            if handler is None:
                logger.debug(f"No parser registered for {decoded.kind.value}, skipping instruction {idx}")
                continue
            handler(decoded, result, token_mints)

        logger.debug(
            f"Parsed {result.signature} at slot {slot}: {len(result.creates)} creates, "
            f"{len(result.trades)} trades, {len(result.migrations)} migrations, "
            f"{len(result.swap_buys) + len(result.swap_sells)} swaps"
        )
        return result

    def _decode_instruction(
        self,
        index: int,
        program_id: Pubkey,
        account_indices: bytes,
        data: bytes,
        account_keys: List[Pubkey]
    ) -> Optional[DecodedInstruction]:
        """Map a known instruction's accounts to roles and decode its payload."""
        if not data:
            logger.debug(f"Instruction {index} for {program_name(program_id)} has no data")
            return None

        kind = lookup_kind(program_id, data[0])
        if kind is None:
            logger.debug(f"Unknown opcode {data[0]} for {program_name(program_id)} at instruction {index}")
            return None

        layout = LAYOUTS[kind]
        if len(account_indices) < layout.account_count:
            logger.warning(
                f"Instruction {index} ({kind.value}) has {len(account_indices)} accounts, "
                f"expected {layout.account_count}"
            )
            return None

        accounts = {}
        for spec, key_index in zip(layout.accounts, account_indices):
            if key_index >= len(account_keys):
                logger.warning(
                    f"Instruction {index} ({kind.value}) references account {key_index} "
                    f"outside the {len(account_keys)} known keys"
                )
                return None
            accounts[spec.role] = account_keys[key_index]

        try:
            args = layout.decode(data)
        except (ConstructError, ValueError) as e:
            logger.warning(f"Error decoding {kind.value} data at instruction {index}: {e}")
            return None

        return DecodedInstruction(
            index=index,
            kind=kind,
            program_id=program_id,
            accounts=accounts,
            args=args
        )
