"""
Consistency checks over a parsed transaction.

Every check runs on every call and reports what it finds; nothing here
raises. An empty list means no issues were found.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List

from solders.signature import Signature

from . import config
from .parser.base import ParsedTransaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str

    def __str__(self):
        return f"{self.code}: {self.message}"


Check = Callable[[ParsedTransaction], List[ValidationIssue]]


def check_signature(tx: ParsedTransaction) -> List[ValidationIssue]:
    if not isinstance(tx.signature, Signature):
        return [ValidationIssue("signature", f"signature has type {type(tx.signature).__name__}")]
    if tx.signature == Signature.default():
        return [ValidationIssue("signature", "signature is all zero")]
    return []


def check_slot(tx: ParsedTransaction) -> List[ValidationIssue]:
    slot = tx.slot
    if isinstance(slot, bool) or not isinstance(slot, int):
        return [ValidationIssue("slot", f"slot has type {type(slot).__name__}")]
    if not config.MIN_PLAUSIBLE_SLOT <= slot <= config.MAX_PLAUSIBLE_SLOT:
        return [ValidationIssue(
            "slot",
            f"slot {slot} outside [{config.MIN_PLAUSIBLE_SLOT}, {config.MAX_PLAUSIBLE_SLOT}]"
        )]
    return []


def check_trade_indices(tx: ParsedTransaction) -> List[ValidationIssue]:
    issues = []
    count = len(tx.trades)
    for name, indices in (("trade_buys", tx.trade_buys), ("trade_sells", tx.trade_sells)):
        for idx in indices:
            if not 0 <= idx < count:
                issues.append(ValidationIssue(
                    "trade_index", f"{name} index {idx} out of range for {count} trades"
                ))
    return issues


def check_trade_partition(tx: ParsedTransaction) -> List[ValidationIssue]:
    """Each trade is indexed exactly once, in the set matching its direction."""
    issues = []
    buys, sells = set(tx.trade_buys), set(tx.trade_sells)

    if len(buys) != len(tx.trade_buys) or len(sells) != len(tx.trade_sells):
        issues.append(ValidationIssue("trade_partition", "duplicate index in trade_buys or trade_sells"))
    for idx in sorted(buys & sells):
        issues.append(ValidationIssue("trade_partition", f"trade {idx} is both a buy and a sell"))

    for idx, trade in enumerate(tx.trades):
        if idx not in buys and idx not in sells:
            issues.append(ValidationIssue("trade_partition", f"trade {idx} is in neither trade_buys nor trade_sells"))
        elif trade.is_buy and idx in sells and idx not in buys:
            issues.append(ValidationIssue("trade_direction", f"buy trade {idx} indexed as a sell"))
        elif not trade.is_buy and idx in buys and idx not in sells:
            issues.append(ValidationIssue("trade_direction", f"sell trade {idx} indexed as a buy"))
    return issues


def check_amounts(tx: ParsedTransaction) -> List[ValidationIssue]:
    issues = []
    for idx, trade in enumerate(tx.trades):
        if trade.token_amount <= 0:
            issues.append(ValidationIssue("amount", f"trade {idx} has token amount {trade.token_amount}"))
    for idx, migration in enumerate(tx.migrations):
        if migration.amount <= 0:
            issues.append(ValidationIssue("amount", f"migration {idx} has amount {migration.amount}"))
    for swap in tx.swap_buys + tx.swap_sells:
        if swap.amount_in <= 0:
            issues.append(ValidationIssue(
                "amount", f"swap at instruction {swap.instruction_index} has amount_in {swap.amount_in}"
            ))
    return issues


def check_creates(tx: ParsedTransaction) -> List[ValidationIssue]:
    issues = []
    seen = set()
    for create in tx.creates:
        if create.mint in seen:
            issues.append(ValidationIssue("create", f"mint {create.mint} created more than once"))
        seen.add(create.mint)
    return issues


def check_migrations(tx: ParsedTransaction) -> List[ValidationIssue]:
    return [
        ValidationIssue("migration", f"migration {idx} moves liquidity from {m.from_pool} to itself")
        for idx, m in enumerate(tx.migrations)
        if m.from_pool == m.to_pool
    ]


def check_ordering(tx: ParsedTransaction) -> List[ValidationIssue]:
    """Records appear in the order of their instructions."""
    issues = []
    accumulators = {
        "creates": tx.creates,
        "trades": tx.trades,
        "migrations": tx.migrations,
        "swap_buys": tx.swap_buys,
        "swap_sells": tx.swap_sells,
    }
    for name, records in accumulators.items():
        positions = [r.instruction_index for r in records]
        if positions != sorted(positions):
            issues.append(ValidationIssue("ordering", f"{name} out of instruction order: {positions}"))
    return issues


CHECKS: List[Check] = [
    check_signature,
    check_slot,
    check_trade_indices,
    check_trade_partition,
    check_amounts,
    check_creates,
    check_migrations,
    check_ordering,
]


def validate_transaction(tx: ParsedTransaction) -> List[ValidationIssue]:
    """
    Run every check against ``tx``.

    Args:
        tx: parsed transaction, not modified

    Returns:
        all issues found, in check order
    """
    issues = []
    for check in CHECKS:
        try:
            issues.extend(check(tx))
        except Exception as e:
            logger.warning(f"Validation check {check.__name__} failed: {e}")
            issues.append(ValidationIssue("check_error", f"{check.__name__} raised {type(e).__name__}: {e}"))
    return issues
