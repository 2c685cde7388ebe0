"""
Base instruction config and the built-instruction descriptor.
"""
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, ClassVar, Dict, List, Tuple

from construct import ConstructError
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from ..errors import InvalidFieldError, MissingFieldError
from ..layouts import LAYOUTS, InstructionKind, InstructionLayout

logger = logging.getLogger(__name__)

U64_MAX = 2 ** 64 - 1


@dataclass(frozen=True)
class RoleAccount:
    """An account reference tagged with its role in the instruction."""
    role: str
    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    def to_meta(self) -> AccountMeta:
        return AccountMeta(pubkey=self.pubkey, is_signer=self.is_signer, is_writable=self.is_writable)


@dataclass(frozen=True)
class BuiltInstruction:
    """Program id, ordered role-tagged accounts and payload of one instruction."""
    kind: InstructionKind
    program_id: Pubkey
    accounts: Tuple[RoleAccount, ...]
    data: bytes

    @property
    def opcode(self) -> int:
        return self.data[0]

    def account(self, role: str) -> RoleAccount:
        for acc in self.accounts:
            if acc.role == role:
                return acc
        raise KeyError(role)

    def to_instruction(self) -> Instruction:
        """Convert to a solders Instruction for the signing side."""
        return Instruction(
            program_id=self.program_id,
            data=self.data,
            accounts=[acc.to_meta() for acc in self.accounts]
        )


def _as_pubkey(field: str, value: Any) -> Pubkey:
    if isinstance(value, Pubkey):
        return value
    if isinstance(value, str):
        try:
            return Pubkey.from_string(value)
        except ValueError as e:
            raise InvalidFieldError(field, str(e)) from e
    raise InvalidFieldError(field, f"expected Pubkey or base58 string, got {type(value).__name__}")


def _check_u64(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldError(field, f"expected int, got {type(value).__name__}")
    if not 0 <= value <= U64_MAX:
        raise InvalidFieldError(field, f"{value} does not fit in u64")
    return value


@dataclass(frozen=True)
class InstructionConfig:
    """
    Immutable set of fields for one instruction.

    Field names match the role and argument names of the instruction's
    layout. Unset fields are ``None``; ``build`` refuses to emit an
    instruction until every one of them is provided.
    """
    KIND: ClassVar[InstructionKind]

    @property
    def layout(self) -> InstructionLayout:
        return LAYOUTS[self.KIND]

    def with_fields(self, **changes) -> "InstructionConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def missing_fields(self) -> List[str]:
        return [f.name for f in fields(self) if getattr(self, f.name) is None]

    def _resolve_accounts(self) -> Tuple[RoleAccount, ...]:
        accounts = []
        for spec in self.layout.accounts:
            value = spec.fixed if spec.fixed is not None else getattr(self, spec.role)
            if value is None:
                raise MissingFieldError(spec.role)
            accounts.append(RoleAccount(
                role=spec.role,
                pubkey=_as_pubkey(spec.role, value),
                is_signer=spec.is_signer,
                is_writable=spec.is_writable
            ))
        return tuple(accounts)

    def _resolve_args(self) -> Dict[str, Any]:
        args = {}
        for name in self.layout.arg_names:
            value = getattr(self, name)
            if value is None:
                raise MissingFieldError(name)
            args[name] = value
        return args

    def validate_args(self, args: Dict[str, Any]) -> None:
        """Range checks on numeric arguments; subclasses add their own."""
        for name, value in args.items():
            if not isinstance(value, str):
                _check_u64(name, value)

    def build(self) -> BuiltInstruction:
        """
        Validate the config and encode it.

        Raises:
            MissingFieldError: a required field is unset
            InvalidFieldError: a field cannot be encoded
        """
        accounts = self._resolve_accounts()
        args = self._resolve_args()
        self.validate_args(args)

        try:
            data = self.layout.encode(args)
        except ConstructError as e:
            raise InvalidFieldError(self.KIND.value, str(e)) from e

        logger.debug(
            f"Built {self.KIND.value} instruction: {len(accounts)} accounts, {len(data)} bytes"
        )
        return BuiltInstruction(
            kind=self.KIND,
            program_id=self.layout.program_id,
            accounts=accounts,
            data=data
        )
