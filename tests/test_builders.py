import struct
from dataclasses import FrozenInstanceError

import pytest
from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.system_program import ID as SYSTEM_PROGRAM_ID
from spl.token.constants import TOKEN_PROGRAM_ID

from raydium_parser.builder import (
    BuyConfig,
    new_buy_instruction,
    new_create_token_instruction,
    new_migrate_instruction,
    new_sell_instruction,
    new_swap_instruction,
)
from raydium_parser.errors import InvalidFieldError, MissingFieldError
from raydium_parser.layouts import (
    INSTRUCTION_BUY,
    INSTRUCTION_CREATE_POOL,
    INSTRUCTION_MIGRATE,
    INSTRUCTION_SELL,
    INSTRUCTION_SWAP,
    InstructionKind,
)
from raydium_parser.registry import RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID, RAYDIUM_V4_PROGRAM_ID


class TestSwapBuilder:
    def test_build(self, swap_config):
        ix = swap_config.build()
        assert ix.kind is InstructionKind.SWAP
        assert ix.program_id == RAYDIUM_V4_PROGRAM_ID
        assert len(ix.accounts) == 18
        assert len(ix.data) == 17
        assert ix.data[0] == INSTRUCTION_SWAP
        assert struct.unpack_from("<QQ", ix.data, 1) == (1_000_000, 900_000)

    def test_account_order(self, swap_config):
        ix = swap_config.build()
        assert ix.accounts[0].pubkey == TOKEN_PROGRAM_ID
        assert ix.accounts[1].pubkey == swap_config.amm_id
        assert ix.accounts[15].pubkey == swap_config.user_source_token
        assert ix.accounts[16].pubkey == swap_config.user_dest_token
        owner = ix.accounts[17]
        assert owner.role == "user_owner"
        assert owner.pubkey == swap_config.user_owner
        assert owner.is_signer
        assert [acc.is_signer for acc in ix.accounts].count(True) == 1

    def test_missing_owner(self, swap_config):
        with pytest.raises(MissingFieldError) as exc_info:
            swap_config.with_fields(user_owner=None).build()
        assert exc_info.value.field == "user_owner"

    def test_missing_amount(self, swap_config):
        with pytest.raises(MissingFieldError) as exc_info:
            swap_config.with_fields(minimum_amount_out=None).build()
        assert exc_info.value.field == "minimum_amount_out"


class TestLaunchpadBuilders:
    def test_buy(self, buy_config, trader, launchpad_keys):
        ix = buy_config.build()
        assert ix.program_id == RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID
        assert len(ix.accounts) == 10
        assert len(ix.data) == 17
        assert ix.data[0] == INSTRUCTION_BUY
        assert struct.unpack_from("<QQ", ix.data, 1) == (1_000_000, 500_000)

        assert ix.accounts[0].pubkey == trader.pubkey()
        assert ix.accounts[0].is_signer
        assert ix.accounts[1].pubkey == launchpad_keys["token_mint"]
        assert ix.accounts[2].pubkey == launchpad_keys["amm_id"]
        assert ix.accounts[8].pubkey == TOKEN_PROGRAM_ID
        assert ix.accounts[9].pubkey == SYSTEM_PROGRAM_ID

    def test_sell(self, sell_config):
        ix = sell_config.build()
        assert ix.program_id == RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID
        assert len(ix.accounts) == 10
        assert len(ix.data) == 17
        assert ix.data[0] == INSTRUCTION_SELL
        assert struct.unpack_from("<QQ", ix.data, 1) == (1_000_000, 400_000)

    def test_create_token(self, create_config, mint_keypair):
        ix = create_config.build()
        assert ix.program_id == RAYDIUM_LAUNCHPAD_V1_PROGRAM_ID
        assert len(ix.accounts) == 6
        assert ix.data[0] == INSTRUCTION_CREATE_POOL
        assert ix.data[1] == 6
        assert struct.unpack_from("<Q", ix.data, 2)[0] == 1_000_000_000_000
        strings = b"".join(
            struct.pack("<I", len(s)) + s
            for s in (b"Test Token", b"TEST", b"https://example.com/token.json")
        )
        assert ix.data[10:] == strings
        assert ix.account("mint").pubkey == mint_keypair.pubkey()
        assert ix.account("mint").is_signer

    def test_create_token_length_follows_strings(self, create_config):
        short = create_config.with_fields(name="A", symbol="B", uri="").build()
        long = create_config.with_fields(name="A" * 32).build()
        assert len(short.data) == 1 + 1 + 8 + 12 + 2
        assert len(long.data) > len(short.data)

    @pytest.mark.parametrize("field", ["max_sol_cost", "token_mint", "user_authority", "sol_vault"])
    def test_buy_missing_field(self, buy_config, field):
        with pytest.raises(MissingFieldError) as exc_info:
            buy_config.with_fields(**{field: None}).build()
        assert exc_info.value.field == field

    def test_create_missing_name(self, create_config):
        with pytest.raises(MissingFieldError, match="name"):
            create_config.with_fields(name=None).build()


class TestMigrateBuilder:
    def test_build(self, migrate_config):
        ix = migrate_config.build()
        assert ix.program_id == RAYDIUM_V4_PROGRAM_ID
        assert len(ix.accounts) == 5
        assert len(ix.data) == 9
        assert ix.data[0] == INSTRUCTION_MIGRATE
        assert ix.data[1:] == (1_000_000).to_bytes(8, "little")

    def test_missing_to_pool(self, migrate_config):
        with pytest.raises(MissingFieldError, match="to_pool"):
            migrate_config.with_fields(to_pool=None).build()


def test_empty_configs_fail():
    for factory in (
        new_swap_instruction,
        new_buy_instruction,
        new_sell_instruction,
        new_create_token_instruction,
        new_migrate_instruction,
    ):
        with pytest.raises(MissingFieldError):
            factory().build()


def test_last_value_wins(buy_config):
    config = buy_config.with_fields(amount=1).with_fields(amount=2)
    assert config.amount == 2
    assert struct.unpack_from("<Q", config.build().data, 1)[0] == 2


def test_configs_are_immutable(buy_config):
    with pytest.raises(FrozenInstanceError):
        buy_config.amount = 5
    changed = buy_config.with_fields(amount=5)
    assert buy_config.amount == 1_000_000
    assert changed.amount == 5


def test_factory_accepts_base58_strings(launchpad_keys):
    fields = {k: str(v) for k, v in launchpad_keys.items()}
    config = new_buy_instruction(
        user_authority="HN7cABqLq46Es1jh92dQQisAq662SmxELLLsHHe4YWrH",
        amount=2000,
        max_sol_cost=1000,
        **fields
    )
    assert isinstance(config, BuyConfig)
    ix = config.build()
    assert ix.accounts[0].pubkey == Pubkey.from_string("HN7cABqLq46Es1jh92dQQisAq662SmxELLLsHHe4YWrH")


class TestInvalidFields:
    def test_bad_pubkey(self, buy_config):
        with pytest.raises(InvalidFieldError) as exc_info:
            buy_config.with_fields(token_mint="not a key").build()
        assert exc_info.value.field == "token_mint"

    def test_wrong_key_type(self, buy_config):
        with pytest.raises(InvalidFieldError):
            buy_config.with_fields(amm_id=12345).build()

    def test_negative_amount(self, buy_config):
        with pytest.raises(InvalidFieldError, match="amount"):
            buy_config.with_fields(amount=-1).build()

    def test_amount_overflow(self, swap_config):
        with pytest.raises(InvalidFieldError, match="amount_in"):
            swap_config.with_fields(amount_in=2 ** 64).build()

    def test_float_amount(self, migrate_config):
        with pytest.raises(InvalidFieldError):
            migrate_config.with_fields(amount=1.5).build()

    def test_decimals_overflow(self, create_config):
        with pytest.raises(InvalidFieldError, match="decimals"):
            create_config.with_fields(decimals=256).build()

    def test_bytes_name(self, create_config):
        with pytest.raises(InvalidFieldError, match="expected str, got bytes") as exc_info:
            create_config.with_fields(name=b"abc").build()
        assert exc_info.value.field == "name"

    def test_symbol_too_long(self, create_config):
        with pytest.raises(InvalidFieldError, match="symbol"):
            create_config.with_fields(symbol="X" * 11).build()


def test_to_instruction(buy_config):
    built = buy_config.build()
    ix = built.to_instruction()
    assert isinstance(ix, Instruction)
    assert ix.program_id == built.program_id
    assert bytes(ix.data) == built.data
    assert [meta.pubkey for meta in ix.accounts] == [acc.pubkey for acc in built.accounts]
    assert ix.accounts[0].is_signer


def test_missing_fields_lists_unset_fields():
    config = new_migrate_instruction(amount=1, to_pool=Pubkey.new_unique())
    assert config.missing_fields() == ["user_authority", "from_pool", "token_account"]


FULL_CONFIGS = {
    "swap_config": new_swap_instruction,
    "buy_config": new_buy_instruction,
    "sell_config": new_sell_instruction,
    "create_config": new_create_token_instruction,
    "migrate_config": new_migrate_instruction,
}

REQUIRED_FIELDS = [
    (fixture, field)
    for fixture, factory in FULL_CONFIGS.items()
    for field in factory().missing_fields()
]


@pytest.mark.parametrize("fixture,field", REQUIRED_FIELDS)
def test_every_required_field_is_enforced(request, fixture, field):
    config = request.getfixturevalue(fixture)
    config.build()
    with pytest.raises(MissingFieldError) as exc_info:
        config.with_fields(**{field: None}).build()
    assert exc_info.value.field == field
