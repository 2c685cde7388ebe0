"""Shared pytest fixtures for the raydium-parser test-suite."""
import base64
from typing import Dict, Sequence

import pytest
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from raydium_parser import config
from raydium_parser.builder import (
    BuyConfig,
    CreateTokenConfig,
    MigrateConfig,
    SellConfig,
    SwapConfig,
)
from raydium_parser.registry import USDC_MINT

WSOL = Pubkey.from_string("So11111111111111111111111111111111111111112")
SERUM_PROGRAM = Pubkey.from_string("srmqPvymJeFKQ4zGQed1GFppgkRHL9kaELCbyksJtPX")


@pytest.fixture(scope="session", autouse=True)
def test_logging():
    config.setup_logging("DEBUG")


def encode(tx) -> str:
    return base64.b64encode(bytes(tx)).decode()


def signed_transaction(instructions: Sequence[Instruction], payer: Keypair, *signers: Keypair) -> str:
    """Sign with ``payer`` plus any extra signers and base64 encode."""
    message = Message.new_with_blockhash(instructions, payer.pubkey(), Hash.default())
    tx = Transaction([payer, *signers], message, Hash.default())
    return encode(tx)


@pytest.fixture
def trader() -> Keypair:
    return Keypair()


@pytest.fixture
def launchpad_keys() -> Dict[str, Pubkey]:
    return {
        "token_mint": Pubkey.new_unique(),
        "amm_id": Pubkey.new_unique(),
        "amm_authority": Pubkey.new_unique(),
        "user_token_account": Pubkey.new_unique(),
        "user_sol_account": Pubkey.new_unique(),
        "token_vault": Pubkey.new_unique(),
        "sol_vault": Pubkey.new_unique(),
    }


@pytest.fixture
def buy_config(trader, launchpad_keys) -> BuyConfig:
    return BuyConfig(
        user_authority=trader.pubkey(),
        amount=1_000_000,
        max_sol_cost=500_000,
        **launchpad_keys
    )


@pytest.fixture
def sell_config(trader, launchpad_keys) -> SellConfig:
    return SellConfig(
        user_authority=trader.pubkey(),
        amount=1_000_000,
        min_sol_received=400_000,
        **launchpad_keys
    )


@pytest.fixture
def mint_keypair() -> Keypair:
    return Keypair()


@pytest.fixture
def create_config(trader, mint_keypair) -> CreateTokenConfig:
    return CreateTokenConfig(
        payer=trader.pubkey(),
        mint=mint_keypair.pubkey(),
        mint_authority=Pubkey.new_unique(),
        freeze_authority=Pubkey.new_unique(),
        decimals=6,
        name="Test Token",
        symbol="TEST",
        uri="https://example.com/token.json",
        initial_supply=1_000_000_000_000
    )


@pytest.fixture
def swap_config(trader) -> SwapConfig:
    return SwapConfig(
        amm_id=Pubkey.new_unique(),
        amm_authority=Pubkey.new_unique(),
        amm_open_orders=Pubkey.new_unique(),
        amm_target_orders=Pubkey.new_unique(),
        pool_coin_token=Pubkey.new_unique(),
        pool_pc_token=Pubkey.new_unique(),
        serum_program=SERUM_PROGRAM,
        serum_market=Pubkey.new_unique(),
        serum_bids=Pubkey.new_unique(),
        serum_asks=Pubkey.new_unique(),
        serum_event_queue=Pubkey.new_unique(),
        serum_coin_vault=Pubkey.new_unique(),
        serum_pc_vault=Pubkey.new_unique(),
        serum_vault_signer=Pubkey.new_unique(),
        user_source_token=WSOL,
        user_dest_token=USDC_MINT,
        user_owner=trader.pubkey(),
        amount_in=1_000_000,
        minimum_amount_out=900_000
    )


@pytest.fixture
def migrate_config(trader) -> MigrateConfig:
    return MigrateConfig(
        user_authority=trader.pubkey(),
        from_pool=Pubkey.new_unique(),
        to_pool=Pubkey.new_unique(),
        token_account=Pubkey.new_unique(),
        amount=1_000_000
    )
