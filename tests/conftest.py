from __future__ import annotations

import pytest
from factom_fer.address import EntryCreditKey
from factom_fer.config import FERConfig
from factom_fer.signers import Ed25519Signer

# RFC 8032 section 7.1, TEST 1: seed ++ public key.
RFC8032_SEED = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"
RFC8032_PUBLIC = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"
RFC8032_EMPTY_SIG = (
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065"
    "224901555fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)
SIGNING_KEY_HEX = RFC8032_SEED + RFC8032_PUBLIC
PAYMENT_KEY_HEX = "11" * 32
TIMESTAMP_MS = 1_500_000_000_000


@pytest.fixture
def signer() -> Ed25519Signer:
    return Ed25519Signer.from_hex(SIGNING_KEY_HEX)


@pytest.fixture
def payer() -> EntryCreditKey:
    return EntryCreditKey.from_hex(PAYMENT_KEY_HEX)


@pytest.fixture
def config() -> FERConfig:
    return FERConfig(
        payment_private_key=PAYMENT_KEY_HEX,
        signing_private_key=SIGNING_KEY_HEX,
        version="1.0",
    )
