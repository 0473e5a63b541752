"""
End-to-end example: FER entry signing, commit/reveal composition and verification

This script demonstrates:
- Building and signing an FER entry
- Deriving the paying Entry Credit address
- Composing the commit and the reveal
- Verifying the pair and decoding the address again

Keys are fixed demo values; never use them on a real network.
"""

from factom_fer.address import EntryCreditKey, decode_address
from factom_fer.compose import compose
from factom_fer.entry import build_entry
from factom_fer.signers import Ed25519Signer, sign_entry
from factom_fer.verify import verify_composition

# 1. Keys: 64-byte detached signing key (seed ++ public half) and 32-byte payment key
signer = Ed25519Signer.from_hex("01" * 32 + "00" * 32)
payer = EntryCreditKey.from_hex("02" * 32)

# 2. Build the entry and sign its canonical bytes
entry = build_entry(100000, 100005, 1, 125000, "1.0")
signed = sign_entry(entry, signer)
print("Canonical entry:", signed.canonical_bytes.decode())

# 3. Compose commit + reveal
composition = compose(signed, payer)
print("Commit:", composition.commit_json())
print("Reveal:", composition.reveal_json())
print(f"Implied price: ${composition.implied_price:.2f}")

# 4. Verify the pair
ok, reason = verify_composition(composition, signer.public_key_bytes())
print("Composition verification:", ok, reason)

# 5. Decode the paying address back to its public key
address = payer.pub_string()
print("EC address:", address, decode_address(address).payload.hex())
