#!/usr/bin/env python3
"""
Complete demo of the FundVault ledger
"""

from fundvault import AuthorityRegistry, FundVault, VaultParams
from fundvault.chain import BlockClock, InMemoryTransferLedger
from fundvault.principals import PrincipalKey


def main():
    print("=" * 60)
    print("🏦 FUNDVAULT LEDGER - COMPLETE DEMO")
    print("=" * 60)
    print()

    # Step 1: Setup
    print("🔧 STEP 1: Setting up principals")
    print("-" * 40)

    participants = {}
    for name in ["Authority", "Treasury", "Donor", "Recipient"]:
        key = PrincipalKey()
        participants[name] = key.principal
        print(f"✅ {name}: {key.principal[:18]}...")

    clock = BlockClock()
    transfers = InMemoryTransferLedger()
    ledger = FundVault(
        authority=AuthorityRegistry([participants["Authority"]]),
        transfers=transfers,
        clock=clock
    )
    ledger.set_authority_contract(participants["Treasury"]).unwrap()
    print(f"✅ Authority contract: {participants['Treasury'][:18]}...")
    print()

    # Step 2: Create Vault
    print("🏗️  STEP 2: Creating vault")
    print("-" * 40)

    params = VaultParams(
        name="Alpha",
        max_deposit=1_000_000,
        min_withdraw=100,
        lock_period=30,
        penalty_rate=5,
        approval_thresh=50,
        vault_type="school",
        interest_rate=10,
        grace_period=7,
        location="SchoolX",
        currency="STX",
        min_deposit=50,
        max_withdraw=500_000
    )
    vault_id = ledger.create_vault(params, participants["Authority"]).unwrap()
    vault = ledger.get_vault(vault_id)
    print(f"✅ Vault ID: {vault_id}")
    print(f"✅ Lock period: {vault.lock_period} blocks")
    print(f"✅ Creation fee paid: {ledger.authority.creation_fee:,}")
    print()

    # Step 3: Deposit and withdrawals
    print("💰 STEP 3: Deposit and lock period")
    print("-" * 40)

    ledger.deposit_to_vault(vault_id, 1_000, participants["Donor"]).unwrap()
    print(f"✅ Deposited 1,000 at height {clock.current_height()}")

    clock.set_height(29)
    result = ledger.withdraw_from_vault(vault_id, 500, participants["Recipient"], participants["Donor"])
    print(f"   Height 29 withdrawal: ❌ {result.value.name}")

    clock.set_height(31)
    result = ledger.withdraw_from_vault(vault_id, 500, participants["Recipient"], participants["Donor"])
    print(f"   Height 31 withdrawal: {'✅ SUCCESS' if result.ok else '❌ ' + result.value.name}")
    print()

    # Step 4: Summary
    print("📊 Final Statistics:")
    vault = ledger.get_vault(vault_id)
    print(f"   Vault balance: {vault.total_balance:,}")
    print(f"   Vaults created: {ledger.get_vault_count().value}")
    print(f"   Transfers issued: {len(transfers.get_transfer_history())}")
    print(f"   Commitment: {vault.commitment_hash()[:16]}...")


if __name__ == "__main__":
    main()
