"""Native stake program instructions.

Instruction data is the bincode encoding of the StakeInstruction enum:
a little-endian u32 variant index followed by the variant fields.
"""

import struct

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import CreateAccountParams, create_account

STAKE_PROGRAM_ID = Pubkey.from_string("Stake11111111111111111111111111111111111111")
STAKE_CONFIG_ID = Pubkey.from_string("StakeConfig11111111111111111111111111111111")

SYSVAR_CLOCK = Pubkey.from_string("SysvarC1ock11111111111111111111111111111111")
SYSVAR_RENT = Pubkey.from_string("SysvarRent111111111111111111111111111111111")
SYSVAR_STAKE_HISTORY = Pubkey.from_string("SysvarStakeHistory1111111111111111111111111")

# Size of a stake account (StakeStateV2)
STAKE_ACCOUNT_SPACE = 200

# Offset of the authorized staker within stake account data
# (4-byte state tag + 8-byte rent_exempt_reserve)
STAKER_OFFSET = 12

INITIALIZE = 0
DELEGATE_STAKE = 2
WITHDRAW = 4
DEACTIVATE = 5


def _meta(pubkey: Pubkey, is_signer: bool = False, is_writable: bool = False) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=is_signer, is_writable=is_writable)


def initialize(
    stake_pubkey: Pubkey,
    staker: Pubkey,
    withdrawer: Pubkey,
    custodian: Pubkey,
    lockup_unix_timestamp: int = 0,
    lockup_epoch: int = 0,
) -> Instruction:
    """Initialize a stake account with its authorities and lockup."""
    data = (
        struct.pack("<I", INITIALIZE)
        + bytes(staker)
        + bytes(withdrawer)
        + struct.pack("<qQ", lockup_unix_timestamp, lockup_epoch)
        + bytes(custodian)
    )
    return Instruction(
        STAKE_PROGRAM_ID,
        data,
        [
            _meta(stake_pubkey, is_writable=True),
            _meta(SYSVAR_RENT),
        ],
    )


def create_stake_account(
    from_pubkey: Pubkey,
    stake_pubkey: Pubkey,
    authority: Pubkey,
    lamports: int,
) -> list[Instruction]:
    """Allocate, fund and initialize a stake account.

    The authority becomes staker, withdrawer and lockup custodian; lockup is
    disabled (timestamp 0, epoch 0).
    """
    create_ix = create_account(
        CreateAccountParams(
            from_pubkey=from_pubkey,
            to_pubkey=stake_pubkey,
            lamports=lamports,
            space=STAKE_ACCOUNT_SPACE,
            owner=STAKE_PROGRAM_ID,
        )
    )
    init_ix = initialize(stake_pubkey, authority, authority, authority)
    return [create_ix, init_ix]


def delegate_stake(stake_pubkey: Pubkey, authority: Pubkey, vote_pubkey: Pubkey) -> Instruction:
    """Delegate a stake account to a validator vote account."""
    return Instruction(
        STAKE_PROGRAM_ID,
        struct.pack("<I", DELEGATE_STAKE),
        [
            _meta(stake_pubkey, is_writable=True),
            _meta(vote_pubkey),
            _meta(SYSVAR_CLOCK),
            _meta(SYSVAR_STAKE_HISTORY),
            _meta(STAKE_CONFIG_ID),
            _meta(authority, is_signer=True),
        ],
    )


def deactivate(stake_pubkey: Pubkey, authority: Pubkey) -> Instruction:
    """Deactivate a delegated stake account."""
    return Instruction(
        STAKE_PROGRAM_ID,
        struct.pack("<I", DEACTIVATE),
        [
            _meta(stake_pubkey, is_writable=True),
            _meta(SYSVAR_CLOCK),
            _meta(authority, is_signer=True),
        ],
    )


def withdraw(
    stake_pubkey: Pubkey,
    authority: Pubkey,
    to_pubkey: Pubkey,
    lamports: int,
) -> Instruction:
    """Withdraw lamports from a stake account."""
    return Instruction(
        STAKE_PROGRAM_ID,
        struct.pack("<IQ", WITHDRAW, lamports),
        [
            _meta(stake_pubkey, is_writable=True),
            _meta(to_pubkey, is_writable=True),
            _meta(SYSVAR_CLOCK),
            _meta(SYSVAR_STAKE_HISTORY),
            _meta(authority, is_signer=True),
        ],
    )
