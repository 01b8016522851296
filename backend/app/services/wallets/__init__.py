"""Wallet state services: signature checks, persistence and updates.

Routes import from here so HTTP handling stays separate from the
ownership check and the upsert rules.
"""

from .signature import build_update_message, verify_wallet_signature
from .store import UserStateStore
from .updates import StateUpdate, apply_state_update, storage_key

__all__ = [
    'build_update_message',
    'verify_wallet_signature',
    'UserStateStore',
    'StateUpdate',
    'apply_state_update',
    'storage_key',
]
