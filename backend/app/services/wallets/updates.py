import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from app.errors import InvalidCredits, InvalidPayload, MissingSignature, MissingWallet
from .signature import verify_wallet_signature


MAX_CREDIT_DIGITS = 15


@dataclass(frozen=True)
class StateUpdate:
    wallet: str
    credits: Decimal
    pending_tbt: str
    signed: bool


def storage_key(wallet: str, normalize_case: bool = False) -> str:
    return wallet.lower() if normalize_case else wallet


def parse_credits(value) -> Decimal:
    """Coerce a number or numeric string into a finite, non-negative Decimal."""
    # bool is an int subclass; true/false are not credit amounts
    if isinstance(value, bool):
        raise InvalidCredits()
    if isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidCredits()
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidCredits()
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            raise InvalidCredits()
    else:
        raise InvalidCredits()
    if not parsed.is_finite() or parsed < 0:
        raise InvalidCredits()
    # The NUMERIC column reads back through float; keep within its range and precision
    if not math.isfinite(float(parsed)):
        raise InvalidCredits()
    if len(parsed.normalize().as_tuple().digits) > MAX_CREDIT_DIGITS:
        raise InvalidCredits()
    return parsed


def normalize_pending_tbt(value) -> str:
    """Return the pendingTBT string to store; anything unusable becomes "0"."""
    if not isinstance(value, str):
        return '0'
    text = value.strip()
    if not text:
        return '0'
    try:
        if not Decimal(text).is_finite():
            return '0'
    except InvalidOperation:
        return '0'
    return text


def apply_state_update(payload, store, *, require_signature=False, normalize_wallet_case=False) -> StateUpdate:
    """Validate an untrusted write request and upsert it.

    Checks run in order and stop at the first failure: wallet, credits,
    then the signature (when one is supplied, or always when
    ``require_signature`` is set). pendingTBT never fails; it is
    normalized instead. Nothing is written unless every check passes.
    """
    if not isinstance(payload, dict):
        raise InvalidPayload()

    wallet = payload.get('wallet')
    if not isinstance(wallet, str) or not wallet.strip():
        raise MissingWallet()

    credits = parse_credits(payload.get('credits'))
    pending_tbt = normalize_pending_tbt(payload.get('pendingTBT'))

    signature = payload.get('signature')
    signed = False
    if signature is None or signature == '':
        if require_signature:
            raise MissingSignature()
    else:
        # The signed message carries the wallet exactly as the caller sent it
        verify_wallet_signature(wallet, signature)
        signed = True

    key = storage_key(wallet, normalize_wallet_case)
    store.upsert(key, credits, pending_tbt)
    return StateUpdate(wallet=key, credits=credits, pending_tbt=pending_tbt, signed=signed)
