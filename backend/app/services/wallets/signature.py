from eth_account import Account
from eth_account.messages import encode_defunct

from app.errors import InvalidSignatureFormat, WalletMismatch


UPDATE_MESSAGE_TEMPLATE = 'Update request for wallet: {wallet}'


def build_update_message(wallet: str) -> str:
    """Message a wallet owner signs to authorize an update (wallet as given)."""
    return UPDATE_MESSAGE_TEMPLATE.format(wallet=wallet)


def recover_signer(message: str, signature) -> str:
    """Recover the address that produced ``signature`` over ``message``.

    The message is hashed with the EIP-191 personal-message prefix before
    public-key recovery.
    """
    if not isinstance(signature, (str, bytes)):
        raise InvalidSignatureFormat()
    try:
        return Account.recover_message(encode_defunct(text=message), signature=signature)
    except Exception as exc:
        # Bad hex, wrong length, out-of-range v/r/s all land here
        raise InvalidSignatureFormat() from exc


def verify_wallet_signature(claimed_wallet: str, signature) -> None:
    """Raise unless ``signature`` was made by ``claimed_wallet``'s key.

    Pure: no I/O, same inputs always give the same outcome.
    """
    recovered = recover_signer(build_update_message(claimed_wallet), signature)
    if recovered.lower() != claimed_wallet.lower():
        raise WalletMismatch()
