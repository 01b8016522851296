"""Error taxonomy for wallet state requests.

Every error carries the message returned to the caller, a short machine
code, and the HTTP status it maps to. ``register_error_handlers`` turns
them into ``{"error": message}`` responses.
"""

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException


class UserStateError(Exception):
    status_code = 500
    code = 'INTERNAL_ERROR'
    default_message = 'Internal error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(UserStateError):
    status_code = 400
    code = 'VALIDATION_ERROR'
    default_message = 'Invalid request'


class InvalidPayload(ValidationError):
    code = 'INVALID_PAYLOAD'
    default_message = 'Request body must be a JSON object'


class MissingWallet(ValidationError):
    code = 'MISSING_WALLET'
    default_message = 'Wallet is required'


class InvalidCredits(ValidationError):
    code = 'INVALID_CREDITS'
    default_message = 'Credits must be a finite, non-negative number'


class AuthorizationError(UserStateError):
    status_code = 401
    code = 'UNAUTHORIZED'
    default_message = 'Unauthorized'


class MissingSignature(AuthorizationError):
    code = 'MISSING_SIGNATURE'
    default_message = 'Signature is required'


class InvalidSignatureFormat(AuthorizationError):
    code = 'INVALID_SIGNATURE'
    default_message = 'Invalid signature'


class WalletMismatch(AuthorizationError):
    code = 'WALLET_MISMATCH'
    default_message = 'Signature does not match wallet'


class PersistenceError(UserStateError):
    code = 'PERSISTENCE_ERROR'
    default_message = 'Failed to save data'


StoreError = PersistenceError


def register_error_handlers(flask_app):
    @flask_app.errorhandler(UserStateError)
    def handle_user_state_error(exc):
        if isinstance(exc, PersistenceError):
            # Detail was logged where the failure happened
            current_app.logger.warning(f"[error] {exc.code} status={exc.status_code}")
        else:
            current_app.logger.info(f"[error] {exc.code} status={exc.status_code}: {exc.message}")
        return jsonify({'error': exc.message}), exc.status_code

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        # 404/405 and friends keep their own status
        if isinstance(exc, HTTPException):
            return jsonify({'error': exc.description}), exc.code
        current_app.logger.error(f"[error] unhandled {type(exc).__name__}: {exc}", exc_info=True)
        return jsonify({'error': 'Internal server error'}), 500
