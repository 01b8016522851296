from flask import Blueprint, jsonify, request, current_app

from app.services.wallets import apply_state_update, storage_key


users = Blueprint('users', __name__)


def _store():
    return current_app.extensions['user_state_store']


def _signature_preview(signature) -> str:
    if not isinstance(signature, str) or not signature:
        return '-'
    return signature[:10] + '...'


@users.route('/<string:wallet>', methods=['GET'])
def get_user_state(wallet):
    key = storage_key(wallet, current_app.config.get('NORMALIZE_WALLET_CASE', False))
    state, persisted = _store().get(key)
    current_app.logger.info(f"[user-read] wallet={key} persisted={persisted}")
    # A miss is still a 200; the zero-value body tells the caller
    return jsonify(state.to_dict()), 200


@users.route('/save', methods=['POST'])
def save_user_state():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        current_app.logger.info(
            f"[user-save] received wallet={data.get('wallet')} credits={data.get('credits')} "
            f"pendingTBT={data.get('pendingTBT')} signature={_signature_preview(data.get('signature'))}"
        )
    update = apply_state_update(
        data,
        _store(),
        require_signature=current_app.config.get('REQUIRE_SIGNATURE', False),
        normalize_wallet_case=current_app.config.get('NORMALIZE_WALLET_CASE', False),
    )
    if not update.signed:
        current_app.logger.warning(f"[user-save] wallet={update.wallet} saved without signature")
    else:
        current_app.logger.info(f"[user-save] wallet={update.wallet} saved")
    return jsonify({'success': True}), 200
