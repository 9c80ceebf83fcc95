#!/usr/bin/env python3
"""
HTTP interface for the FundVault ledger
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request

from .chain.clock import BlockClock
from .config import LedgerConfig, configure_logging
from .errors import ErrorCode, Result
from .ledger import FundVault
from .principals import PrincipalKey
from .vault import VaultParams, parse_int

logger = logging.getLogger(__name__)

BAD_REQUEST_ERRORS = (KeyError, TypeError, ValueError)


def _respond(result: Result, status: int = 200):
    if result.ok:
        return jsonify(result.to_dict()), status
    code = 404 if result.value == ErrorCode.VAULT_NOT_FOUND else 400
    return jsonify(result.to_dict()), code


def _bad_request(e: Exception):
    logger.warning("Malformed request to %s: %r", request.path, e)
    return jsonify({'success': False, 'error': f"Malformed request: {e}"}), 400


def _vault_json(vault_id: int, ledger: FundVault) -> Optional[dict]:
    vault = ledger.get_vault(vault_id)
    if vault is None:
        return None
    info = vault.to_dict()
    info['vault_id'] = vault_id
    info['commitment_hash'] = vault.commitment_hash()
    return info


def create_app(ledger: Optional[FundVault] = None, config: Optional[LedgerConfig] = None) -> Flask:
    """Build the Flask app around a ledger (one is created from config when omitted)"""
    config = config or LedgerConfig.from_env()
    if ledger is None:
        ledger = FundVault.from_config(config, clock=BlockClock())

    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config['LEDGER'] = ledger

    @app.route('/api/authority/contract', methods=['POST'])
    def set_authority_contract():
        try:
            principal = request.get_json(silent=True)['principal']
        except BAD_REQUEST_ERRORS as e:
            return _bad_request(e)
        return _respond(ledger.set_authority_contract(principal))

    @app.route('/api/authority/fee', methods=['POST'])
    def set_creation_fee():
        try:
            fee = parse_int(request.get_json(silent=True)['fee'], 'fee')
        except BAD_REQUEST_ERRORS as e:
            return _bad_request(e)
        return _respond(ledger.set_creation_fee(fee))

    @app.route('/api/vaults', methods=['POST'])
    def create_vault():
        """Create new vault"""
        try:
            data = request.get_json(silent=True)
            params = VaultParams.from_dict(data)
            caller = data['caller']
        except BAD_REQUEST_ERRORS as e:
            return _bad_request(e)

        result = ledger.create_vault(params, caller)
        if not result.ok:
            return _respond(result)
        return jsonify({
            'success': True,
            'vault_id': result.value,
            'vault': _vault_json(result.value, ledger)
        }), 201

    @app.route('/api/vaults/count')
    def get_vault_count():
        return _respond(ledger.get_vault_count())

    @app.route('/api/vaults/exists')
    def check_vault_existence():
        name = request.args.get('name', '')
        return _respond(ledger.check_vault_existence(name))

    @app.route('/api/vaults/<int:vault_id>')
    def get_vault(vault_id):
        """Get vault information"""
        info = _vault_json(vault_id, ledger)
        if info is None:
            return _respond(Result.failure(ErrorCode.VAULT_NOT_FOUND))
        return jsonify(info)

    @app.route('/api/vaults/<int:vault_id>', methods=['PUT'])
    def update_vault(vault_id):
        try:
            data = request.get_json(silent=True)
            result = ledger.update_vault(
                vault_id,
                data['name'],
                parse_int(data['max_deposit'], 'max_deposit'),
                parse_int(data['min_withdraw'], 'min_withdraw'),
                data['caller']
            )
        except BAD_REQUEST_ERRORS as e:
            return _bad_request(e)
        return _respond(result)

    @app.route('/api/vaults/<int:vault_id>/deposit', methods=['POST'])
    def deposit(vault_id):
        try:
            data = request.get_json(silent=True)
            result = ledger.deposit_to_vault(vault_id, parse_int(data['amount'], 'amount'), data['caller'])
        except BAD_REQUEST_ERRORS as e:
            return _bad_request(e)
        return _respond(result)

    @app.route('/api/vaults/<int:vault_id>/withdraw', methods=['POST'])
    def withdraw(vault_id):
        """Withdraw from vault to a recipient"""
        try:
            data = request.get_json(silent=True)
            amount = parse_int(data['amount'], 'amount')
            recipient = data['recipient']
            caller = data['caller']
        except BAD_REQUEST_ERRORS as e:
            return _bad_request(e)

        # Read the log and balance written by this withdrawal, not a later one
        with ledger.lock:
            result = ledger.withdraw_from_vault(vault_id, amount, recipient, caller)
            if not result.ok:
                return _respond(result)
            withdrawal = ledger.store.last_withdrawal(vault_id, caller)
            remaining = ledger.get_vault(vault_id).total_balance

        return jsonify({
            'success': True,
            'withdrawal_amount': withdrawal.amount,
            'penalty': withdrawal.penalty,
            'remaining_balance': remaining
        })

    @app.route('/api/clock/advance', methods=['POST'])
    def advance_clock():
        try:
            blocks = parse_int((request.get_json(silent=True) or {}).get('blocks', 1), 'blocks')
            with ledger.lock:
                height = ledger.clock.advance(blocks)
        except BAD_REQUEST_ERRORS as e:
            return _bad_request(e)
        return jsonify({'success': True, 'height': height})

    @app.route('/api/principals', methods=['POST'])
    def create_principal():
        """Generate a fresh principal key pair"""
        key = PrincipalKey()
        return jsonify({
            'success': True,
            'principal': key.principal,
            'public_key': key.get_public_key_hex(),
            'private_key': key.private_key.to_string().hex()
        }), 201

    return app


if __name__ == "__main__":
    config = LedgerConfig.from_env()
    configure_logging(config.log_level)
    create_app(config=config).run(
        host="0.0.0.0",
        port=config.port,
        debug=False
    )
