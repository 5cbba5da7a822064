from unittest import mock

import pytest
from web3 import Web3

from MigrationExceptions import NetworkMismatchException, NodeNotConnectedException, TransactionFailedException
from config.DataClass import NetworkConfig
from node.DataClass import TransactionOptions
from node.client import ChainClient

from conftest import OWNER, PAYROLL_ADDRESS

ROPSTEN = NetworkConfig(name='ropsten', gas_price=20, chain_id=3)


def make_client(status=1, chain_id=3, connected=True):
    w3 = mock.Mock()
    w3.is_connected.return_value = connected
    w3.eth.chain_id = chain_id
    w3.eth.accounts = [OWNER]
    w3.eth.send_transaction.return_value = b'\xab' * 32
    w3.eth.wait_for_transaction_receipt.return_value = {'transactionHash': b'\xab' * 32, 'status': status}
    return ChainClient(w3), w3


def test_ensure_connected():
    client, _ = make_client()
    client.ensure_connected(ROPSTEN)

    client, _ = make_client(connected=False)
    with pytest.raises(NodeNotConnectedException):
        client.ensure_connected(ROPSTEN)


def test_chain_id_must_match_network():
    client, _ = make_client(chain_id=1)

    with pytest.raises(NetworkMismatchException):
        client.ensure_connected(ROPSTEN)


def test_send_transaction_adds_recipient():
    client, w3 = make_client()
    tx_options = TransactionOptions(sender=OWNER, nonce=4, gas_price=20, value=10)

    receipt = client.send_transaction(PAYROLL_ADDRESS.lower(), tx_options)

    assert receipt['status'] == 1
    w3.eth.send_transaction.assert_called_once_with(
        {'from': OWNER, 'nonce': 4, 'gasPrice': 20, 'value': 10, 'to': Web3.to_checksum_address(PAYROLL_ADDRESS)})


def test_transact_calls_contract_method():
    client, w3 = make_client()
    contract = mock.Mock()
    tx_options = TransactionOptions(sender=OWNER, nonce=5, gas_price=20)

    client.transact(contract, 'addNewPayee', PAYROLL_ADDRESS, 50, tx_options=tx_options)

    contract.functions.addNewPayee.assert_called_once_with(PAYROLL_ADDRESS, 50)
    contract.functions.addNewPayee.return_value.transact.assert_called_once_with(
        {'from': OWNER, 'nonce': 5, 'gasPrice': 20})


def test_reverted_receipt_raises():
    client, _ = make_client(status=0)

    with pytest.raises(TransactionFailedException):
        client.send_transaction(PAYROLL_ADDRESS, TransactionOptions(sender=OWNER, nonce=0, gas_price=20))
