import json
import os

os.environ.setdefault('DATABASE_URL', 'sqlite://')

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from MigrationExceptions import NodeNotConnectedException
from config.DataClass import NetworkConfig
from database import models
from database.DB import Base

OWNER = '0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1'
PAYROLL_ADDRESS = '0xCfEB869F69431e42cdB54A4F4f105C19C080A601'

PAYROLL_ABI = [
    {"type": "function", "name": "addNewPayee", "stateMutability": "nonpayable",
     "inputs": [{"name": "_payee", "type": "address"}, {"name": "_shares", "type": "uint256"}], "outputs": []},
    {"type": "fallback", "stateMutability": "payable"},
]


class FakeContract:
    def __init__(self, address, abi):
        self.address = address
        self.abi = abi


class FakeChainClient:
    """Records submissions in order and answers with receipts shaped like web3's."""

    def __init__(self, accounts=(OWNER,), tx_count=0, fail_on=None, connected=True):
        self._accounts = list(accounts)
        self.tx_count = tx_count
        self.fail_on = fail_on
        self.connected = connected
        self.sent = []
        self.attempts = 0

    def ensure_connected(self, network):
        if not self.connected:
            raise NodeNotConnectedException(f'Node for network "{network.name}" is not connected!')

    @property
    def accounts(self):
        return list(self._accounts)

    def get_transaction_count(self, address):
        if isinstance(self.tx_count, Exception):
            raise self.tx_count
        if self.tx_count is None:
            return None
        return self.tx_count + len(self.sent)

    def send_transaction(self, to, tx_options):
        return self._submit('transfer', to, (), tx_options)

    def transact(self, contract, method, *args, tx_options):
        return self._submit(method, contract.address, args, tx_options)

    def deploy_contract(self, abi, bytecode, tx_options):
        return self._submit('deploy', None, (bytecode,), tx_options, contract_address=PAYROLL_ADDRESS)

    def contract_at(self, abi, address):
        return FakeContract(address, abi)

    def _submit(self, kind, to, args, tx_options, contract_address=None):
        attempt = self.attempts
        self.attempts += 1
        if self.fail_on == attempt:
            raise ValueError('execution reverted')

        self.sent.append({'kind': kind, 'to': to, 'args': args, 'tx': tx_options.to_transaction()})
        return {
            'transactionHash': '0x' + format(attempt + 1, '064x'),
            'blockNumber': attempt + 1,
            'gasUsed': 21000,
            'status': 1,
            'contractAddress': contract_address,
        }


@pytest.fixture
def engine():
    engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def networks():
    return {
        'ropsten': NetworkConfig(name='ropsten', gas_price=20, chain_id=3),
        'local': NetworkConfig(name='local', gas_price=1),
    }


@pytest.fixture
def client():
    return FakeChainClient()


@pytest.fixture
def build_dir(tmp_path):
    artifact = {'contractName': 'CryptoCardsPayroll', 'abi': PAYROLL_ABI, 'bytecode': '0x6080604052'}
    (tmp_path / 'CryptoCardsPayroll.json').write_text(json.dumps(artifact))
    return str(tmp_path)


@pytest.fixture
def deployed_payroll(db):
    deployment = models.Deployment(network='local', contract_name='CryptoCardsPayroll', address=PAYROLL_ADDRESS,
                                   tx_hash='0x' + '00' * 32)
    db.add(deployment)
    db.commit()
    return deployment
