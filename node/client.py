from web3 import Web3, HTTPProvider
from web3.middleware import ExtraDataToPOAMiddleware

from MigrationExceptions import NodeNotConnectedException, NetworkMismatchException, TransactionFailedException
from config import settings
from config.DataClass import NetworkConfig
from node.DataClass import TransactionOptions


class ChainClient:
    def __init__(self, w3: Web3):
        self.w3 = w3

    @classmethod
    def connect(cls, network: NetworkConfig) -> 'ChainClient':
        w3 = Web3(HTTPProvider(settings.rpc_url_for(network.rpc_env)))
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
        return cls(w3)

    def ensure_connected(self, network: NetworkConfig) -> None:
        if self.w3.is_connected() is False:
            raise NodeNotConnectedException(f'Node for network "{network.name}" is not connected!')

        if network.chain_id is not None:
            chain_id = self.w3.eth.chain_id
            if chain_id != network.chain_id:
                raise NetworkMismatchException(
                    f'Node reports chain id {chain_id}, network "{network.name}" expects {network.chain_id}')

    @property
    def accounts(self) -> list:
        return list(self.w3.eth.accounts)

    def get_transaction_count(self, address: str) -> int:
        return self.w3.eth.get_transaction_count(Web3.to_checksum_address(address))

    def send_transaction(self, to: str, tx_options: TransactionOptions):
        tx = tx_options.to_transaction()
        tx['to'] = Web3.to_checksum_address(to)
        return self._wait(self.w3.eth.send_transaction(tx))

    def transact(self, contract, method: str, *args, tx_options: TransactionOptions):
        tx_hash = getattr(contract.functions, method)(*args).transact(tx_options.to_transaction())
        return self._wait(tx_hash)

    def deploy_contract(self, abi: list, bytecode: str, tx_options: TransactionOptions):
        factory = self.w3.eth.contract(abi=abi, bytecode=bytecode)
        return self._wait(factory.constructor().transact(tx_options.to_transaction()))

    def contract_at(self, abi: list, address: str):
        return self.w3.eth.contract(abi=abi, address=Web3.to_checksum_address(address))

    def _wait(self, tx_hash):
        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt.get('status') == 0:
            raise TransactionFailedException(f'Transaction {Web3.to_hex(tx_hash)} was reverted.')
        return receipt


def get_client_factory():
    return ChainClient.connect
