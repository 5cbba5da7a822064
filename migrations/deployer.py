import json
import os
from json import JSONDecodeError
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from MigrationExceptions import ArtifactNotFoundException, ContractNotDeployedException
from config import settings
from database import models
from migrations.DataClass import ContractArtifact
from node.DataClass import TransactionOptions, to_hex_string


def load_artifact(contract_name: str, build_directory: Optional[str] = None) -> ContractArtifact:
    """
    :param contract_name: Name of the compiled contract, e.g. CryptoCardsPayroll
    :param build_directory: Directory holding <contract_name>.json build output.
    :return: ContractArtifact with abi and bytecode.
    """
    path = os.path.join(build_directory or settings.BUILD_DIRECTORY, f'{contract_name}.json')

    try:
        with open(path, encoding='utf-8') as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise ArtifactNotFoundException(f'No build artifact for {contract_name} at {path}')
    except JSONDecodeError:
        raise ArtifactNotFoundException(f'Build artifact for {contract_name} is not valid JSON')

    try:
        return ContractArtifact(contract_name=raw.get('contractName', contract_name), abi=raw['abi'],
                                bytecode=raw['bytecode'])
    except (KeyError, ValidationError):
        raise ArtifactNotFoundException(f'Build artifact for {contract_name} is missing abi or bytecode')


class Deployer:
    def __init__(self, db: Session, client, network: str, build_directory: Optional[str] = None):
        self.db = db
        self.client = client
        self.network = network
        self.build_directory = build_directory
        self.last_receipt = None

    def deploy(self, contract_name: str, tx_options: TransactionOptions):
        artifact = load_artifact(contract_name, self.build_directory)
        receipt = self.client.deploy_contract(artifact.abi, artifact.bytecode, tx_options)
        self.last_receipt = receipt

        address = receipt['contractAddress']
        deployment = models.Deployment(network=self.network, contract_name=contract_name, address=address,
                                       tx_hash=to_hex_string(receipt['transactionHash']))
        self.db.add(deployment)
        self.db.commit()

        return self.client.contract_at(artifact.abi, address)

    def deployed(self, contract_name: str):
        deployment = self.db.query(models.Deployment) \
            .filter(models.Deployment.network == self.network,
                    models.Deployment.contract_name == contract_name) \
            .order_by(models.Deployment.deployment_id.desc()) \
            .first()

        if not deployment:
            raise ContractNotDeployedException(f'{contract_name} has not been deployed to {self.network}')

        artifact = load_artifact(contract_name, self.build_directory)
        return self.client.contract_at(artifact.abi, deployment.address)
