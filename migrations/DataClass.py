from typing import Optional, Tuple

from pydantic import BaseModel

from node.DataClass import TxReceiptSummary


class ContractArtifact(BaseModel):
    contract_name: str
    abi: list
    bytecode: str


class OperationRecord(BaseModel):
    description: str
    nonce: int
    receipt: TxReceiptSummary


class MigrationResult(BaseModel):
    migration: int
    name: str
    network: Optional[str] = None
    success: bool
    operations: Tuple[OperationRecord, ...] = ()
    error: Optional[str] = None
    log: Tuple[str, ...] = ()


class MigrationRequest(BaseModel):
    network: str
    strict_network: bool = False
