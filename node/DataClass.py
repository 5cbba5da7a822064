from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from web3 import Web3


def to_hex_string(value) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return Web3.to_hex(value)


class TransactionOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: str = Field(alias='from')
    nonce: int = Field(ge=0)
    gas_price: int = Field(alias='gasPrice', ge=0)
    gas: Optional[int] = None
    value: Optional[int] = Field(default=None, ge=0)

    def to_transaction(self) -> dict:
        """
        :return: Transaction dict for web3, without the fields that are not set.
        """
        return self.model_dump(by_alias=True, exclude_none=True)


class Payee(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    shares: int = Field(gt=0)


class TxReceiptSummary(BaseModel):
    tx_hash: str
    block_number: Optional[int] = None
    gas_used: Optional[int] = None
    status: Optional[int] = None
    contract_address: Optional[str] = None

    @classmethod
    def from_receipt(cls, receipt) -> 'TxReceiptSummary':
        return cls(
            tx_hash=to_hex_string(receipt['transactionHash']),
            block_number=receipt.get('blockNumber'),
            gas_used=receipt.get('gasUsed'),
            status=receipt.get('status'),
            contract_address=receipt.get('contractAddress'),
        )
