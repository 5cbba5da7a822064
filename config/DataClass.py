from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NetworkConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    gas_price: int = Field(ge=0)
    gas: Optional[int] = Field(default=None, gt=0)
    chain_id: Optional[int] = None
    rpc_env: str = 'SERVER_ADDRESS'
