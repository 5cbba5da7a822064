import datetime

from sqlalchemy import Column, DateTime, Integer, String

from database.DB import Base


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Deployment(Base):
    __tablename__ = "Deployment"

    deployment_id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    network = Column(String, nullable=False, index=True)
    contract_name = Column(String, nullable=False, index=True)
    address = Column(String, nullable=False)
    tx_hash = Column(String)
    deployed_at = Column(DateTime, default=utcnow, nullable=False)

    def jsonify(self):
        result = dict()

        result['network'] = self.network
        result['contract_name'] = self.contract_name
        result['address'] = self.address
        result['tx_hash'] = self.tx_hash
        result['deployed_at'] = self.deployed_at.strftime('%Y/%m/%d %H:%M:%S')

        return result


class MigrationRecord(Base):
    __tablename__ = "MigrationRecord"

    record_id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    network = Column(String, nullable=False, index=True)
    migration = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    completed_at = Column(DateTime, default=utcnow, nullable=False)


class History(Base):
    __tablename__ = "History"

    history_id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    network = Column(String, nullable=False, index=True)
    migration = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    nonce = Column(Integer, nullable=False)
    tx_hash = Column(String, nullable=False)
    status = Column(Integer)
