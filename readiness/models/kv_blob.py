"""
KeyValueBlob - one opaque binary value per (namespace, key).

Backs SqlBlobStore. Each CheckInStore writes exactly one row: its
serialized check-in collection. The namespace keeps store instances
(and test runs) from sharing a slot.
"""
from datetime import datetime
from sqlalchemy import Integer, String, LargeBinary, DateTime, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from readiness.db.base import Base


class KeyValueBlob(Base):
    __tablename__ = "kv_blobs"
    __table_args__ = (UniqueConstraint("namespace", "key", name="uq_kv_blob_namespace_key"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    namespace: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    key: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
