from sqlalchemy.orm import as_declarative, declared_attr
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import DateTime, Integer, func


@as_declarative()
class Base:
    __abstract__ = True  # Prevents creating a table for the base class

    id: Mapped[int]

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    # Integer surrogate key; natural keys (email/code) are declared per model
    id = mapped_column(Integer, primary_key=True, autoincrement=True, index=True)
    created_at = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
