from sqlalchemy import Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class APIRequestLog(Base):
    __tablename__ = "api_request_logs"

    request_id: Mapped[str] = mapped_column(String, primary_key=True)  # uuid4
    user_id: Mapped[int] = mapped_column(Integer, index=True)
    timestamp: Mapped[str] = mapped_column(String)  # ISO-8601, UTC

    # Always stored with the api_key value masked
    api_endpoint: Mapped[str] = mapped_column(String)
    response_time: Mapped[int] = mapped_column(Integer)  # ms
    status: Mapped[str] = mapped_column(String)  # "Success" / "Failed"
    error_code: Mapped[int | None] = mapped_column(Integer, nullable=True)
