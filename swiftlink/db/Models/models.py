from sqlalchemy import BigInteger, Column, Index, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Link(Base):
    __tablename__ = "links"

    code = Column(String, primary_key=True)
    url = Column(String, nullable=False)
    # Unix timestamp (seconds), set by the inserting caller
    created_at = Column(BigInteger, nullable=False)

    # One code per URL: a concurrent insert of the same URL loses on this index
    __table_args__ = (Index("ix_links_url", "url", unique=True),)
