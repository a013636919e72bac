from sqlalchemy import Column, Integer, String
from .base import Base


class Counter(Base):
     """
     Sequence state for human-readable document codes.

     One row per document kind ('invoice', 'payment', ...). seq is the last
     number issued; the code is prefix + seq zero-padded to pad digits.
     """
     __tablename__ = "counters"

     kind = Column(String(50), primary_key=True)
     seq = Column(Integer, default=0, nullable=False)
     prefix = Column(String(20), default="", nullable=False)
     pad = Column(Integer, default=3, nullable=False)

     def render(self, default_prefix: str = "", default_pad: int = 3) -> str:
          prefix = self.prefix or default_prefix
          pad = self.pad or default_pad
          return f"{prefix}{str(self.seq).zfill(pad)}"

     def __repr__(self):
          return f"<Counter(kind='{self.kind}', seq={self.seq})>"
