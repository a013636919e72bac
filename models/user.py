from sqlalchemy import Column, String, DateTime, func
from .base import Base, utcnow


class User(Base):
     """
     User model - accounts owned by the user subsystem.
     Tenants are users with role='tenant'; finance only reads their email.
     """
     __tablename__ = "users"

     id = Column(String(64), primary_key=True)
     name = Column(String(200), nullable=False)
     email = Column(String(255), unique=True, nullable=False, index=True)
     role = Column(String(50), default="tenant", nullable=False)  # owner, admin, tenant, supplier
     created_at = Column(DateTime, default=utcnow, server_default=func.now(), nullable=False)

     def __repr__(self):
          return f"<User(id='{self.id}', email='{self.email}', role='{self.role}')>"
