"""
User Model
Participants and admins share one table, split by role
"""

from sqlalchemy import Column, String, Integer, BigInteger, DateTime, func
from app.database import Base


class User(Base):
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    
    # Profile
    name = Column(String(100), nullable=False)
    college = Column(String(200), nullable=True)
    department = Column(String(100), nullable=True)
    reg_no = Column(String(50), nullable=True)
    year = Column(String(10), nullable=True)
    phone = Column(String(10), nullable=True)
    accommodation = Column(String(20), nullable=True)
    
    # Login credentials
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(10), nullable=False, default="user")  # 'user' or 'admin'
    
    # Pass and payment
    pass_type = Column(String(20), nullable=True)  # 'single' restricts to one event
    transaction_id = Column(String(12), nullable=True)
    payment_status = Column(String(20), nullable=False, default="pending", server_default="pending")
    qr_code_id = Column(String(50), unique=True, nullable=True, index=True)
    
    # Password reset (expiry in epoch milliseconds)
    reset_token = Column(String(64), nullable=True)
    reset_expires = Column(BigInteger, nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now())
