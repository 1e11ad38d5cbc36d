from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from taskdeck.core.database import Base
import bcrypt

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=False, index=True)
    # vide pour les comptes créés sans identifiants
    password_hash = Column(String, nullable=True)
    image = Column(String, nullable=True)
    theme = Column(String, default="system", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # suppression de compte: enfants supprimés explicitement avant le user
    categories = relationship("Category", back_populates="user", passive_deletes=True)
    tasks = relationship("Task", back_populates="user", passive_deletes=True)

    def set_password(self, password: str):
        self.password_hash = bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()

    def verify_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        return bcrypt.checkpw(password.encode(), self.password_hash.encode())
