# storefront/data/models/address.py
import uuid

from sqlalchemy import Column, String

from storefront.data.database import Base


class AddressModel(Base):
    """Ksiazka adresowa jest poza serwisem; checkout tylko sprawdza wlasciciela."""

    __tablename__ = "addresses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), nullable=False, index=True)

    full_name = Column(String(200), nullable=False)
    line1 = Column(String(255), nullable=False)
    line2 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=False)
    country = Column(String(2), nullable=False, default="IN")
    phone = Column(String(32), nullable=True)
