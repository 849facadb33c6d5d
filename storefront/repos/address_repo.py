# storefront/repos/address_repo.py
from typing import Dict, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.address import AddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_owned(self, user_id: str, address_ids: Iterable[str]) -> Dict[str, AddressModel]:
        """Kilka adresow jednym zapytaniem, tylko te nalezace do usera."""
        ids = set(address_ids)
        rows = self.db.execute(
            select(AddressModel).where(
                AddressModel.id.in_(ids),
                AddressModel.user_id == user_id,
            )
        ).scalars().all()
        return {row.id: row for row in rows}
