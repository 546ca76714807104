import time
import uuid
from typing import Any, Dict, List, Optional

from ..models.models import ADDRESS_FIELDS, Address
from ..utils.constants import ADDRESSES_KEY, SELECTED_ADDRESS_KEY
from .storage import LocalStorage, Store


class AddressValidationError(ValueError):
    def __init__(self, missing: List[str]):
        self.missing = missing
        super().__init__(f"Missing required fields: {', '.join(missing)}")


def validate_address(data: Dict[str, Any]) -> None:
    missing = [name for name in ADDRESS_FIELDS if not str(data.get(name) or '').strip()]
    if missing:
        raise AddressValidationError(missing)


def new_address_id() -> str:
    return f"{int(time.time() * 1000)}{uuid.uuid4().hex[:9]}"


class AddressStore(Store):
    """Address book with a single default and an independent checkout selection.

    The at-most-one-default rule is kept here by the mutators; storage just
    holds whatever list it is given.
    """

    def __init__(self, storage: LocalStorage):
        super().__init__(storage)
        self.addresses: List[Address] = [Address.from_dict(d) for d in self.load_list(ADDRESSES_KEY)]
        self.selected_id: Optional[str] = None
        saved = self.storage.load(SELECTED_ADDRESS_KEY, None)
        if isinstance(saved, str) and self.get(saved):
            self.selected_id = saved
        elif self.addresses:
            self.selected_id = (self.default or self.addresses[0]).id

    def _persist(self) -> None:
        self.storage.save(ADDRESSES_KEY, [a.to_dict() for a in self.addresses])
        self.storage.save(SELECTED_ADDRESS_KEY, self.selected_id)

    def get(self, address_id: str) -> Optional[Address]:
        return next((a for a in self.addresses if a.id == address_id), None)

    @property
    def default(self) -> Optional[Address]:
        return next((a for a in self.addresses if a.is_default), None)

    @property
    def selected(self) -> Optional[Address]:
        return self.get(self.selected_id) if self.selected_id else None

    def _clear_default(self, keep_id: Optional[str] = None) -> None:
        for address in self.addresses:
            if address.id != keep_id:
                address.is_default = False

    def add(self, data: Dict[str, Any]) -> Address:
        address = Address.from_dict({**data, 'id': new_address_id()})
        was_empty = not self.addresses
        if address.is_default:
            self._clear_default()
        self.addresses.append(address)
        if was_empty or address.is_default:
            self.selected_id = address.id
        self._persist()
        self.notify("Address added successfully!")
        return address

    def update(self, address_id: str, data: Dict[str, Any]) -> Optional[Address]:
        index = next((i for i, a in enumerate(self.addresses) if a.id == address_id), None)
        if index is None:
            return None
        merged = {**self.addresses[index].to_dict(), **data, 'id': address_id}
        updated = Address.from_dict(merged)
        self.addresses[index] = updated
        if updated.is_default:
            self._clear_default(keep_id=address_id)
        self._persist()
        self.notify("Address updated successfully!")
        return updated

    def set_default(self, address_id: str) -> Optional[Address]:
        return self.update(address_id, {'isDefault': True})

    def delete(self, address_id: str) -> None:
        removed = self.get(address_id)
        self.addresses = [a for a in self.addresses if a.id != address_id]

        if removed and removed.is_default and self.addresses:
            self.addresses[0].is_default = True
        if self.selected_id == address_id:
            self.selected_id = self.addresses[0].id if self.addresses else None

        self._persist()
        self.notify("Address deleted", 'info')

    def select(self, address_id: str) -> Optional[Address]:
        address = self.get(address_id)
        if address:
            self.selected_id = address.id
            self.storage.save(SELECTED_ADDRESS_KEY, self.selected_id)
        return address
