"""
Cart kept on the client for shoppers who are not logged in.

Lines follow the same rule as the server cart: adding a product that is
already present bumps its quantity. After login the lines are pushed to
`/cart/merge` and the local cart is emptied.
"""
from dataclasses import asdict, dataclass
from typing import Optional

from shared.pricing import calculate_totals


@dataclass
class GuestCartLine:
    product_id: int
    title: str
    price: float
    quantity: int = 1
    image: Optional[str] = None


class GuestCart:

    def __init__(self, lines: Optional[list[GuestCartLine]] = None):
        self.lines: list[GuestCartLine] = list(lines or [])

    def _find(self, product_id: int) -> Optional[GuestCartLine]:
        return next((line for line in self.lines if line.product_id == product_id), None)

    def add(self, product: dict, quantity: int = 1) -> GuestCartLine:
        """Adds a product as returned by the products API."""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        line = self._find(product["id"])
        if line:
            line.quantity += quantity
            return line
        line = GuestCartLine(
            product_id=product["id"],
            title=product["title"],
            price=product["price"],
            quantity=quantity,
            image=product.get("image"),
        )
        self.lines.append(line)
        return line

    def update(self, product_id: int, quantity: int):
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        line = self._find(product_id)
        if line is None:
            raise KeyError(product_id)
        line.quantity = quantity

    def remove(self, product_id: int):
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def clear(self):
        self.lines = []

    def totals(self) -> dict:
        return calculate_totals(self.lines)

    def merge_payload(self) -> dict:
        return {"items": [{"product_id": line.product_id, "quantity": line.quantity} for line in self.lines]}

    def to_list(self) -> list[dict]:
        return [asdict(line) for line in self.lines]

    def __len__(self):
        return len(self.lines)
