# cart is an in-memory container owned by one customer session. Lines are
# immutable snapshots; the cart store replaces a line instead of mutating it,
# so a CartDTO handed out earlier never changes under its holder.
from pydantic import BaseModel, ConfigDict, computed_field

from models.product import ProductDTO, CustomizationDTO


class LineItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    product: ProductDTO
    unit_price: float
    quantity: int
    customization: CustomizationDTO = CustomizationDTO()

    @computed_field
    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity

    def matches(self, product: ProductDTO, customization: CustomizationDTO) -> bool:
        return self.product.id == product.id and self.customization == customization


class CartDTO(BaseModel):
    items: list[LineItemDTO] = []

    @computed_field
    @property
    def subtotal(self) -> float:
        return sum((item.subtotal for item in self.items), 0.0)

    @computed_field
    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0
